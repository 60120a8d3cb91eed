"""
Servicio de pacientes: búsqueda en el registro cargado.
"""

from collections.abc import Iterable

from hubinfecto.schemas.patient import PatientData, PatientListResponse


def filter_patients(
    patients: Iterable[PatientData],
    name: str = "",
    dni: str = "",
) -> list[PatientData]:
    """Nombre sin distinguir mayúsculas; DNI por coincidencia parcial exacta."""
    name_q = name.lower()
    return [p for p in patients if name_q in p.name.lower() and dni in p.dni]


def search_patients(
    patients: Iterable[PatientData], name: str = "", dni: str = ""
) -> PatientListResponse:
    items = filter_patients(patients, name=name, dni=dni)
    return PatientListResponse(items=items, total=len(items))
