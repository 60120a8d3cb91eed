"""
Endpoints del registro de pacientes.
"""

from fastapi import APIRouter, Depends, Query

from hubinfecto.api.deps import get_record_store, get_snapshot
from hubinfecto.config import Settings, get_settings
from hubinfecto.schemas.patient import PatientCreate, PatientListResponse, PatientWriteResponse
from hubinfecto.services import patient_service, sync_service
from hubinfecto.services.record_store import RecordStore
from hubinfecto.services.snapshot import ClinicSnapshot

router = APIRouter()


@router.get("", response_model=PatientListResponse)
async def list_patients(
    name: str = Query("", description="Buscar por nombre"),
    dni: str = Query("", description="Buscar por DNI"),
    snapshot: ClinicSnapshot = Depends(get_snapshot),
):
    return patient_service.search_patients(snapshot.patients, name=name, dni=dni)


@router.post("", response_model=PatientWriteResponse, status_code=201)
async def create_patient(
    data: PatientCreate,
    snapshot: ClinicSnapshot = Depends(get_snapshot),
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
):
    """
    Registra un paciente (queda en memoria aunque el backend falle).
    DNI ya registrado → 409.
    """
    return await sync_service.create_patient(
        snapshot, store, data, rollback=settings.ROLLBACK_ON_SYNC_FAILURE
    )
