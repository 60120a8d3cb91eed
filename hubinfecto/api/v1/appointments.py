"""
Endpoints de turnos: listado por rango, alta y toggle "visto".
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from hubinfecto.api.deps import get_record_store, get_snapshot
from hubinfecto.config import Settings, get_settings
from hubinfecto.core.exceptions import ValidationException
from hubinfecto.schemas.appointment import (
    AppointmentCreate,
    AppointmentData,
    AppointmentWriteResponse,
)
from hubinfecto.services import agenda_service, sync_service
from hubinfecto.services.record_store import RecordStore
from hubinfecto.services.snapshot import ClinicSnapshot

router = APIRouter()


@router.get("", response_model=list[AppointmentData])
async def list_appointments(
    date_from: date | None = Query(None, description="Desde fecha (YYYY-MM-DD)"),
    date_to: date | None = Query(None, description="Hasta fecha (YYYY-MM-DD)"),
    snapshot: ClinicSnapshot = Depends(get_snapshot),
):
    """Turnos del snapshot ordenados por fecha y hora."""
    if date_from and date_to and date_from > date_to:
        raise ValidationException("date_from debe ser anterior o igual a date_to")
    return agenda_service.appointments_in_range(snapshot.appointments, date_from, date_to)


@router.post("", response_model=AppointmentWriteResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    snapshot: ClinicSnapshot = Depends(get_snapshot),
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
):
    """
    Registra un turno. Se agrega al snapshot de inmediato; si el backend
    falla, `synced` es false y el turno queda sólo en memoria.
    """
    return await sync_service.create_appointment(
        snapshot, store, data, rollback=settings.ROLLBACK_ON_SYNC_FAILURE
    )


@router.patch("/{appointment_id}/toggle", response_model=AppointmentWriteResponse)
async def toggle_appointment(
    appointment_id: UUID,
    snapshot: ClinicSnapshot = Depends(get_snapshot),
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
):
    """
    Marca/desmarca un turno como visto:

    - **completed** → scheduled
    - cualquier otro estado → completed
    """
    return await sync_service.toggle_appointment(
        snapshot, store, appointment_id, rollback=settings.ROLLBACK_ON_SYNC_FAILURE
    )
