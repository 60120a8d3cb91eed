"""
Schemas para Appointment — turnos de la agenda.
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from hubinfecto.models.appointment import AppointmentStatus

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class AppointmentBase(BaseModel):
    patient_id: UUID | None = None
    patient_name: str = Field(..., min_length=2, max_length=200)
    doctor_name: str = Field(..., min_length=2, max_length=200)
    date: date
    time: str = Field(..., pattern=TIME_PATTERN, description="Hora local HH:MM")
    notes: str = Field("", max_length=2000)
    is_spontaneous: bool = False
    is_new_patient: bool = False


class AppointmentCreate(AppointmentBase):
    status: AppointmentStatus = AppointmentStatus.SCHEDULED


class AppointmentData(AppointmentBase):
    """Turno en el snapshot en memoria."""
    id: UUID
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

    model_config = {"from_attributes": True, "frozen": True}


class AppointmentWriteResponse(BaseModel):
    """Resultado de una escritura optimista sobre un turno."""
    record: AppointmentData
    synced: bool
    sync_error: str | None = None
    rolled_back: bool = False
    snapshot_version: int
