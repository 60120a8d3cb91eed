"""
Schemas para Patient.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class PatientBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=200)
    dni: str = Field(
        ..., min_length=7, max_length=15,
        description="DNI o documento de identidad"
    )
    phone: str = Field("", max_length=30)
    email: str = Field("", max_length=255)
    address: str = Field("", max_length=500)
    birth_date: date | None = None

    @field_validator("dni")
    @classmethod
    def validate_dni(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("DNI no puede estar vacío")
        return cleaned


class PatientCreate(PatientBase):
    pass


class PatientData(PatientBase):
    """Paciente en el snapshot en memoria."""
    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True, "frozen": True}


class PatientListResponse(BaseModel):
    items: list[PatientData]
    total: int


class PatientWriteResponse(BaseModel):
    record: PatientData
    synced: bool
    sync_error: str | None = None
    rolled_back: bool = False
    snapshot_version: int
