"""
Schemas para DailyCapacity, métricas derivadas y alertas de capacidad.
"""

import enum
from datetime import date

from pydantic import BaseModel, Field, model_validator


# ── Registro de capacidad ────────────────────────────

class DailyCapacityData(BaseModel):
    """Cupos de un día tal como los entrega el backend."""
    date: date
    max_appointments: int = Field(0, ge=0)
    max_spontaneous: int = Field(0, ge=0)
    predicted_spontaneous: int = Field(0, ge=0)
    current_scheduled: int = Field(0, ge=0)
    current_spontaneous: int = Field(0, ge=0)

    model_config = {"from_attributes": True, "frozen": True}


class CapacityCreate(DailyCapacityData):
    """Alta de capacidad: exige espontáneas dentro del total."""

    @model_validator(mode="after")
    def spontaneous_within_total(self) -> "CapacityCreate":
        if self.max_spontaneous > self.max_appointments:
            raise ValueError("max_spontaneous no puede superar max_appointments")
        return self


class CapacityUpdate(BaseModel):
    """Actualización parcial de los cupos de un día."""
    max_appointments: int | None = Field(None, ge=0)
    max_spontaneous: int | None = Field(None, ge=0)
    predicted_spontaneous: int | None = Field(None, ge=0)
    current_scheduled: int | None = Field(None, ge=0)
    current_spontaneous: int | None = Field(None, ge=0)


# ── Métricas derivadas ───────────────────────────────

class CapacityMetrics(BaseModel):
    """Métricas de un día. Los remanentes pueden ser negativos (sobreturno)."""
    remaining_appointment_slots: int
    remaining_spontaneous_slots: int
    scheduled_utilization: float = Field(..., description="Fracción 0..1 (o más con sobreturno)")
    spontaneous_utilization: float
    scheduled_pct: float = Field(..., description="Para barras de progreso")
    spontaneous_pct: float


class WeeklyCapacityStats(BaseModel):
    """Agregado de capacidad de un período."""
    total_capacity: int = 0
    total_scheduled: int = 0
    total_predicted_spontaneous: int = 0
    total_max_spontaneous: int = 0
    available_slots: int = 0
    capacity_utilization_pct: int = Field(0, description="Porcentaje entero redondeado")


# ── Alertas ──────────────────────────────────────────

class AlertLevel(str, enum.Enum):
    INFO = "info"
    CAUTION = "caution"
    WARNING = "warning"
    DANGER = "danger"


class CapacityAlert(BaseModel):
    code: str
    level: AlertLevel
    message: str


class CapacityDayResponse(BaseModel):
    """Capacidad de un día con métricas y alertas calculadas."""
    capacity: DailyCapacityData
    metrics: CapacityMetrics
    alerts: list[CapacityAlert]
