"""
Schemas para las vistas de agenda (semana laboral y mes) y el panel de inicio.
"""

from datetime import date

from pydantic import BaseModel, Field

from hubinfecto.schemas.appointment import AppointmentData
from hubinfecto.schemas.capacity import CapacityDayResponse, WeeklyCapacityStats
from hubinfecto.schemas.task import PendingTaskData


# ── Agenda semanal ───────────────────────────────────

class AgendaDay(BaseModel):
    date: date
    appointments: list[AppointmentData]


class WeekSummary(BaseModel):
    """Resumen semanal de la agenda (lunes a viernes)."""
    total: int = 0
    completed: int = 0
    spontaneous: int = 0
    new_patients: int = 0


class WeekAgendaResponse(BaseModel):
    week_start: date
    week_end: date
    previous_week: date
    next_week: date
    days: list[AgendaDay]
    summary: WeekSummary


# ── Agenda mensual ───────────────────────────────────

class MonthCell(BaseModel):
    """Una celda de la grilla mensual (semanas completas domingo-sábado)."""
    date: date
    in_current_month: bool
    is_today: bool = False
    appointments: list[AppointmentData] = Field(
        default_factory=list, description="Primeros turnos del día"
    )
    more_count: int = 0


class MonthCalendarResponse(BaseModel):
    month_start: date
    month_end: date
    cells: list[MonthCell]


# ── Panel de inicio ──────────────────────────────────

class SegmentationCounts(BaseModel):
    """Particiones de los turnos de un día."""
    total: int = 0
    new_patients: int = 0
    returning_patients: int = 0
    spontaneous: int = 0
    completed: int = 0


class PatientTaskGroup(BaseModel):
    """Turno de hoy con los pendientes de su paciente."""
    appointment: AppointmentData
    tasks: list[PendingTaskData]
    proximity_days: int
    completed_count: int = 0
    urgent_count: int = 0


class HomeSummary(BaseModel):
    urgent_pending_tasks: int = 0
    completed_today: int = 0
    spontaneous_today: int = 0


class HomeDashboardResponse(BaseModel):
    today: date
    appointments: list[AppointmentData]
    capacity: CapacityDayResponse | None = None
    weekly_stats: WeeklyCapacityStats
    segmentation: SegmentationCounts
    patient_tasks: list[PatientTaskGroup]
    summary: HomeSummary
