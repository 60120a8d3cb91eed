"""
Servicio de agenda: filtros por día, semana laboral (lunes a viernes),
grilla mensual, segmentación de turnos y agrupación de pendientes
por paciente. Todo opera sobre listas ya cargadas en memoria.
"""

import calendar
from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from hubinfecto.models.appointment import AppointmentStatus
from hubinfecto.models.pending_task import TaskPriority, TaskStatus
from hubinfecto.schemas.agenda import (
    AgendaDay,
    MonthCalendarResponse,
    MonthCell,
    PatientTaskGroup,
    SegmentationCounts,
    WeekAgendaResponse,
    WeekSummary,
)
from hubinfecto.schemas.appointment import AppointmentData
from hubinfecto.schemas.task import PendingTaskData

WORK_WEEK_DAYS = 5
MONTH_CELL_PREVIEW = 3


# ── Filtros por día ──────────────────────────────────

def appointments_for_day(
    appointments: Iterable[AppointmentData], day: date
) -> list[AppointmentData]:
    """Turnos cuyo día calendario es `day` (la hora no interviene)."""
    return [a for a in appointments if a.date == day]


def appointments_in_range(
    appointments: Iterable[AppointmentData],
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[AppointmentData]:
    """Turnos dentro de [date_from, date_to], ordenados por fecha y hora."""
    selected = [
        a for a in appointments
        if (date_from is None or a.date >= date_from)
        and (date_to is None or a.date <= date_to)
    ]
    return sorted(selected, key=lambda a: (a.date, a.time))


# ── Semana laboral ───────────────────────────────────

def week_start(reference: date) -> date:
    """Lunes de la semana de `reference` (el mismo día si ya es lunes)."""
    return reference - timedelta(days=reference.weekday())


def work_week(reference: date) -> list[date]:
    """Los cinco días lunes-viernes de la semana de `reference`."""
    monday = week_start(reference)
    return [monday + timedelta(days=i) for i in range(WORK_WEEK_DAYS)]


def week_summary(
    appointments: Iterable[AppointmentData], days: Sequence[date]
) -> WeekSummary:
    """Contadores de los turnos que caen en alguno de `days`."""
    day_set = set(days)
    in_week = [a for a in appointments if a.date in day_set]
    return WeekSummary(
        total=len(in_week),
        completed=sum(1 for a in in_week if a.status == AppointmentStatus.COMPLETED),
        spontaneous=sum(1 for a in in_week if a.is_spontaneous),
        new_patients=sum(1 for a in in_week if a.is_new_patient),
    )


def week_agenda(
    appointments: Sequence[AppointmentData], reference: date
) -> WeekAgendaResponse:
    """Agenda de lunes a viernes con navegación a semana anterior/siguiente."""
    days = work_week(reference)
    return WeekAgendaResponse(
        week_start=days[0],
        week_end=days[-1],
        previous_week=reference - timedelta(days=7),
        next_week=reference + timedelta(days=7),
        days=[
            AgendaDay(
                date=day,
                appointments=sorted(
                    appointments_for_day(appointments, day), key=lambda a: a.time
                ),
            )
            for day in days
        ],
        summary=week_summary(appointments, days),
    )


# ── Grilla mensual ───────────────────────────────────

def month_grid_days(reference: date) -> list[date]:
    """
    Días de la grilla mensual: desde el domingo anterior (o igual) al
    primer día del mes hasta el sábado posterior (o igual) al último.
    """
    first = reference.replace(day=1)
    last = reference.replace(day=calendar.monthrange(reference.year, reference.month)[1])
    # weekday(): lunes=0 ... domingo=6
    start = first - timedelta(days=(first.weekday() + 1) % 7)
    end = last + timedelta(days=(5 - last.weekday()) % 7)
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def month_calendar(
    appointments: Sequence[AppointmentData],
    reference: date,
    today: date | None = None,
) -> MonthCalendarResponse:
    days = month_grid_days(reference)
    cells = []
    for day in days:
        day_appts = sorted(appointments_for_day(appointments, day), key=lambda a: a.time)
        cells.append(
            MonthCell(
                date=day,
                in_current_month=(day.month == reference.month and day.year == reference.year),
                is_today=(day == today),
                appointments=day_appts[:MONTH_CELL_PREVIEW],
                more_count=max(len(day_appts) - MONTH_CELL_PREVIEW, 0),
            )
        )

    return MonthCalendarResponse(
        month_start=reference.replace(day=1),
        month_end=reference.replace(
            day=calendar.monthrange(reference.year, reference.month)[1]
        ),
        cells=cells,
    )


# ── Segmentación ─────────────────────────────────────

def segmentation_counts(appointments: Sequence[AppointmentData]) -> SegmentationCounts:
    """Nuevos/recitados es una partición; espontáneas es independiente."""
    new_patients = sum(1 for a in appointments if a.is_new_patient)
    return SegmentationCounts(
        total=len(appointments),
        new_patients=new_patients,
        returning_patients=len(appointments) - new_patients,
        spontaneous=sum(1 for a in appointments if a.is_spontaneous),
        completed=sum(1 for a in appointments if a.status == AppointmentStatus.COMPLETED),
    )


# ── Pendientes por paciente ──────────────────────────

def proximity_days(appointment_date: date, today: date) -> int:
    """Días (con signo) entre el turno y hoy; negativo si ya pasó."""
    return (appointment_date - today).days


def group_tasks_by_patient(
    appointments: Sequence[AppointmentData],
    tasks: Sequence[PendingTaskData],
    today: date,
) -> list[PatientTaskGroup]:
    """
    Asocia cada turno con los pendientes de su paciente y ordena por
    proximidad ascendente. `sorted` es estable: a igual proximidad se
    conserva el orden de entrada.
    """
    groups = []
    for appointment in appointments:
        patient_tasks = [
            t for t in tasks
            if appointment.patient_id is not None and t.patient_id == appointment.patient_id
        ]
        groups.append(
            PatientTaskGroup(
                appointment=appointment,
                tasks=patient_tasks,
                proximity_days=proximity_days(appointment.date, today),
                completed_count=sum(
                    1 for t in patient_tasks if t.status == TaskStatus.COMPLETADA
                ),
                urgent_count=sum(
                    1 for t in patient_tasks if t.priority == TaskPriority.URGENTE
                ),
            )
        )
    return sorted(groups, key=lambda g: g.proximity_days)
