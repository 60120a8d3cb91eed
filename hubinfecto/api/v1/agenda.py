"""
Endpoints de agenda: semana laboral, día y grilla mensual.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from hubinfecto.api.deps import get_snapshot, get_today
from hubinfecto.schemas.agenda import AgendaDay, MonthCalendarResponse, WeekAgendaResponse
from hubinfecto.services import agenda_service
from hubinfecto.services.snapshot import ClinicSnapshot

router = APIRouter()


@router.get("/week", response_model=WeekAgendaResponse)
async def week_agenda(
    reference: date | None = Query(None, alias="date", description="Cualquier día de la semana"),
    today: date = Depends(get_today),
    snapshot: ClinicSnapshot = Depends(get_snapshot),
):
    """Agenda de lunes a viernes de la semana que contiene `date`."""
    return agenda_service.week_agenda(snapshot.appointments, reference or today)


@router.get("/day", response_model=AgendaDay)
async def day_agenda(
    target_date: date | None = Query(None, alias="date", description="Fecha (YYYY-MM-DD)"),
    today: date = Depends(get_today),
    snapshot: ClinicSnapshot = Depends(get_snapshot),
):
    day = target_date or today
    appointments = agenda_service.appointments_for_day(snapshot.appointments, day)
    return AgendaDay(date=day, appointments=sorted(appointments, key=lambda a: a.time))


@router.get("/month", response_model=MonthCalendarResponse)
async def month_agenda(
    reference: date | None = Query(None, alias="date", description="Cualquier día del mes"),
    today: date = Depends(get_today),
    snapshot: ClinicSnapshot = Depends(get_snapshot),
):
    """Grilla mensual en semanas completas de domingo a sábado."""
    return agenda_service.month_calendar(snapshot.appointments, reference or today, today=today)
