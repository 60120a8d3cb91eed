"""
Endpoints de capacidad diaria: consulta, métricas, alertas y ajustes.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from hubinfecto.api.deps import get_record_store, get_snapshot, get_today
from hubinfecto.config import Settings, get_settings
from hubinfecto.core.exceptions import NotFoundException, ValidationException
from hubinfecto.schemas.capacity import (
    CapacityAlert,
    CapacityCreate,
    CapacityDayResponse,
    CapacityUpdate,
    DailyCapacityData,
    WeeklyCapacityStats,
)
from hubinfecto.schemas.snapshot import CapacityWriteResponse
from hubinfecto.services import agenda_service, capacity_service, dashboard_service, sync_service
from hubinfecto.services.record_store import RecordStore
from hubinfecto.services.snapshot import ClinicSnapshot

router = APIRouter()


def _day_or_404(snapshot: ClinicSnapshot, target_date: date) -> DailyCapacityData:
    capacity = capacity_service.capacity_for_date(snapshot.capacity, target_date)
    if capacity is None:
        raise NotFoundException(detail=f"Sin capacidad configurada para {target_date}")
    return capacity


@router.get("", response_model=list[DailyCapacityData])
async def list_capacity(
    date_from: date | None = Query(None, description="Desde fecha (YYYY-MM-DD)"),
    date_to: date | None = Query(None, description="Hasta fecha (YYYY-MM-DD)"),
    snapshot: ClinicSnapshot = Depends(get_snapshot),
):
    if date_from and date_to and date_from > date_to:
        raise ValidationException("date_from debe ser anterior o igual a date_to")
    return capacity_service.capacity_in_range(snapshot.capacity, date_from, date_to)


@router.get("/weekly-stats", response_model=WeeklyCapacityStats)
async def weekly_stats(
    reference: date | None = Query(None, alias="date", description="Cualquier día de la semana"),
    today: date = Depends(get_today),
    snapshot: ClinicSnapshot = Depends(get_snapshot),
):
    """Totales de capacidad de lunes a viernes de la semana de `date`."""
    week = agenda_service.work_week(reference or today)
    records = capacity_service.capacity_in_range(snapshot.capacity, week[0], week[-1])
    return capacity_service.weekly_stats(records)


@router.get("/{target_date}", response_model=CapacityDayResponse)
async def get_capacity_day(
    target_date: date,
    snapshot: ClinicSnapshot = Depends(get_snapshot),
    settings: Settings = Depends(get_settings),
):
    """Capacidad del día con remanentes, utilización y alertas."""
    return dashboard_service.capacity_day(
        _day_or_404(snapshot, target_date),
        threshold=settings.CAPACITY_WARNING_THRESHOLD,
        suppress_under_control=settings.SUPPRESS_UNDER_CONTROL_WITH_ALERTS,
    )


@router.get("/{target_date}/alerts", response_model=list[CapacityAlert])
async def get_capacity_alerts(
    target_date: date,
    snapshot: ClinicSnapshot = Depends(get_snapshot),
    settings: Settings = Depends(get_settings),
):
    day = dashboard_service.capacity_day(
        _day_or_404(snapshot, target_date),
        threshold=settings.CAPACITY_WARNING_THRESHOLD,
        suppress_under_control=settings.SUPPRESS_UNDER_CONTROL_WITH_ALERTS,
    )
    return day.alerts


@router.post("", response_model=CapacityWriteResponse, status_code=201)
async def create_capacity(
    data: CapacityCreate,
    snapshot: ClinicSnapshot = Depends(get_snapshot),
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
):
    """Configura los cupos de un día nuevo (409 si ya tiene capacidad)."""
    return await sync_service.create_capacity(
        snapshot, store, data, rollback=settings.ROLLBACK_ON_SYNC_FAILURE
    )


@router.patch("/{target_date}", response_model=CapacityWriteResponse)
async def update_capacity(
    target_date: date,
    data: CapacityUpdate,
    snapshot: ClinicSnapshot = Depends(get_snapshot),
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
):
    """
    Ajusta parcialmente los cupos u ocupación de un día.
    El sobreturno (current_scheduled > max_appointments) se acepta.
    """
    return await sync_service.update_capacity(
        snapshot, store, target_date, data, rollback=settings.ROLLBACK_ON_SYNC_FAILURE
    )
