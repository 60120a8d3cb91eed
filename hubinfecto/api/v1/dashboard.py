"""
Endpoint del panel de inicio.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from hubinfecto.api.deps import get_snapshot, get_today
from hubinfecto.config import Settings, get_settings
from hubinfecto.schemas.agenda import HomeDashboardResponse
from hubinfecto.services import dashboard_service
from hubinfecto.services.snapshot import ClinicSnapshot

router = APIRouter()


@router.get("/home", response_model=HomeDashboardResponse)
async def home_dashboard(
    target_date: date | None = Query(None, alias="today", description="Fecha de hoy (YYYY-MM-DD)"),
    default_today: date = Depends(get_today),
    snapshot: ClinicSnapshot = Depends(get_snapshot),
    settings: Settings = Depends(get_settings),
):
    """
    Turnos de hoy, capacidad del día con alertas, estadísticas semanales,
    distribución nuevos/recitados/espontáneas y pendientes por paciente.
    """
    return dashboard_service.build_home_dashboard(
        snapshot,
        target_date or default_today,
        threshold=settings.CAPACITY_WARNING_THRESHOLD,
        suppress_under_control=settings.SUPPRESS_UNDER_CONTROL_WITH_ALERTS,
    )
