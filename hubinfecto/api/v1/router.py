"""
Router principal de la API v1.
Agrupa todos los sub-routers de la versión 1.
"""

from fastapi import APIRouter

from hubinfecto.api.v1.agenda import router as agenda_router
from hubinfecto.api.v1.appointments import router as appointments_router
from hubinfecto.api.v1.capacity import router as capacity_router
from hubinfecto.api.v1.dashboard import router as dashboard_router
from hubinfecto.api.v1.patients import router as patients_router
from hubinfecto.api.v1.snapshot import router as snapshot_router
from hubinfecto.api.v1.tasks import router as tasks_router

api_v1_router = APIRouter()

api_v1_router.include_router(
    dashboard_router,
    prefix="/dashboard",
    tags=["Inicio"],
)

api_v1_router.include_router(
    agenda_router,
    prefix="/agenda",
    tags=["Agenda"],
)

api_v1_router.include_router(
    appointments_router,
    prefix="/appointments",
    tags=["Turnos"],
)

api_v1_router.include_router(
    capacity_router,
    prefix="/capacity",
    tags=["Capacidad"],
)

api_v1_router.include_router(
    patients_router,
    prefix="/patients",
    tags=["Pacientes"],
)

api_v1_router.include_router(
    tasks_router,
    prefix="/tasks",
    tags=["Pendientes"],
)

api_v1_router.include_router(
    snapshot_router,
    prefix="/snapshot",
    tags=["Snapshot"],
)
