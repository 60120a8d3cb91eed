"""
Endpoints de pendientes: listado filtrado, alta y toggle completada.
"""

import enum
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from hubinfecto.api.deps import get_record_store, get_snapshot
from hubinfecto.config import Settings, get_settings
from hubinfecto.schemas.task import TaskCreate, TaskListResponse, TaskWriteResponse
from hubinfecto.services import sync_service, task_service
from hubinfecto.services.record_store import RecordStore
from hubinfecto.services.snapshot import ClinicSnapshot

router = APIRouter()


class TaskSort(str, enum.Enum):
    DEFAULT = "default"
    PRIORITY = "priority"


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    patient: str = Query("", description="Buscar por paciente"),
    doctor: str = Query("", description="Buscar por médico asignado"),
    sort: TaskSort = Query(TaskSort.DEFAULT, description="priority = urgentes primero"),
    snapshot: ClinicSnapshot = Depends(get_snapshot),
):
    return task_service.build_task_list(
        snapshot.tasks,
        patient=patient,
        doctor=doctor,
        by_priority=(sort == TaskSort.PRIORITY),
    )


@router.post("", response_model=TaskWriteResponse, status_code=201)
async def create_task(
    data: TaskCreate,
    snapshot: ClinicSnapshot = Depends(get_snapshot),
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
):
    return await sync_service.create_task(
        snapshot, store, data, rollback=settings.ROLLBACK_ON_SYNC_FAILURE
    )


@router.patch("/{task_id}/toggle", response_model=TaskWriteResponse)
async def toggle_task(
    task_id: UUID,
    snapshot: ClinicSnapshot = Depends(get_snapshot),
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
):
    """
    - **completada** → pendiente (limpia completed_at)
    - cualquier otro estado → completada (setea completed_at)
    """
    return await sync_service.toggle_task(
        snapshot, store, task_id, rollback=settings.ROLLBACK_ON_SYNC_FAILURE
    )
