"""
Schemas para PendingTask — pendientes por paciente.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from hubinfecto.models.pending_task import TaskPriority, TaskStatus, TaskType


class TaskBase(BaseModel):
    patient_id: UUID
    patient_name: str | None = Field(None, max_length=200)
    type: TaskType
    description: str = Field(..., min_length=2, max_length=500)
    due_date: date
    priority: TaskPriority = TaskPriority.MEDIA
    status: TaskStatus = TaskStatus.PENDIENTE
    assigned_doctor: str = Field(..., min_length=2, max_length=200)
    notes: str = Field("", max_length=2000)


class TaskCreate(TaskBase):
    pass


class PendingTaskData(TaskBase):
    """Pendiente en el snapshot en memoria."""
    id: UUID
    created_at: datetime
    completed_at: datetime | None = None

    model_config = {"from_attributes": True, "frozen": True}


class TaskListResponse(BaseModel):
    """Listado filtrado de pendientes con sus contadores."""
    items: list[PendingTaskData]
    total: int
    urgent: int
    completed: int


class TaskWriteResponse(BaseModel):
    record: PendingTaskData
    synced: bool
    sync_error: str | None = None
    rolled_back: bool = False
    snapshot_version: int
