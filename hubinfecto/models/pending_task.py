"""
Modelo PendingTask — Pendientes de seguimiento por paciente
(estudios, controles, cultivos).
"""

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from hubinfecto.database import Base


class TaskType(str, enum.Enum):
    ESTUDIO = "estudio"
    CONTROL = "control"
    CULTIVO = "cultivo"
    SEGUIMIENTO = "seguimiento"


class TaskPriority(str, enum.Enum):
    """Prioridad de un pendiente, ordenada de menor a mayor."""
    BAJA = "baja"
    MEDIA = "media"
    ALTA = "alta"
    URGENTE = "urgente"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK: dict[TaskPriority, int] = {
    TaskPriority.BAJA: 0,
    TaskPriority.MEDIA: 1,
    TaskPriority.ALTA: 2,
    TaskPriority.URGENTE: 3,
}


class TaskStatus(str, enum.Enum):
    PENDIENTE = "pendiente"
    EN_PROGRESO = "en_progreso"
    COMPLETADA = "completada"


def toggled_task_status(current: TaskStatus) -> TaskStatus:
    """completada → pendiente; cualquier otro estado → completada."""
    if current == TaskStatus.COMPLETADA:
        return TaskStatus.PENDIENTE
    return TaskStatus.COMPLETADA


class PendingTask(Base):
    __tablename__ = "pending_tasks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    patient_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("patients.id"), nullable=False
    )
    patient_name: Mapped[str | None] = mapped_column(String(200))

    type: Mapped[TaskType] = mapped_column(
        Enum(TaskType, name="task_type"), nullable=False
    )
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    priority: Mapped[TaskPriority] = mapped_column(
        Enum(TaskPriority, name="task_priority"),
        nullable=False,
        default=TaskPriority.MEDIA,
    )
    status: Mapped[TaskStatus] = mapped_column(
        Enum(TaskStatus, name="task_status"),
        nullable=False,
        default=TaskStatus.PENDIENTE,
    )
    assigned_doctor: Mapped[str] = mapped_column(String(200), nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    __table_args__ = (
        Index("idx_task_patient", "patient_id"),
        Index("idx_task_status", "status", "priority"),
    )

    def __repr__(self) -> str:
        return f"<PendingTask {self.id} [{self.status.value}] {self.description}>"
