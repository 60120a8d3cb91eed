"""
Servicio de pendientes: filtros del listado, contadores y orden por prioridad.
"""

from collections.abc import Iterable, Sequence

from hubinfecto.models.pending_task import TaskPriority, TaskStatus
from hubinfecto.schemas.task import PendingTaskData, TaskListResponse


def filter_tasks(
    tasks: Iterable[PendingTaskData],
    patient: str = "",
    doctor: str = "",
) -> list[PendingTaskData]:
    """Coincidencia parcial, sin distinguir mayúsculas, por paciente y por médico."""
    patient_q = patient.lower()
    doctor_q = doctor.lower()
    return [
        t for t in tasks
        if patient_q in (t.patient_name or "").lower()
        and doctor_q in t.assigned_doctor.lower()
    ]


def sort_by_priority(tasks: Sequence[PendingTaskData]) -> list[PendingTaskData]:
    """Urgentes primero; a igual prioridad se conserva el orden original."""
    return sorted(tasks, key=lambda t: t.priority.rank, reverse=True)


def urgent_pending_count(tasks: Iterable[PendingTaskData]) -> int:
    return sum(
        1 for t in tasks
        if t.priority == TaskPriority.URGENTE and t.status == TaskStatus.PENDIENTE
    )


def build_task_list(
    tasks: Sequence[PendingTaskData],
    *,
    patient: str = "",
    doctor: str = "",
    by_priority: bool = False,
) -> TaskListResponse:
    items = filter_tasks(tasks, patient=patient, doctor=doctor)
    if by_priority:
        items = sort_by_priority(items)

    return TaskListResponse(
        items=items,
        total=len(items),
        urgent=sum(1 for t in items if t.priority == TaskPriority.URGENTE),
        completed=sum(1 for t in items if t.status == TaskStatus.COMPLETADA),
    )
