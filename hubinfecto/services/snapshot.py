"""
Snapshot en memoria de los registros del consultorio.

Se reemplaza completo con `refresh` (gana la última carga) y admite
mutaciones locales optimistas. Cada operación incrementa `version`.
Los registros son modelos Pydantic inmutables: las mutaciones reemplazan
el registro con `model_copy(update=...)`.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID

from hubinfecto.models.appointment import toggled_status
from hubinfecto.models.pending_task import TaskStatus, toggled_task_status
from hubinfecto.schemas.appointment import AppointmentData
from hubinfecto.schemas.capacity import DailyCapacityData
from hubinfecto.schemas.patient import PatientData
from hubinfecto.schemas.snapshot import SnapshotInfo
from hubinfecto.schemas.task import PendingTaskData
from hubinfecto.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class ClinicSnapshot:
    def __init__(
        self,
        *,
        appointments: Iterable[AppointmentData] = (),
        tasks: Iterable[PendingTaskData] = (),
        patients: Iterable[PatientData] = (),
        capacity: Iterable[DailyCapacityData] = (),
    ):
        self._appointments = list(appointments)
        self._tasks = list(tasks)
        self._patients = list(patients)
        self._capacity = list(capacity)
        self._version = 0
        self._refreshed_at: datetime | None = None

    # ── Lectura ──────────────────────────────────────

    @property
    def version(self) -> int:
        return self._version

    @property
    def refreshed_at(self) -> datetime | None:
        return self._refreshed_at

    @property
    def appointments(self) -> tuple[AppointmentData, ...]:
        return tuple(self._appointments)

    @property
    def tasks(self) -> tuple[PendingTaskData, ...]:
        return tuple(self._tasks)

    @property
    def patients(self) -> tuple[PatientData, ...]:
        return tuple(self._patients)

    @property
    def capacity(self) -> tuple[DailyCapacityData, ...]:
        return tuple(self._capacity)

    def get_appointment(self, appointment_id: UUID) -> AppointmentData | None:
        return next((a for a in self._appointments if a.id == appointment_id), None)

    def get_task(self, task_id: UUID) -> PendingTaskData | None:
        return next((t for t in self._tasks if t.id == task_id), None)

    def get_capacity(self, target_date: date) -> DailyCapacityData | None:
        return next((c for c in self._capacity if c.date == target_date), None)

    def info(self) -> SnapshotInfo:
        return SnapshotInfo(
            version=self._version,
            refreshed_at=self._refreshed_at,
            appointments=len(self._appointments),
            tasks=len(self._tasks),
            patients=len(self._patients),
            capacity_days=len(self._capacity),
        )

    # ── Recarga ──────────────────────────────────────

    def replace_all(
        self,
        *,
        appointments: Iterable[AppointmentData],
        tasks: Iterable[PendingTaskData],
        patients: Iterable[PatientData],
        capacity: Iterable[DailyCapacityData],
    ) -> int:
        """Reemplaza todo el contenido. Descarta mutaciones locales no sincronizadas."""
        self._appointments = list(appointments)
        self._tasks = list(tasks)
        self._patients = list(patients)
        self._capacity = list(capacity)
        self._refreshed_at = datetime.now(timezone.utc)
        return self._bump()

    async def refresh(self, store: RecordStore) -> int:
        """Vuelve a cargar todo desde el backend (listas vacías si falla)."""
        appointments = await store.fetch_appointments()
        tasks = await store.fetch_tasks()
        patients = await store.fetch_patients()
        capacity = await store.fetch_capacity()

        version = self.replace_all(
            appointments=appointments,
            tasks=tasks,
            patients=patients,
            capacity=capacity,
        )
        logger.info(
            "Snapshot v%s: %s turnos, %s pendientes, %s pacientes, %s días de capacidad",
            version, len(appointments), len(tasks), len(patients), len(capacity),
        )
        return version

    # ── Mutaciones locales ───────────────────────────

    def _bump(self) -> int:
        self._version += 1
        return self._version

    def put_appointment(self, record: AppointmentData) -> AppointmentData:
        """Inserta o reemplaza (por id) un turno."""
        self._appointments = _upsert(self._appointments, record, key="id")
        self._bump()
        return record

    def put_task(self, record: PendingTaskData) -> PendingTaskData:
        self._tasks = _upsert(self._tasks, record, key="id")
        self._bump()
        return record

    def put_patient(self, record: PatientData) -> PatientData:
        self._patients = _upsert(self._patients, record, key="id")
        self._bump()
        return record

    def put_capacity(self, record: DailyCapacityData) -> DailyCapacityData:
        self._capacity = _upsert(self._capacity, record, key="date")
        self._bump()
        return record

    def remove_appointment(self, appointment_id: UUID) -> None:
        self._appointments = [a for a in self._appointments if a.id != appointment_id]
        self._bump()

    def remove_task(self, task_id: UUID) -> None:
        self._tasks = [t for t in self._tasks if t.id != task_id]
        self._bump()

    def remove_patient(self, patient_id: UUID) -> None:
        self._patients = [p for p in self._patients if p.id != patient_id]
        self._bump()

    def remove_capacity(self, target_date: date) -> None:
        self._capacity = [c for c in self._capacity if c.date != target_date]
        self._bump()

    def toggle_appointment_status(self, appointment_id: UUID) -> AppointmentData | None:
        """Marca/desmarca un turno como visto. None si el id no existe."""
        current = self.get_appointment(appointment_id)
        if current is None:
            return None
        return self.put_appointment(
            current.model_copy(update={"status": toggled_status(current.status)})
        )

    def toggle_task_status(
        self, task_id: UUID, now: datetime | None = None
    ) -> PendingTaskData | None:
        """completada ↔ pendiente, seteando o limpiando completed_at."""
        current = self.get_task(task_id)
        if current is None:
            return None
        new_status = toggled_task_status(current.status)
        completed_at = None
        if new_status == TaskStatus.COMPLETADA:
            completed_at = now or datetime.now(timezone.utc)
        return self.put_task(
            current.model_copy(update={"status": new_status, "completed_at": completed_at})
        )

    def update_capacity(
        self, target_date: date, updates: dict[str, Any]
    ) -> DailyCapacityData | None:
        """Aplica una actualización parcial. None si el día no está cargado."""
        current = self.get_capacity(target_date)
        if current is None:
            return None
        return self.put_capacity(current.model_copy(update=updates))


def _upsert(records: list, record, *, key: str) -> list:
    value = getattr(record, key)
    for i, existing in enumerate(records):
        if getattr(existing, key) == value:
            return records[:i] + [record] + records[i + 1:]
    return records + [record]
