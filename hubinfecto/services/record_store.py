"""
Record store: acceso al backend relacional con SQLAlchemy async.

Contrato de fallos:
- Lecturas: ante backend no configurado o error de base/conexión devuelven
  lista vacía y dejan un warning en el log. Nunca lanzan.
- Escrituras: devuelven Ok(registro) o Err(kind, detail). Nunca lanzan;
  quien llama decide si conserva la mutación optimista. El detalle del
  Err es genérico; el error del driver (SQL y parámetros) sólo va al log.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import date, datetime
from typing import Any, TypeVar
from uuid import UUID, uuid4

from pydantic import BaseModel, ValidationError
from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hubinfecto.core.result import BackendErrorKind, Err, Ok, Result
from hubinfecto.models.appointment import Appointment, AppointmentStatus
from hubinfecto.models.daily_capacity import DailyCapacity
from hubinfecto.models.patient import Patient
from hubinfecto.models.pending_task import PendingTask, TaskStatus
from hubinfecto.schemas.appointment import AppointmentCreate, AppointmentData
from hubinfecto.schemas.capacity import CapacityCreate, DailyCapacityData
from hubinfecto.schemas.patient import PatientCreate, PatientData
from hubinfecto.schemas.task import PendingTaskData, TaskCreate

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=BaseModel)
T = TypeVar("T")

BACKEND_ERRORS = (SQLAlchemyError, OSError)


class RecordStore:
    """Interfaz estrecha de lectura/escritura sobre el backend."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None):
        self._session_factory = session_factory

    @property
    def is_configured(self) -> bool:
        return self._session_factory is not None

    # ── Helpers ──────────────────────────────────────

    async def _fetch(self, query: Select, schema: type[S], label: str) -> list[S]:
        if self._session_factory is None:
            logger.warning("Backend no configurado — %s sin datos", label)
            return []

        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                rows = result.scalars().all()
        except BACKEND_ERRORS as exc:
            logger.warning("Error leyendo %s del backend: %s", label, exc)
            return []

        records: list[S] = []
        for row in rows:
            try:
                records.append(schema.model_validate(row))
            except ValidationError as exc:
                logger.warning("Registro de %s descartado por datos inválidos: %s", label, exc)
        return records

    async def _write(
        self,
        label: str,
        operation: Callable[[AsyncSession], Awaitable[Result[T]]],
    ) -> Result[T]:
        if self._session_factory is None:
            logger.warning("Backend no configurado — %s sólo en memoria", label)
            return Err(BackendErrorKind.NOT_CONFIGURED, "DATABASE_URL no configurada")

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    return await operation(session)
        except IntegrityError as exc:
            logger.warning("Conflicto en %s: %s", label, exc)
            return Err(
                BackendErrorKind.CONFLICT,
                f"{label}: el registro ya existe o viola una restricción",
            )
        except BACKEND_ERRORS as exc:
            logger.error("Error en %s: %s", label, exc)
            return Err(
                BackendErrorKind.OPERATION_FAILED,
                f"{label}: el backend no completó la operación",
            )

    # ── Lecturas ─────────────────────────────────────

    async def fetch_capacity(
        self, date_from: date | None = None, date_to: date | None = None
    ) -> list[DailyCapacityData]:
        query = select(DailyCapacity)
        if date_from:
            query = query.where(DailyCapacity.date >= date_from)
        if date_to:
            query = query.where(DailyCapacity.date <= date_to)
        query = query.order_by(DailyCapacity.date)
        return await self._fetch(query, DailyCapacityData, "capacidad")

    async def fetch_appointments(
        self, date_from: date | None = None, date_to: date | None = None
    ) -> list[AppointmentData]:
        query = select(Appointment)
        if date_from:
            query = query.where(Appointment.date >= date_from)
        if date_to:
            query = query.where(Appointment.date <= date_to)
        query = query.order_by(Appointment.date.asc(), Appointment.time.asc())
        return await self._fetch(query, AppointmentData, "turnos")

    async def fetch_tasks(self) -> list[PendingTaskData]:
        query = select(PendingTask).order_by(PendingTask.due_date, PendingTask.created_at)
        return await self._fetch(query, PendingTaskData, "pendientes")

    async def fetch_patients(self) -> list[PatientData]:
        query = select(Patient).order_by(Patient.name)
        return await self._fetch(query, PatientData, "pacientes")

    # ── Escrituras: cambios de estado ────────────────

    async def update_appointment_status(
        self, appointment_id: UUID, status: AppointmentStatus
    ) -> Result[AppointmentData]:
        async def _op(session: AsyncSession) -> Result[AppointmentData]:
            appointment = await session.get(Appointment, appointment_id)
            if appointment is None:
                return Err(BackendErrorKind.NOT_FOUND, f"turno {appointment_id}")
            appointment.status = status
            await session.flush()
            return Ok(AppointmentData.model_validate(appointment))

        return await self._write("actualización de turno", _op)

    async def update_task_status(
        self,
        task_id: UUID,
        status: TaskStatus,
        completed_at: datetime | None = None,
    ) -> Result[PendingTaskData]:
        async def _op(session: AsyncSession) -> Result[PendingTaskData]:
            task = await session.get(PendingTask, task_id)
            if task is None:
                return Err(BackendErrorKind.NOT_FOUND, f"pendiente {task_id}")
            task.status = status
            task.completed_at = completed_at
            await session.flush()
            return Ok(PendingTaskData.model_validate(task))

        return await self._write("actualización de pendiente", _op)

    async def update_capacity(
        self, target_date: date, updates: dict[str, Any]
    ) -> Result[DailyCapacityData]:
        async def _op(session: AsyncSession) -> Result[DailyCapacityData]:
            capacity = await session.get(DailyCapacity, target_date)
            if capacity is None:
                return Err(BackendErrorKind.NOT_FOUND, f"capacidad {target_date}")
            for field, value in updates.items():
                setattr(capacity, field, value)
            await session.flush()
            return Ok(DailyCapacityData.model_validate(capacity))

        return await self._write("actualización de capacidad", _op)

    # ── Escrituras: altas ────────────────────────────

    async def create_patient(
        self, data: PatientCreate, *, record_id: UUID | None = None
    ) -> Result[PatientData]:
        async def _op(session: AsyncSession) -> Result[PatientData]:
            patient = Patient(id=record_id or uuid4(), **data.model_dump())
            session.add(patient)
            await session.flush()
            await session.refresh(patient)
            return Ok(PatientData.model_validate(patient))

        return await self._write("alta de paciente", _op)

    async def create_task(
        self, data: TaskCreate, *, record_id: UUID | None = None
    ) -> Result[PendingTaskData]:
        async def _op(session: AsyncSession) -> Result[PendingTaskData]:
            task = PendingTask(id=record_id or uuid4(), **data.model_dump())
            session.add(task)
            await session.flush()
            await session.refresh(task)
            return Ok(PendingTaskData.model_validate(task))

        return await self._write("alta de pendiente", _op)

    async def create_appointment(
        self, data: AppointmentCreate, *, record_id: UUID | None = None
    ) -> Result[AppointmentData]:
        async def _op(session: AsyncSession) -> Result[AppointmentData]:
            appointment = Appointment(id=record_id or uuid4(), **data.model_dump())
            session.add(appointment)
            await session.flush()
            return Ok(AppointmentData.model_validate(appointment))

        return await self._write("alta de turno", _op)

    async def create_capacity(self, data: CapacityCreate) -> Result[DailyCapacityData]:
        async def _op(session: AsyncSession) -> Result[DailyCapacityData]:
            capacity = DailyCapacity(**data.model_dump())
            session.add(capacity)
            await session.flush()
            return Ok(DailyCapacityData.model_validate(capacity))

        return await self._write("alta de capacidad", _op)
