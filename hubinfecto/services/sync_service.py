"""
Servicio de escrituras optimistas.

Flujo de cada operación:
1. Aplicar la mutación al snapshot (la UI la ve de inmediato)
2. Enviar la escritura al record store
3. Ok  → reemplazar el registro local por el que devolvió el backend
   Err → conservar el registro local (queda sólo en memoria hasta el
         próximo refresh) o revertirlo si `rollback` está activo.
         Un conflicto (registro duplicado) siempre se revierte: el backend
         ya tiene otro registro con esa clave.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from hubinfecto.core.exceptions import ConflictException, NotFoundException, ValidationException
from hubinfecto.core.result import BackendErrorKind, Err, Result
from hubinfecto.schemas.appointment import (
    AppointmentCreate,
    AppointmentData,
    AppointmentWriteResponse,
)
from hubinfecto.schemas.capacity import CapacityCreate, CapacityUpdate, DailyCapacityData
from hubinfecto.schemas.patient import PatientCreate, PatientData, PatientWriteResponse
from hubinfecto.schemas.snapshot import CapacityWriteResponse
from hubinfecto.schemas.task import PendingTaskData, TaskCreate, TaskWriteResponse
from hubinfecto.services.record_store import RecordStore
from hubinfecto.services.snapshot import ClinicSnapshot

logger = logging.getLogger(__name__)


def _revert_on_failure(operation: str, result: Err, rollback: bool) -> bool:
    """Registra el fallo y decide si la mutación local se revierte."""
    revert = rollback or result.kind == BackendErrorKind.CONFLICT
    logger.warning(
        "%s no sincronizado (%s); cambio local %s",
        operation, result, "revertido" if revert else "conservado",
    )
    return revert


# ── Turnos ───────────────────────────────────────────

async def toggle_appointment(
    snapshot: ClinicSnapshot,
    store: RecordStore,
    appointment_id: UUID,
    *,
    rollback: bool = False,
) -> AppointmentWriteResponse:
    """Marca/desmarca un turno como visto, sin esperar al backend para reflejarlo."""
    previous = snapshot.get_appointment(appointment_id)
    if previous is None:
        raise NotFoundException("Turno")

    updated = snapshot.toggle_appointment_status(appointment_id)
    result: Result[AppointmentData] = await store.update_appointment_status(
        appointment_id, updated.status
    )

    if result.ok:
        record = snapshot.put_appointment(result.value)
        return AppointmentWriteResponse(
            record=record, synced=True, snapshot_version=snapshot.version
        )

    revert = _revert_on_failure("Cambio de estado de turno", result, rollback)
    if revert:
        snapshot.put_appointment(previous)
    return AppointmentWriteResponse(
        record=previous if revert else updated,
        synced=False,
        sync_error=str(result),
        rolled_back=revert,
        snapshot_version=snapshot.version,
    )


async def create_appointment(
    snapshot: ClinicSnapshot,
    store: RecordStore,
    data: AppointmentCreate,
    *,
    rollback: bool = False,
) -> AppointmentWriteResponse:
    local = snapshot.put_appointment(AppointmentData(id=uuid4(), **data.model_dump()))
    result = await store.create_appointment(data, record_id=local.id)

    if result.ok:
        record = snapshot.put_appointment(result.value)
        return AppointmentWriteResponse(
            record=record, synced=True, snapshot_version=snapshot.version
        )

    revert = _revert_on_failure("Alta de turno", result, rollback)
    if revert:
        snapshot.remove_appointment(local.id)
    return AppointmentWriteResponse(
        record=local,
        synced=False,
        sync_error=str(result),
        rolled_back=revert,
        snapshot_version=snapshot.version,
    )


# ── Pendientes ───────────────────────────────────────

async def toggle_task(
    snapshot: ClinicSnapshot,
    store: RecordStore,
    task_id: UUID,
    *,
    rollback: bool = False,
) -> TaskWriteResponse:
    previous = snapshot.get_task(task_id)
    if previous is None:
        raise NotFoundException("Pendiente")

    updated = snapshot.toggle_task_status(task_id)
    result = await store.update_task_status(task_id, updated.status, updated.completed_at)

    if result.ok:
        record = snapshot.put_task(result.value)
        return TaskWriteResponse(record=record, synced=True, snapshot_version=snapshot.version)

    revert = _revert_on_failure("Cambio de estado de pendiente", result, rollback)
    if revert:
        snapshot.put_task(previous)
    return TaskWriteResponse(
        record=previous if revert else updated,
        synced=False,
        sync_error=str(result),
        rolled_back=revert,
        snapshot_version=snapshot.version,
    )


async def create_task(
    snapshot: ClinicSnapshot,
    store: RecordStore,
    data: TaskCreate,
    *,
    rollback: bool = False,
) -> TaskWriteResponse:
    local = snapshot.put_task(
        PendingTaskData(id=uuid4(), created_at=datetime.now(timezone.utc), **data.model_dump())
    )
    result = await store.create_task(data, record_id=local.id)

    if result.ok:
        record = snapshot.put_task(result.value)
        return TaskWriteResponse(record=record, synced=True, snapshot_version=snapshot.version)

    revert = _revert_on_failure("Alta de pendiente", result, rollback)
    if revert:
        snapshot.remove_task(local.id)
    return TaskWriteResponse(
        record=local,
        synced=False,
        sync_error=str(result),
        rolled_back=revert,
        snapshot_version=snapshot.version,
    )


# ── Pacientes ────────────────────────────────────────

async def create_patient(
    snapshot: ClinicSnapshot,
    store: RecordStore,
    data: PatientCreate,
    *,
    rollback: bool = False,
) -> PatientWriteResponse:
    if any(p.dni == data.dni for p in snapshot.patients):
        raise ConflictException("Ya existe un paciente con ese DNI")

    now = datetime.now(timezone.utc)
    local = snapshot.put_patient(
        PatientData(id=uuid4(), created_at=now, updated_at=now, **data.model_dump())
    )
    result = await store.create_patient(data, record_id=local.id)

    if result.ok:
        record = snapshot.put_patient(result.value)
        return PatientWriteResponse(record=record, synced=True, snapshot_version=snapshot.version)

    revert = _revert_on_failure("Alta de paciente", result, rollback)
    if revert:
        snapshot.remove_patient(local.id)
    return PatientWriteResponse(
        record=local,
        synced=False,
        sync_error=str(result),
        rolled_back=revert,
        snapshot_version=snapshot.version,
    )


# ── Capacidad ────────────────────────────────────────

async def update_capacity(
    snapshot: ClinicSnapshot,
    store: RecordStore,
    target_date: date,
    data: CapacityUpdate,
    *,
    rollback: bool = False,
) -> CapacityWriteResponse:
    previous = snapshot.get_capacity(target_date)
    if previous is None:
        raise NotFoundException("Capacidad del día")

    updates: dict[str, Any] = data.model_dump(exclude_none=True)
    merged_max = updates.get("max_appointments", previous.max_appointments)
    merged_spontaneous = updates.get("max_spontaneous", previous.max_spontaneous)
    if merged_spontaneous > merged_max:
        raise ValidationException("max_spontaneous no puede superar max_appointments")

    updated = snapshot.update_capacity(target_date, updates)
    result = await store.update_capacity(target_date, updates)

    if result.ok:
        record = snapshot.put_capacity(result.value)
        return CapacityWriteResponse(record=record, synced=True, snapshot_version=snapshot.version)

    revert = _revert_on_failure("Actualización de capacidad", result, rollback)
    if revert:
        snapshot.put_capacity(previous)
    return CapacityWriteResponse(
        record=previous if revert else updated,
        synced=False,
        sync_error=str(result),
        rolled_back=revert,
        snapshot_version=snapshot.version,
    )


async def create_capacity(
    snapshot: ClinicSnapshot,
    store: RecordStore,
    data: CapacityCreate,
    *,
    rollback: bool = False,
) -> CapacityWriteResponse:
    """Alta de los cupos de un día. Para modificar un día ya cargado: PATCH."""
    if snapshot.get_capacity(data.date) is not None:
        raise ConflictException(
            f"Ya hay capacidad para {data.date}; use PATCH /capacity/{data.date}"
        )

    local = snapshot.put_capacity(DailyCapacityData(**data.model_dump()))
    result = await store.create_capacity(data)

    if result.ok:
        record = snapshot.put_capacity(result.value)
        return CapacityWriteResponse(record=record, synced=True, snapshot_version=snapshot.version)

    revert = _revert_on_failure("Alta de capacidad", result, rollback)
    if revert:
        snapshot.remove_capacity(data.date)
    return CapacityWriteResponse(
        record=local,
        synced=False,
        sync_error=str(result),
        rolled_back=revert,
        snapshot_version=snapshot.version,
    )
