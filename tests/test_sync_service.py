"""
Tests de escrituras optimistas: conservar o revertir ante fallo del backend.
"""

from datetime import date
from uuid import uuid4

import pytest

from hubinfecto.core.exceptions import ConflictException, NotFoundException, ValidationException
from hubinfecto.models import AppointmentStatus, TaskPriority, TaskStatus, TaskType
from hubinfecto.schemas.appointment import AppointmentCreate
from hubinfecto.schemas.capacity import CapacityCreate, CapacityUpdate
from hubinfecto.schemas.patient import PatientCreate
from hubinfecto.schemas.task import TaskCreate
from hubinfecto.services import sync_service
from hubinfecto.services.snapshot import ClinicSnapshot

TODAY = date(2025, 9, 10)


# ── Backend no disponible: se conserva el cambio local ─

@pytest.mark.asyncio
async def test_toggle_kept_locally_when_backend_fails(clinic_snapshot, offline_store):
    appointment = clinic_snapshot.appointments[0]

    response = await sync_service.toggle_appointment(clinic_snapshot, offline_store, appointment.id)

    assert not response.synced
    assert not response.rolled_back
    assert response.sync_error.startswith("not_configured")
    assert response.record.status == AppointmentStatus.COMPLETED
    assert clinic_snapshot.get_appointment(appointment.id).status == AppointmentStatus.COMPLETED
    assert response.snapshot_version == clinic_snapshot.version == 1


@pytest.mark.asyncio
async def test_toggle_rolled_back_when_requested(clinic_snapshot, offline_store):
    appointment = clinic_snapshot.appointments[0]

    response = await sync_service.toggle_appointment(
        clinic_snapshot, offline_store, appointment.id, rollback=True
    )

    assert response.rolled_back
    assert response.record.status == AppointmentStatus.SCHEDULED
    assert clinic_snapshot.get_appointment(appointment.id).status == AppointmentStatus.SCHEDULED
    # Aplicar y revertir son dos mutaciones
    assert clinic_snapshot.version == 2


@pytest.mark.asyncio
async def test_toggle_unknown_appointment_raises(clinic_snapshot, offline_store):
    with pytest.raises(NotFoundException):
        await sync_service.toggle_appointment(clinic_snapshot, offline_store, uuid4())
    assert clinic_snapshot.version == 0


@pytest.mark.asyncio
async def test_created_task_stays_in_memory(clinic_snapshot, broken_store):
    data = TaskCreate(
        patient_id=clinic_snapshot.patients[0].id,
        patient_name="María González",
        type=TaskType.CULTIVO,
        description="Urocultivo y antibiograma",
        due_date=date(2025, 9, 16),
        priority=TaskPriority.ALTA,
        assigned_doctor="Dr. García",
    )

    response = await sync_service.create_task(clinic_snapshot, broken_store, data)

    assert not response.synced
    assert response.sync_error.startswith("operation_failed")
    assert clinic_snapshot.get_task(response.record.id) is not None
    assert len(clinic_snapshot.tasks) == 5


@pytest.mark.asyncio
async def test_created_patient_removed_on_rollback(clinic_snapshot, offline_store):
    response = await sync_service.create_patient(
        clinic_snapshot, offline_store,
        PatientCreate(name="Laura Vega", dni="38901234"),
        rollback=True,
    )

    assert response.rolled_back
    assert len(clinic_snapshot.patients) == 3


# ── Backend disponible: el registro del backend reemplaza al local ─

@pytest.mark.asyncio
async def test_synced_create_then_toggle(record_store):
    snapshot = ClinicSnapshot()
    created = await sync_service.create_appointment(
        snapshot, record_store,
        AppointmentCreate(
            patient_name="Laura Vega", doctor_name="Dr. García", date=TODAY, time="09:00",
        ),
    )
    assert created.synced
    assert created.sync_error is None

    toggled = await sync_service.toggle_appointment(snapshot, record_store, created.record.id)

    assert toggled.synced
    assert toggled.record.status == AppointmentStatus.COMPLETED
    (stored,) = await record_store.fetch_appointments()
    assert stored.status == AppointmentStatus.COMPLETED


@pytest.mark.asyncio
async def test_synced_task_toggle_roundtrip(record_store, clinic_snapshot):
    snapshot = ClinicSnapshot()
    created = await sync_service.create_task(
        snapshot, record_store,
        TaskCreate(
            patient_id=clinic_snapshot.patients[0].id,
            type=TaskType.ESTUDIO,
            description="Ecocardiograma transtorácico",
            due_date=date(2025, 9, 18),
            assigned_doctor="Dr. García",
        ),
    )

    done = await sync_service.toggle_task(snapshot, record_store, created.record.id)
    reopened = await sync_service.toggle_task(snapshot, record_store, created.record.id)

    assert done.record.status == TaskStatus.COMPLETADA
    assert done.record.completed_at is not None
    assert reopened.synced
    assert reopened.record.status == TaskStatus.PENDIENTE
    assert reopened.record.completed_at is None


# ── Capacidad ────────────────────────────────────────

@pytest.mark.asyncio
async def test_update_capacity_kept_locally(clinic_snapshot, offline_store):
    response = await sync_service.update_capacity(
        clinic_snapshot, offline_store, TODAY, CapacityUpdate(current_scheduled=17)
    )

    assert not response.synced
    assert response.record.current_scheduled == 17
    assert clinic_snapshot.get_capacity(TODAY).current_scheduled == 17


@pytest.mark.asyncio
async def test_update_capacity_rejects_spontaneous_over_total(clinic_snapshot, offline_store):
    with pytest.raises(ValidationException):
        await sync_service.update_capacity(
            clinic_snapshot, offline_store, TODAY, CapacityUpdate(max_appointments=4)
        )
    assert clinic_snapshot.version == 0


@pytest.mark.asyncio
async def test_update_capacity_unknown_day(clinic_snapshot, offline_store):
    with pytest.raises(NotFoundException):
        await sync_service.update_capacity(
            clinic_snapshot, offline_store, date(2025, 9, 9), CapacityUpdate(current_scheduled=1)
        )


@pytest.mark.asyncio
async def test_create_capacity_for_configured_day_conflicts(clinic_snapshot, offline_store):
    previous = clinic_snapshot.get_capacity(TODAY)

    with pytest.raises(ConflictException) as exc_info:
        await sync_service.create_capacity(
            clinic_snapshot, offline_store,
            CapacityCreate(date=TODAY, max_appointments=8, max_spontaneous=2),
        )

    assert exc_info.value.status_code == 409
    assert "PATCH" in exc_info.value.detail
    assert clinic_snapshot.get_capacity(TODAY) == previous
    assert clinic_snapshot.version == 0


@pytest.mark.asyncio
async def test_create_capacity_new_day_removed_on_rollback(clinic_snapshot, offline_store):
    response = await sync_service.create_capacity(
        clinic_snapshot, offline_store,
        CapacityCreate(date=date(2025, 9, 9), max_appointments=10),
        rollback=True,
    )

    assert response.rolled_back
    assert clinic_snapshot.get_capacity(date(2025, 9, 9)) is None


# ── DNI duplicado ────────────────────────────────────

@pytest.mark.asyncio
async def test_patient_with_known_dni_raises_conflict(clinic_snapshot, offline_store):
    with pytest.raises(ConflictException):
        await sync_service.create_patient(
            clinic_snapshot, offline_store,
            PatientCreate(name="Otra María", dni="28456789"),
        )

    assert len(clinic_snapshot.patients) == 3
    assert clinic_snapshot.version == 0


@pytest.mark.asyncio
async def test_backend_duplicate_dni_always_reverted(record_store):
    await record_store.create_patient(PatientCreate(name="Laura Vega", dni="38901234"))
    # Snapshot vacío: solo el backend conoce el DNI
    snapshot = ClinicSnapshot()

    response = await sync_service.create_patient(
        snapshot, record_store,
        PatientCreate(name="Laura V.", dni="38901234"),
        rollback=False,
    )

    assert not response.synced
    assert response.rolled_back
    assert response.sync_error.startswith("conflict")
    assert "38901234" not in response.sync_error
    assert snapshot.patients == ()
    assert len(await record_store.fetch_patients()) == 1
