"""
Fixtures compartidas para Pytest.
Configura base de datos de test, snapshot de ejemplo y clientes HTTP.
"""

import os
from collections.abc import AsyncGenerator
from datetime import date, datetime, timezone
from uuid import NAMESPACE_URL, uuid4, uuid5

# Sin backend real durante los tests: cada fixture arma su propio store
os.environ.setdefault("DATABASE_URL", "")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

import hubinfecto.models  # noqa: E402,F401
from hubinfecto.api.deps import get_record_store, get_snapshot  # noqa: E402
from hubinfecto.config import Settings, get_settings  # noqa: E402
from hubinfecto.database import Base  # noqa: E402
from hubinfecto.main import app  # noqa: E402
from hubinfecto.models import AppointmentStatus, TaskPriority, TaskStatus, TaskType  # noqa: E402
from hubinfecto.schemas.appointment import AppointmentData  # noqa: E402
from hubinfecto.schemas.capacity import DailyCapacityData  # noqa: E402
from hubinfecto.schemas.patient import PatientData  # noqa: E402
from hubinfecto.schemas.task import PendingTaskData  # noqa: E402
from hubinfecto.services.record_store import RecordStore  # noqa: E402
from hubinfecto.services.snapshot import ClinicSnapshot  # noqa: E402

# Miércoles: la semana laboral es 2025-09-08 .. 2025-09-12
TODAY = date(2025, 9, 10)
CREATED = datetime(2025, 9, 1, 12, 0, tzinfo=timezone.utc)


def patient_uuid(key: str):
    return uuid5(NAMESPACE_URL, f"hubinfecto-test/patient/{key}")


# ── Fábricas de registros ────────────────────────────

@pytest.fixture
def make_appointment():
    def _make(**overrides) -> AppointmentData:
        values = {
            "id": uuid4(),
            "patient_id": patient_uuid("p1"),
            "patient_name": "María González",
            "doctor_name": "Dr. Alonso",
            "date": TODAY,
            "time": "08:30",
        }
        values.update(overrides)
        return AppointmentData(**values)

    return _make


@pytest.fixture
def make_task():
    def _make(**overrides) -> PendingTaskData:
        values = {
            "id": uuid4(),
            "patient_id": patient_uuid("p1"),
            "patient_name": "María González",
            "type": TaskType.ESTUDIO,
            "description": "CD4+ y Carga Viral VIH",
            "due_date": date(2025, 9, 12),
            "assigned_doctor": "Dr. Alonso",
            "created_at": CREATED,
        }
        values.update(overrides)
        return PendingTaskData(**values)

    return _make


@pytest.fixture
def make_capacity():
    def _make(target_date: date = TODAY, **overrides) -> DailyCapacityData:
        values = {
            "date": target_date,
            "max_appointments": 20,
            "max_spontaneous": 5,
            "predicted_spontaneous": 3,
            "current_scheduled": 0,
            "current_spontaneous": 0,
        }
        values.update(overrides)
        return DailyCapacityData(**values)

    return _make


@pytest.fixture
def make_patient():
    def _make(**overrides) -> PatientData:
        values = {
            "id": uuid4(),
            "name": "María González",
            "dni": "28456789",
            "created_at": CREATED,
            "updated_at": CREATED,
        }
        values.update(overrides)
        return PatientData(**values)

    return _make


# ── Snapshot de ejemplo (semana del 8/9/2025) ────────

@pytest.fixture
def clinic_snapshot(make_appointment, make_task, make_capacity, make_patient) -> ClinicSnapshot:
    p1, p2, p3 = patient_uuid("p1"), patient_uuid("p2"), patient_uuid("p3")
    patients = [
        make_patient(id=p1, name="María González", dni="28456789"),
        make_patient(id=p2, name="Carlos Mendoza", dni="35678912"),
        make_patient(id=p3, name="Ana Rodríguez", dni="42789123"),
    ]
    appointments = [
        make_appointment(patient_id=p1, patient_name="María González", time="08:30"),
        make_appointment(
            patient_id=p2, patient_name="Carlos Mendoza", doctor_name="Dr. García",
            time="10:00", status=AppointmentStatus.COMPLETED,
        ),
        make_appointment(
            patient_id=p3, patient_name="Ana Rodríguez", time="14:00", is_spontaneous=True,
        ),
        make_appointment(
            patient_id=None, patient_name="Roberto Silva", doctor_name="Dr. Torres",
            time="16:30", is_new_patient=True,
        ),
        make_appointment(
            patient_id=p1, patient_name="María González", doctor_name="Dr. García",
            date=date(2025, 9, 11), time="09:00",
        ),
        make_appointment(
            patient_id=p2, patient_name="Carlos Mendoza", doctor_name="Dr. García",
            date=date(2025, 9, 15), time="11:00",
        ),
    ]
    tasks = [
        make_task(patient_id=p1, priority=TaskPriority.ALTA),
        make_task(
            patient_id=p2, patient_name="Carlos Mendoza", type=TaskType.CULTIVO,
            description="Baciloscopía y cultivo BK", priority=TaskPriority.URGENTE,
            assigned_doctor="Dr. García",
        ),
        make_task(
            patient_id=p3, patient_name="Ana Rodríguez",
            description="Hemocultivos x3 y tipificación", priority=TaskPriority.URGENTE,
            status=TaskStatus.COMPLETADA, completed_at=CREATED,
        ),
        make_task(
            patient_id=p1, type=TaskType.SEGUIMIENTO,
            description="Evaluación adherencia TARV", priority=TaskPriority.MEDIA,
            assigned_doctor="Dr. García",
        ),
    ]
    capacity = [
        make_capacity(date(2025, 9, 8)),
        make_capacity(date(2025, 9, 10), current_scheduled=5, current_spontaneous=1),
        make_capacity(
            date(2025, 9, 12), max_appointments=18, max_spontaneous=4, predicted_spontaneous=4,
        ),
        make_capacity(date(2025, 9, 15), current_scheduled=1),
    ]
    return ClinicSnapshot(
        appointments=appointments, tasks=tasks, patients=patients, capacity=capacity
    )


# ── Base de datos de test (SQLite async) ─────────────

@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory sobre una base SQLite nueva con el esquema creado."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture
async def record_store(session_factory) -> RecordStore:
    return RecordStore(session_factory)


@pytest.fixture
def offline_store() -> RecordStore:
    """Record store sin backend configurado."""
    return RecordStore(None)


@pytest_asyncio.fixture
async def broken_store(tmp_path) -> AsyncGenerator[RecordStore, None]:
    """Record store cuyo backend no puede abrir conexión."""
    missing = tmp_path / "no-existe" / "db.sqlite"
    broken_engine = create_async_engine(f"sqlite+aiosqlite:///{missing}")
    yield RecordStore(
        async_sessionmaker(broken_engine, class_=AsyncSession, expire_on_commit=False)
    )
    await broken_engine.dispose()


# ── Clientes HTTP ────────────────────────────────────

@pytest.fixture
def test_settings() -> Settings:
    return Settings(DATABASE_URL="", CLINIC_TODAY=TODAY, DEBUG=False)


def _override(snapshot: ClinicSnapshot, store: RecordStore, settings: Settings) -> None:
    app.dependency_overrides[get_snapshot] = lambda: snapshot
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings


@pytest_asyncio.fixture
async def client(
    clinic_snapshot: ClinicSnapshot, offline_store: RecordStore, test_settings: Settings
) -> AsyncGenerator[AsyncClient, None]:
    """Cliente HTTP sobre el snapshot de ejemplo, sin backend."""
    _override(clinic_snapshot, offline_store, test_settings)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def synced_client(
    record_store: RecordStore, test_settings: Settings
) -> AsyncGenerator[AsyncClient, None]:
    """Cliente HTTP con snapshot vacío y backend SQLite funcionando."""
    _override(ClinicSnapshot(), record_store, test_settings)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
