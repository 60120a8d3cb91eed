"""
Seed de datos de demostración del consultorio (semana del 8/9/2025).

Uso:
    python scripts/seed_demo_data.py [--create-tables]

Carga pacientes, turnos, pendientes y capacidad diaria a través del
record store. Con --create-tables crea el esquema antes (sin Alembic).
"""

import argparse
import asyncio
import sys
from datetime import date
from pathlib import Path
from uuid import UUID, uuid5, NAMESPACE_URL

# Agregar el directorio raíz al path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from hubinfecto.database import Base, async_session_factory, engine  # noqa: E402
from hubinfecto.models import AppointmentStatus, TaskPriority, TaskType  # noqa: E402
from hubinfecto.schemas.appointment import AppointmentCreate  # noqa: E402
from hubinfecto.schemas.capacity import CapacityCreate  # noqa: E402
from hubinfecto.schemas.patient import PatientCreate  # noqa: E402
from hubinfecto.schemas.task import TaskCreate  # noqa: E402
from hubinfecto.services.record_store import RecordStore  # noqa: E402


def _patient_id(key: str) -> UUID:
    """IDs estables para que el seed sea repetible entre corridas."""
    return uuid5(NAMESPACE_URL, f"hubinfecto/patient/{key}")


PATIENTS = [
    ("p1", "María González", "28456789", "11-4567-8901", "maria.gonzalez@email.com",
     "Av. Corrientes 1234, CABA", date(1985, 3, 15)),
    ("p2", "Carlos Mendoza", "35678912", "11-3456-7890", "carlos.mendoza@email.com",
     "Riobamba 567, CABA", date(1978, 11, 22)),
    ("p3", "Ana Rodríguez", "42789123", "11-2345-6789", "ana.rodriguez@email.com",
     "Callao 890, CABA", date(1992, 7, 8)),
    ("p4", "Roberto Silva", "30123456", "11-1234-5678", "roberto.silva@email.com",
     "Santa Fe 2345, CABA", date(1965, 12, 30)),
    ("p5", "Laura Vega", "38901234", "11-5678-9012", "laura.vega@email.com",
     "Pueyrredón 1567, CABA", date(1988, 4, 18)),
    ("p6", "Jorge Martín", "26789234", "11-6789-0123", "jorge.martin@email.com",
     "Paraguay 987, CABA", date(1982, 9, 12)),
]

# (paciente, médico, fecha, hora, notas, espontánea, nuevo)
APPOINTMENTS = [
    ("p1", "Dr. Alonso", date(2025, 9, 10), "08:30",
     "Control VIH - Carga viral indetectable", False, False),
    ("p2", "Dr. García", date(2025, 9, 10), "10:00",
     "Seguimiento TB pulmonar - Mes 3 tratamiento", False, False),
    ("p3", "Dr. Alonso", date(2025, 9, 10), "14:00",
     "Urgencia - Fiebre en paciente VIH", True, False),
    ("p4", "Dr. Torres", date(2025, 9, 10), "16:30",
     "Primera consulta - Síndrome febril prolongado", False, True),
    ("p5", "Dr. García", date(2025, 9, 11), "09:00",
     "Control hepatitis B crónica", False, False),
    ("p1", "Dr. Alonso", date(2025, 9, 15), "11:00",
     "Control trimestral VIH", False, False),
    ("p6", "Dr. García", date(2025, 9, 10), "12:00",
     "Seguimiento endocarditis estafilocócica", False, False),
]

# (paciente, tipo, descripción, vencimiento, prioridad, médico, notas)
TASKS = [
    ("p1", TaskType.ESTUDIO, "CD4+ y Carga Viral VIH", date(2025, 9, 12),
     TaskPriority.ALTA, "Dr. Alonso", "Control trimestral - Paciente en TARV"),
    ("p2", TaskType.CULTIVO, "Baciloscopía y cultivo BK", date(2025, 9, 15),
     TaskPriority.URGENTE, "Dr. García", "Evaluación respuesta tratamiento TB"),
    ("p3", TaskType.ESTUDIO, "Hemocultivos x3 y tipificación", date(2025, 9, 11),
     TaskPriority.URGENTE, "Dr. Alonso", "Descartar bacteriemia en paciente VIH"),
    ("p4", TaskType.ESTUDIO, "Hemocultivos x3, Ecocardiograma", date(2025, 9, 13),
     TaskPriority.ALTA, "Dr. Torres", "Descartar endocarditis - Fiebre 3 semanas"),
    ("p5", TaskType.CONTROL, "HBsAg, Anti-HBc, Carga viral HBV", date(2025, 9, 14),
     TaskPriority.MEDIA, "Dr. García", "Control hepatitis B crónica"),
    ("p1", TaskType.SEGUIMIENTO, "Evaluación adherencia TARV", date(2025, 9, 17),
     TaskPriority.MEDIA, "Dr. Alonso", "Revisar efectos adversos ARV"),
    ("p6", TaskType.CULTIVO, "Urocultivo y antibiograma", date(2025, 9, 16),
     TaskPriority.ALTA, "Dr. García", "ITU complicada post-endocarditis"),
    ("p6", TaskType.ESTUDIO, "Ecocardiograma transtorácico", date(2025, 9, 18),
     TaskPriority.ALTA, "Dr. García", "Control evolución endocarditis"),
]

# (fecha, máx turnos, máx espontáneas, predicción, agendados, espontáneas)
CAPACITY = [
    (date(2025, 9, 8), 20, 5, 3, 0, 0),
    (date(2025, 9, 9), 20, 5, 3, 0, 0),
    (date(2025, 9, 10), 20, 5, 3, 5, 1),
    (date(2025, 9, 11), 20, 5, 3, 1, 0),
    (date(2025, 9, 12), 18, 4, 4, 0, 0),
]


async def seed(create_tables: bool) -> None:
    if async_session_factory is None:
        print("ERROR: DATABASE_URL no configurada")
        sys.exit(1)

    if create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        print("Esquema creado")

    store = RecordStore(async_session_factory)
    names: dict[str, str] = {}
    failures = 0

    for key, name, dni, phone, email, address, birth_date in PATIENTS:
        names[key] = name
        result = await store.create_patient(
            PatientCreate(
                name=name, dni=dni, phone=phone, email=email,
                address=address, birth_date=birth_date,
            ),
            record_id=_patient_id(key),
        )
        if not result.ok:
            failures += 1
            print(f"  ✗ Paciente {name}: {result}")

    for key, doctor, day, time, notes, spontaneous, new_patient in APPOINTMENTS:
        result = await store.create_appointment(
            AppointmentCreate(
                patient_id=_patient_id(key),
                patient_name=names[key],
                doctor_name=doctor,
                date=day,
                time=time,
                notes=notes,
                is_spontaneous=spontaneous,
                is_new_patient=new_patient,
                status=AppointmentStatus.SCHEDULED,
            )
        )
        if not result.ok:
            failures += 1
            print(f"  ✗ Turno {names[key]} {day} {time}: {result}")

    for key, task_type, description, due, priority, doctor, notes in TASKS:
        result = await store.create_task(
            TaskCreate(
                patient_id=_patient_id(key),
                patient_name=names[key],
                type=task_type,
                description=description,
                due_date=due,
                priority=priority,
                assigned_doctor=doctor,
                notes=notes,
            )
        )
        if not result.ok:
            failures += 1
            print(f"  ✗ Pendiente {description}: {result}")

    for day, max_appts, max_spont, predicted, scheduled, spontaneous in CAPACITY:
        result = await store.create_capacity(
            CapacityCreate(
                date=day,
                max_appointments=max_appts,
                max_spontaneous=max_spont,
                predicted_spontaneous=predicted,
                current_scheduled=scheduled,
                current_spontaneous=spontaneous,
            )
        )
        if not result.ok:
            failures += 1
            print(f"  ✗ Capacidad {day}: {result}")

    await engine.dispose()
    total = len(PATIENTS) + len(APPOINTMENTS) + len(TASKS) + len(CAPACITY)
    print(f"Seed terminado: {total - failures}/{total} registros cargados")


def main() -> None:
    parser = argparse.ArgumentParser(description="Carga datos de demostración")
    parser.add_argument(
        "--create-tables", action="store_true",
        help="Crear las tablas con metadata.create_all antes de cargar",
    )
    args = parser.parse_args()
    asyncio.run(seed(args.create_tables))


if __name__ == "__main__":
    main()
