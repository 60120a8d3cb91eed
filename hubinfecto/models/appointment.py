"""
Modelo Appointment — Turnos de la agenda del consultorio.

El único cambio de estado dentro del panel es el toggle "visto":
    completed → scheduled
    (cualquier otro estado) → completed
"""

import enum
import uuid
import datetime

from sqlalchemy import Boolean, Date, Enum, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from hubinfecto.database import Base


class AppointmentStatus(str, enum.Enum):
    """Estados de un turno."""
    SCHEDULED = "scheduled"
    ARRIVED = "arrived"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def toggled_status(current: AppointmentStatus) -> AppointmentStatus:
    """Estado resultante de marcar/desmarcar un turno como visto."""
    if current == AppointmentStatus.COMPLETED:
        return AppointmentStatus.SCHEDULED
    return AppointmentStatus.COMPLETED


class Appointment(Base):
    __tablename__ = "appointments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    patient_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("patients.id"), nullable=True
    )

    # ── Datos del turno ──────────────────────────────
    patient_name: Mapped[str] = mapped_column(String(200), nullable=False)
    doctor_name: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    time: Mapped[str] = mapped_column(
        String(5), nullable=False, comment="Hora local HH:MM"
    )
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_spontaneous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_new_patient: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
        comment="true = paciente nuevo, false = recitado",
    )
    status: Mapped[AppointmentStatus] = mapped_column(
        Enum(AppointmentStatus, name="appointment_status"),
        nullable=False,
        default=AppointmentStatus.SCHEDULED,
    )

    __table_args__ = (
        Index("idx_appointment_date", "date", "time"),
        Index("idx_appointment_patient", "patient_id"),
    )

    def __repr__(self) -> str:
        return f"<Appointment {self.id} [{self.status.value}] {self.date} {self.time}>"
