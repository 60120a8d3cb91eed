"""
Modelos SQLAlchemy — exportar todos para que Alembic los detecte.
"""

from hubinfecto.models.patient import Patient
from hubinfecto.models.appointment import Appointment, AppointmentStatus
from hubinfecto.models.daily_capacity import DailyCapacity
from hubinfecto.models.pending_task import (
    PendingTask,
    TaskPriority,
    TaskStatus,
    TaskType,
)

__all__ = [
    "Patient",
    "Appointment",
    "AppointmentStatus",
    "DailyCapacity",
    "PendingTask",
    "TaskPriority",
    "TaskStatus",
    "TaskType",
]
