"""create patients, appointments, pending_tasks and daily_capacity

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2025-09-08 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "a1c2e3f4b5d6"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

appointment_status = sa.Enum(
    "SCHEDULED", "ARRIVED", "IN_PROGRESS", "COMPLETED", "CANCELLED",
    name="appointment_status",
)
task_type = sa.Enum("ESTUDIO", "CONTROL", "CULTIVO", "SEGUIMIENTO", name="task_type")
task_priority = sa.Enum("BAJA", "MEDIA", "ALTA", "URGENTE", name="task_priority")
task_status = sa.Enum("PENDIENTE", "EN_PROGRESO", "COMPLETADA", name="task_status")


def upgrade() -> None:
    op.create_table(
        "patients",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("dni", sa.String(15), nullable=False),
        sa.Column("phone", sa.String(30), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("address", sa.String(500), nullable=False, server_default=""),
        sa.Column("birth_date", sa.Date, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_patients_dni", "patients", ["dni"], unique=True)

    op.create_table(
        "appointments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("patient_id", sa.Uuid(), sa.ForeignKey("patients.id"), nullable=True),
        sa.Column("patient_name", sa.String(200), nullable=False),
        sa.Column("doctor_name", sa.String(200), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("time", sa.String(5), nullable=False, comment="Hora local HH:MM"),
        sa.Column("notes", sa.Text, nullable=False, server_default=""),
        sa.Column("is_spontaneous", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_new_patient", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("status", appointment_status, nullable=False, server_default="SCHEDULED"),
    )
    op.create_index("idx_appointment_date", "appointments", ["date", "time"])
    op.create_index("idx_appointment_patient", "appointments", ["patient_id"])

    op.create_table(
        "pending_tasks",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("patient_id", sa.Uuid(), sa.ForeignKey("patients.id"), nullable=False),
        sa.Column("patient_name", sa.String(200), nullable=True),
        sa.Column("type", task_type, nullable=False),
        sa.Column("description", sa.String(500), nullable=False),
        sa.Column("due_date", sa.Date, nullable=False),
        sa.Column("priority", task_priority, nullable=False, server_default="MEDIA"),
        sa.Column("status", task_status, nullable=False, server_default="PENDIENTE"),
        sa.Column("assigned_doctor", sa.String(200), nullable=False),
        sa.Column("notes", sa.Text, nullable=False, server_default=""),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("idx_task_patient", "pending_tasks", ["patient_id"])
    op.create_index("idx_task_status", "pending_tasks", ["status", "priority"])

    op.create_table(
        "daily_capacity",
        sa.Column("date", sa.Date, primary_key=True),
        sa.Column("max_appointments", sa.Integer, nullable=False, server_default="0"),
        sa.Column("max_spontaneous", sa.Integer, nullable=False, server_default="0"),
        sa.Column("predicted_spontaneous", sa.Integer, nullable=False, server_default="0"),
        sa.Column("current_scheduled", sa.Integer, nullable=False, server_default="0"),
        sa.Column("current_spontaneous", sa.Integer, nullable=False, server_default="0"),
        sa.CheckConstraint("max_appointments >= 0", name="ck_capacity_max_appointments"),
        sa.CheckConstraint("max_spontaneous >= 0", name="ck_capacity_max_spontaneous"),
        sa.CheckConstraint("predicted_spontaneous >= 0", name="ck_capacity_predicted"),
        sa.CheckConstraint("current_scheduled >= 0", name="ck_capacity_current_scheduled"),
        sa.CheckConstraint("current_spontaneous >= 0", name="ck_capacity_current_spontaneous"),
    )


def downgrade() -> None:
    op.drop_table("daily_capacity")
    op.drop_index("idx_task_status", table_name="pending_tasks")
    op.drop_index("idx_task_patient", table_name="pending_tasks")
    op.drop_table("pending_tasks")
    op.drop_index("idx_appointment_patient", table_name="appointments")
    op.drop_index("idx_appointment_date", table_name="appointments")
    op.drop_table("appointments")
    op.drop_index("ix_patients_dni", table_name="patients")
    op.drop_table("patients")

    bind = op.get_bind()
    for enum_type in (task_status, task_priority, task_type, appointment_status):
        enum_type.drop(bind, checkfirst=True)
