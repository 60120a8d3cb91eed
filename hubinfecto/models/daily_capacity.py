"""
Modelo DailyCapacity — cupos de turnos por día calendario.
"""

import datetime

from sqlalchemy import CheckConstraint, Date, Integer
from sqlalchemy.orm import Mapped, mapped_column

from hubinfecto.database import Base


class DailyCapacity(Base):
    __tablename__ = "daily_capacity"

    date: Mapped[datetime.date] = mapped_column(Date, primary_key=True)

    # ── Cupos configurados ───────────────────────────
    max_appointments: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, comment="Total de turnos disponibles"
    )
    max_spontaneous: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
        comment="Turnos reservados para espontáneas (subconjunto del total)",
    )
    predicted_spontaneous: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, comment="Pronóstico de espontáneas"
    )

    # ── Ocupación actual ─────────────────────────────
    # Sin tope contra max_appointments: el sobreturno es representable
    current_scheduled: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_spontaneous: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("max_appointments >= 0", name="ck_capacity_max_appointments"),
        CheckConstraint("max_spontaneous >= 0", name="ck_capacity_max_spontaneous"),
        CheckConstraint("predicted_spontaneous >= 0", name="ck_capacity_predicted"),
        CheckConstraint("current_scheduled >= 0", name="ck_capacity_current_scheduled"),
        CheckConstraint("current_spontaneous >= 0", name="ck_capacity_current_spontaneous"),
    )

    def __repr__(self) -> str:
        return (
            f"<DailyCapacity {self.date} "
            f"{self.current_scheduled}/{self.max_appointments}>"
        )
