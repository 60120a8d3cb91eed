"""
Servicio de capacidad: métricas derivadas de un día y agregado
de un período. Funciones puras sobre registros ya cargados.
"""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from hubinfecto.schemas.capacity import (
    CapacityMetrics,
    DailyCapacityData,
    WeeklyCapacityStats,
)


def _ratio(part: int, whole: int) -> float:
    """Cociente con guarda: un cupo de 0 da utilización 0, nunca NaN/inf."""
    if whole == 0:
        return 0.0
    return part / whole


def _round_pct(part: int, whole: int) -> int:
    """Porcentaje entero redondeado hacia arriba en .5 (no bancario)."""
    if whole == 0:
        return 0
    pct = Decimal(part) * 100 / Decimal(whole)
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# ── Un día ───────────────────────────────────────────

def compute_metrics(capacity: DailyCapacityData) -> CapacityMetrics:
    """
    Calcula remanentes y utilización de un día.
    Los remanentes no se recortan: con sobreturno quedan negativos.
    """
    scheduled = _ratio(capacity.current_scheduled, capacity.max_appointments)
    spontaneous = _ratio(capacity.current_spontaneous, capacity.max_spontaneous)

    return CapacityMetrics(
        remaining_appointment_slots=capacity.max_appointments - capacity.current_scheduled,
        remaining_spontaneous_slots=capacity.max_spontaneous - capacity.current_spontaneous,
        scheduled_utilization=scheduled,
        spontaneous_utilization=spontaneous,
        scheduled_pct=scheduled * 100,
        spontaneous_pct=spontaneous * 100,
    )


def capacity_for_date(
    records: Iterable[DailyCapacityData], target_date: date
) -> DailyCapacityData | None:
    """Registro de capacidad del día, o None si no está cargado."""
    for record in records:
        if record.date == target_date:
            return record
    return None


def capacity_in_range(
    records: Iterable[DailyCapacityData],
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[DailyCapacityData]:
    """Registros dentro de [date_from, date_to], ordenados por fecha."""
    selected = [
        r for r in records
        if (date_from is None or r.date >= date_from)
        and (date_to is None or r.date <= date_to)
    ]
    return sorted(selected, key=lambda r: r.date)


# ── Período ──────────────────────────────────────────

def weekly_stats(records: Sequence[DailyCapacityData]) -> WeeklyCapacityStats:
    """Totales de capacidad de un período (típicamente lunes a viernes)."""
    total_capacity = sum(r.max_appointments for r in records)
    total_scheduled = sum(r.current_scheduled for r in records)

    return WeeklyCapacityStats(
        total_capacity=total_capacity,
        total_scheduled=total_scheduled,
        total_predicted_spontaneous=sum(r.predicted_spontaneous for r in records),
        total_max_spontaneous=sum(r.max_spontaneous for r in records),
        available_slots=total_capacity - total_scheduled,
        capacity_utilization_pct=_round_pct(total_scheduled, total_capacity),
    )
