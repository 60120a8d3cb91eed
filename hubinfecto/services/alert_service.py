"""
Evaluador de alertas de capacidad.

Cada regla es un predicado independiente sobre la capacidad del día y sus
métricas. Se evalúan todas, en orden, y se devuelven todas las que aplican.

La regla "capacidad bajo control" sólo vuelve a mirar el umbral de
utilización, no las reglas de espontáneas: puede coexistir con
"máximo de espontáneas alcanzado" o con "predicción supera capacidad".
Se mantiene así salvo que SUPPRESS_UNDER_CONTROL_WITH_ALERTS esté activo.
"""

from collections.abc import Callable
from dataclasses import dataclass

from hubinfecto.schemas.capacity import (
    AlertLevel,
    CapacityAlert,
    CapacityMetrics,
    DailyCapacityData,
)
from hubinfecto.services.capacity_service import compute_metrics

DEFAULT_THRESHOLD = 0.8

UNDER_CONTROL_CODE = "capacity_under_control"

Predicate = Callable[[DailyCapacityData, CapacityMetrics, float], bool]


@dataclass(frozen=True)
class AlertRule:
    code: str
    level: AlertLevel
    message: str
    applies: Predicate

    def to_alert(self, threshold: float) -> CapacityAlert:
        message = self.message.format(threshold_pct=round(threshold * 100))
        return CapacityAlert(code=self.code, level=self.level, message=message)


# ── Reglas (en orden de presentación) ────────────────

ALERT_RULES: tuple[AlertRule, ...] = (
    AlertRule(
        code="capacity_high",
        level=AlertLevel.WARNING,
        message="Capacidad del día al {threshold_pct}%+",
        applies=lambda cap, m, threshold: m.scheduled_utilization > threshold,
    ),
    AlertRule(
        code="spontaneous_full",
        level=AlertLevel.DANGER,
        message="Máximo de espontáneas alcanzado",
        applies=lambda cap, m, threshold: cap.current_spontaneous >= cap.max_spontaneous,
    ),
    AlertRule(
        code="spontaneous_forecast_exceeded",
        level=AlertLevel.CAUTION,
        message="Predicción supera capacidad espontánea",
        applies=lambda cap, m, threshold: cap.predicted_spontaneous > cap.max_spontaneous,
    ),
    AlertRule(
        code=UNDER_CONTROL_CODE,
        level=AlertLevel.INFO,
        message="Capacidad bajo control",
        applies=lambda cap, m, threshold: m.scheduled_utilization <= threshold,
    ),
)


def evaluate_alerts(
    capacity: DailyCapacityData,
    metrics: CapacityMetrics | None = None,
    *,
    threshold: float = DEFAULT_THRESHOLD,
    suppress_under_control: bool = False,
) -> list[CapacityAlert]:
    """
    Devuelve todas las alertas que aplican al día, en el orden de ALERT_RULES.

    Con ``suppress_under_control`` el mensaje "bajo control" se omite
    cuando cualquier otra regla ya disparó.
    """
    if metrics is None:
        metrics = compute_metrics(capacity)

    fired = [rule for rule in ALERT_RULES if rule.applies(capacity, metrics, threshold)]

    if suppress_under_control and any(r.code != UNDER_CONTROL_CODE for r in fired):
        fired = [r for r in fired if r.code != UNDER_CONTROL_CODE]

    return [rule.to_alert(threshold) for rule in fired]
