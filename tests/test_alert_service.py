"""
Tests del evaluador de alertas de capacidad.
"""

from hubinfecto.schemas.capacity import AlertLevel
from hubinfecto.services.alert_service import ALERT_RULES, evaluate_alerts


def _codes(alerts):
    return [a.code for a in alerts]


def test_rules_are_ordered():
    assert [r.code for r in ALERT_RULES] == [
        "capacity_high",
        "spontaneous_full",
        "spontaneous_forecast_exceeded",
        "capacity_under_control",
    ]


def test_busy_day_fires_high_and_spontaneous_full(make_capacity):
    capacity = make_capacity(current_scheduled=17, current_spontaneous=5)

    alerts = evaluate_alerts(capacity)

    assert _codes(alerts) == ["capacity_high", "spontaneous_full"]
    assert [a.level for a in alerts] == [AlertLevel.WARNING, AlertLevel.DANGER]
    assert alerts[0].message == "Capacidad del día al 80%+"


def test_threshold_itself_is_under_control(make_capacity):
    alerts = evaluate_alerts(make_capacity(current_scheduled=16))

    assert _codes(alerts) == ["capacity_under_control"]
    assert alerts[0].level == AlertLevel.INFO


def test_under_control_coexists_with_spontaneous_alerts(make_capacity):
    capacity = make_capacity(predicted_spontaneous=6, current_scheduled=5, current_spontaneous=1)

    assert _codes(evaluate_alerts(capacity)) == [
        "spontaneous_forecast_exceeded",
        "capacity_under_control",
    ]


def test_suppress_under_control_when_other_alerts_fire(make_capacity):
    capacity = make_capacity(predicted_spontaneous=6, current_scheduled=5, current_spontaneous=1)

    alerts = evaluate_alerts(capacity, suppress_under_control=True)

    assert _codes(alerts) == ["spontaneous_forecast_exceeded"]


def test_suppress_keeps_under_control_when_alone(make_capacity):
    alerts = evaluate_alerts(make_capacity(current_scheduled=2), suppress_under_control=True)

    assert _codes(alerts) == ["capacity_under_control"]


def test_zero_spontaneous_capacity_counts_as_full(make_capacity):
    capacity = make_capacity(max_appointments=0, max_spontaneous=0, predicted_spontaneous=0)

    assert _codes(evaluate_alerts(capacity)) == ["spontaneous_full", "capacity_under_control"]


def test_custom_threshold_in_rule_and_message(make_capacity):
    capacity = make_capacity(current_scheduled=16)

    alerts = evaluate_alerts(capacity, threshold=0.75)

    assert _codes(alerts) == ["capacity_high"]
    assert alerts[0].message == "Capacidad del día al 75%+"
