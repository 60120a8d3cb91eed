"""
Servicio del panel de inicio: turnos de hoy, capacidad con alertas,
estadísticas de la semana y pendientes agrupados por paciente.
"""

from datetime import date

from hubinfecto.models.appointment import AppointmentStatus
from hubinfecto.schemas.agenda import HomeDashboardResponse, HomeSummary
from hubinfecto.schemas.capacity import CapacityDayResponse, DailyCapacityData
from hubinfecto.services import agenda_service, capacity_service, task_service
from hubinfecto.services.alert_service import DEFAULT_THRESHOLD, evaluate_alerts
from hubinfecto.services.snapshot import ClinicSnapshot


def capacity_day(
    capacity: DailyCapacityData,
    *,
    threshold: float = DEFAULT_THRESHOLD,
    suppress_under_control: bool = False,
) -> CapacityDayResponse:
    """Capacidad de un día con sus métricas y alertas."""
    metrics = capacity_service.compute_metrics(capacity)
    alerts = evaluate_alerts(
        capacity,
        metrics,
        threshold=threshold,
        suppress_under_control=suppress_under_control,
    )
    return CapacityDayResponse(capacity=capacity, metrics=metrics, alerts=alerts)


def build_home_dashboard(
    snapshot: ClinicSnapshot,
    today: date,
    *,
    threshold: float = DEFAULT_THRESHOLD,
    suppress_under_control: bool = False,
) -> HomeDashboardResponse:
    todays = sorted(
        agenda_service.appointments_for_day(snapshot.appointments, today),
        key=lambda a: a.time,
    )

    today_capacity = capacity_service.capacity_for_date(snapshot.capacity, today)
    capacity = None
    if today_capacity is not None:
        capacity = capacity_day(
            today_capacity,
            threshold=threshold,
            suppress_under_control=suppress_under_control,
        )

    week = agenda_service.work_week(today)
    week_capacity = capacity_service.capacity_in_range(snapshot.capacity, week[0], week[-1])

    return HomeDashboardResponse(
        today=today,
        appointments=todays,
        capacity=capacity,
        weekly_stats=capacity_service.weekly_stats(week_capacity),
        segmentation=agenda_service.segmentation_counts(todays),
        patient_tasks=agenda_service.group_tasks_by_patient(todays, snapshot.tasks, today),
        summary=HomeSummary(
            urgent_pending_tasks=task_service.urgent_pending_count(snapshot.tasks),
            completed_today=sum(1 for a in todays if a.status == AppointmentStatus.COMPLETED),
            spontaneous_today=sum(1 for a in todays if a.is_spontaneous),
        ),
    )
