"""
Tests de los endpoints de la API v1 sobre el snapshot de ejemplo.
"""

import pytest

API = "/api/v1"


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# ── Inicio ───────────────────────────────────────────

@pytest.mark.asyncio
async def test_home_dashboard(client):
    response = await client.get(f"{API}/dashboard/home")

    assert response.status_code == 200
    body = response.json()
    assert body["today"] == "2025-09-10"
    assert [a["time"] for a in body["appointments"]] == ["08:30", "10:00", "14:00", "16:30"]
    assert [a["code"] for a in body["capacity"]["alerts"]] == ["capacity_under_control"]
    assert body["capacity"]["metrics"]["remaining_appointment_slots"] == 15
    assert body["weekly_stats"] == {
        "total_capacity": 58,
        "total_scheduled": 5,
        "total_predicted_spontaneous": 10,
        "total_max_spontaneous": 14,
        "available_slots": 53,
        "capacity_utilization_pct": 9,
    }
    assert body["segmentation"]["new_patients"] == 1
    assert body["segmentation"]["returning_patients"] == 3
    assert [len(g["tasks"]) for g in body["patient_tasks"]] == [2, 1, 1, 0]
    assert body["summary"] == {
        "urgent_pending_tasks": 1,
        "completed_today": 1,
        "spontaneous_today": 1,
    }


@pytest.mark.asyncio
async def test_home_dashboard_day_without_capacity(client):
    response = await client.get(f"{API}/dashboard/home", params={"today": "2025-09-11"})

    body = response.json()
    assert body["capacity"] is None
    assert len(body["appointments"]) == 1


# ── Agenda ───────────────────────────────────────────

@pytest.mark.asyncio
async def test_week_agenda(client):
    response = await client.get(f"{API}/agenda/week", params={"date": "2025-09-14"})

    body = response.json()
    assert body["week_start"] == "2025-09-08"
    assert body["week_end"] == "2025-09-12"
    assert len(body["days"]) == 5
    assert body["summary"]["total"] == 5


@pytest.mark.asyncio
async def test_month_agenda(client):
    response = await client.get(f"{API}/agenda/month", params={"date": "2025-09-01"})

    cells = response.json()["cells"]
    assert len(cells) == 35
    assert [c["date"] for c in cells if c["is_today"]] == ["2025-09-10"]


@pytest.mark.asyncio
async def test_day_agenda_defaults_to_today(client):
    response = await client.get(f"{API}/agenda/day")

    body = response.json()
    assert body["date"] == "2025-09-10"
    assert len(body["appointments"]) == 4


# ── Turnos ───────────────────────────────────────────

@pytest.mark.asyncio
async def test_list_appointments_range(client):
    response = await client.get(
        f"{API}/appointments", params={"date_from": "2025-09-11", "date_to": "2025-09-15"}
    )

    assert [a["date"] for a in response.json()] == ["2025-09-11", "2025-09-15"]


@pytest.mark.asyncio
async def test_list_appointments_inverted_range(client):
    response = await client.get(
        f"{API}/appointments", params={"date_from": "2025-09-12", "date_to": "2025-09-10"}
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_toggle_appointment_without_backend(client, clinic_snapshot):
    appointment = clinic_snapshot.appointments[0]

    response = await client.patch(f"{API}/appointments/{appointment.id}/toggle")

    assert response.status_code == 200
    body = response.json()
    assert body["synced"] is False
    assert body["record"]["status"] == "completed"
    assert body["snapshot_version"] == 1


@pytest.mark.asyncio
async def test_toggle_unknown_appointment(client):
    response = await client.patch(
        f"{API}/appointments/00000000-0000-0000-0000-000000000000/toggle"
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_appointment_invalid_time(client):
    response = await client.post(
        f"{API}/appointments",
        json={
            "patient_name": "Laura Vega",
            "doctor_name": "Dr. García",
            "date": "2025-09-11",
            "time": "25:00",
        },
    )

    assert response.status_code == 422


# ── Capacidad ────────────────────────────────────────

@pytest.mark.asyncio
async def test_capacity_day_not_configured(client):
    response = await client.get(f"{API}/capacity/2025-09-09")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_capacity_alerts_after_update(client):
    update = await client.patch(
        f"{API}/capacity/2025-09-10",
        json={"current_scheduled": 17, "current_spontaneous": 5},
    )
    assert update.status_code == 200

    response = await client.get(f"{API}/capacity/2025-09-10/alerts")

    assert [a["code"] for a in response.json()] == ["capacity_high", "spontaneous_full"]


@pytest.mark.asyncio
async def test_capacity_update_rejects_spontaneous_over_total(client):
    response = await client.patch(f"{API}/capacity/2025-09-10", json={"max_spontaneous": 25})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_capacity_create_validation(client):
    response = await client.post(
        f"{API}/capacity",
        json={"date": "2025-09-09", "max_appointments": 3, "max_spontaneous": 5},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_capacity_create_existing_day_conflicts(synced_client):
    first = await synced_client.post(
        f"{API}/capacity",
        json={"date": "2025-09-10", "max_appointments": 20, "max_spontaneous": 5},
    )
    second = await synced_client.post(
        f"{API}/capacity",
        json={"date": "2025-09-10", "max_appointments": 8, "max_spontaneous": 2},
    )

    assert first.status_code == 201
    assert second.status_code == 409
    assert "PATCH" in second.json()["detail"]

    response = await synced_client.get(f"{API}/capacity/2025-09-10")
    assert response.json()["capacity"]["max_appointments"] == 20

    update = await synced_client.patch(
        f"{API}/capacity/2025-09-10", json={"max_appointments": 8, "max_spontaneous": 2}
    )
    assert update.status_code == 200
    assert update.json()["synced"] is True
    assert update.json()["record"]["max_appointments"] == 8


@pytest.mark.asyncio
async def test_weekly_stats(client):
    response = await client.get(f"{API}/capacity/weekly-stats", params={"date": "2025-09-15"})

    body = response.json()
    assert body["total_capacity"] == 20
    assert body["capacity_utilization_pct"] == 5


# ── Pendientes y pacientes ───────────────────────────

@pytest.mark.asyncio
async def test_tasks_sorted_by_priority(client):
    response = await client.get(f"{API}/tasks", params={"sort": "priority"})

    body = response.json()
    assert body["total"] == 4
    assert [t["priority"] for t in body["items"]] == ["urgente", "urgente", "alta", "media"]


@pytest.mark.asyncio
async def test_toggle_task(client, clinic_snapshot):
    task = clinic_snapshot.tasks[0]

    response = await client.patch(f"{API}/tasks/{task.id}/toggle")

    body = response.json()
    assert body["record"]["status"] == "completada"
    assert body["record"]["completed_at"] is not None


@pytest.mark.asyncio
async def test_search_patients(client):
    response = await client.get(f"{API}/patients", params={"name": "maría"})

    assert response.json()["total"] == 1


@pytest.mark.asyncio
async def test_create_patient_synced(synced_client):
    response = await synced_client.post(
        f"{API}/patients", json={"name": "Laura Vega", "dni": "38901234"}
    )

    assert response.status_code == 201
    assert response.json()["synced"] is True

    listing = await synced_client.get(f"{API}/patients", params={"dni": "3890"})
    assert listing.json()["total"] == 1


@pytest.mark.asyncio
async def test_create_patient_duplicate_dni(synced_client):
    payload = {"name": "Laura Vega", "dni": "38901234"}

    first = await synced_client.post(f"{API}/patients", json=payload)
    second = await synced_client.post(
        f"{API}/patients", json={**payload, "name": "Laura V."}
    )

    assert first.status_code == 201
    assert second.status_code == 409
    listing = await synced_client.get(f"{API}/patients", params={"dni": "38901234"})
    assert listing.json()["total"] == 1


# ── Snapshot ─────────────────────────────────────────

@pytest.mark.asyncio
async def test_snapshot_refresh(synced_client):
    await synced_client.post(
        f"{API}/capacity",
        json={"date": "2025-09-10", "max_appointments": 20, "max_spontaneous": 5},
    )

    response = await synced_client.post(f"{API}/snapshot/refresh")

    body = response.json()
    assert body["capacity_days"] == 1
    assert body["refreshed_at"] is not None
