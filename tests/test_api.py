"""HTTP surface tests: routers plus domain error mapping."""

import pytest
from fastapi.testclient import TestClient

from app.database import get_db
from app.main import app


def week_payload(start="09:00", end="17:00"):
    return [
        {
            "day_of_week": d,
            "is_working_day": 1 <= d <= 5,
            "start_time": start,
            "end_time": end,
            "breaks": [
                {"name": "Comida", "start_time": "13:00", "end_time": "14:00", "is_paid": False}
            ] if 1 <= d <= 5 else [],
        }
        for d in range(7)
    ]


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    # No "with" block: skip the lifespan so init_db never touches the real database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def template_id(client):
    response = client.post("/api/schedule-templates", json={"name": "Oficina", "days": week_payload()})
    assert response.status_code == 201
    return response.json()["id"]


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


class TestTemplateEndpoints:
    def test_create_and_get(self, client, template_id):
        response = client.get(f"/api/schedule-templates/{template_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Oficina"
        assert [d["day_of_week"] for d in body["days"]] == list(range(7))
        assert body["days"][1]["breaks"][0]["name"] == "Comida"
        assert body["days"][0]["start_time"] is None

    def test_invalid_day_is_422(self, client):
        days = week_payload()
        days[2]["start_time"], days[2]["end_time"] = "18:00", "09:00"

        response = client.post("/api/schedule-templates", json={"name": "Mala", "days": days})

        assert response.status_code == 422
        assert response.json()["error_type"] == "InvalidScheduleError"

    def test_incomplete_week_is_422(self, client):
        response = client.post("/api/schedule-templates", json={"name": "Corta", "days": week_payload()[:5]})
        assert response.status_code == 422
        assert response.json()["error_type"] == "ScheduleValidationError"

    def test_missing_template_is_404(self, client):
        response = client.get("/api/schedule-templates/999")
        assert response.status_code == 404
        assert response.json()["error_type"] == "NotFoundError"

    def test_list_active_only(self, client, template_id):
        client.post(f"/api/schedule-templates/{template_id}/deactivate")

        assert client.get("/api/schedule-templates").json()[0]["is_active"] is False
        assert client.get("/api/schedule-templates", params={"active_only": "true"}).json() == []

    def test_update_days(self, client, template_id):
        response = client.put(
            f"/api/schedule-templates/{template_id}",
            json={"days": week_payload(start="08:00", end="16:00")},
        )
        assert response.status_code == 200
        assert response.json()["days"][1]["start_time"] == "08:00:00"

    def test_null_description_clears_it(self, client, template_id):
        url = f"/api/schedule-templates/{template_id}"
        client.put(url, json={"description": "Jornada completa"})

        assert client.put(url, json={"name": "Oficina 2"}).json()["description"] == "Jornada completa"
        assert client.put(url, json={"description": None}).json()["description"] is None

    def test_duplicate(self, client, template_id):
        response = client.post(f"/api/schedule-templates/{template_id}/duplicate", json={"name": "Copia"})
        assert response.status_code == 201
        assert response.json()["id"] != template_id
        assert response.json()["name"] == "Copia"

    def test_delete_in_use_deactivates(self, client, employees, template_id):
        client.post("/api/weekly-schedules", json={
            "employee_id": employees[0].id, "template_id": template_id, "year": 2025, "week_number": 4,
        })

        response = client.delete(f"/api/schedule-templates/{template_id}")

        assert response.json() == {"success": True, "deleted": False, "deactivated": True}


class TestWeeklyEndpoints:
    def assign(self, client, employee_id, template_id, week):
        return client.post("/api/weekly-schedules", json={
            "employee_id": employee_id, "template_id": template_id, "year": 2025, "week_number": week,
        })

    def test_assign_then_conflict(self, client, employees, template_id):
        first = self.assign(client, employees[0].id, template_id, 2)
        second = self.assign(client, employees[0].id, template_id, 2)

        assert first.status_code == 201
        assert first.json()["week_number"] == 2
        assert second.status_code == 409
        assert second.json()["error_type"] == "ConflictError"

    def test_invalid_week_is_400(self, client, employees, template_id):
        response = self.assign(client, employees[0].id, template_id, 53)
        assert response.status_code == 400
        assert response.json()["error_type"] == "InvalidRangeError"

    def test_inactive_template_is_409(self, client, employees, template_id):
        client.post(f"/api/schedule-templates/{template_id}/deactivate")
        response = self.assign(client, employees[0].id, template_id, 2)
        assert response.status_code == 409
        assert response.json()["error_type"] == "InactiveTemplateError"

    def test_range(self, client, employees, template_id):
        self.assign(client, employees[0].id, template_id, 3)

        response = client.post("/api/weekly-schedules/range", json={
            "employee_id": employees[0].id,
            "template_id": template_id,
            "start_date": "2025-01-06",
            "end_date": "2025-01-26",
        })

        body = response.json()
        assert response.status_code == 200
        assert [a["week_number"] for a in body["succeeded"]] == [2, 4]
        assert body["failed"] == [
            {"unit": "2025-W03", "error": body["failed"][0]["error"], "error_type": "ConflictError"}
        ]
        assert body["summary"] == "created 2 of 3 weeks; 1 already assigned"

    def test_inverted_range_is_400(self, client, employees, template_id):
        response = client.post("/api/weekly-schedules/range", json={
            "employee_id": employees[0].id,
            "template_id": template_id,
            "start_date": "2025-02-01",
            "end_date": "2025-01-01",
        })
        assert response.status_code == 400

    def test_copy(self, client, employees, template_id):
        source = self.assign(client, employees[0].id, template_id, 6).json()

        response = client.post(
            f"/api/weekly-schedules/{source['id']}/copy",
            json={"employee_ids": [employees[1].id, employees[2].id]},
        )

        body = response.json()
        assert sorted(a["employee_id"] for a in body["succeeded"]) == [employees[1].id, employees[2].id]
        assert body["summary"] == "created 2 of 2 employees"

    def test_list_and_unassign(self, client, employees, template_id):
        created = self.assign(client, employees[0].id, template_id, 9).json()
        url = f"/api/weekly-schedules/employee/{employees[0].id}/year/2025"
        assert [a["id"] for a in client.get(url).json()] == [created["id"]]

        assert client.delete(f"/api/weekly-schedules/{created['id']}").json() == {"success": True}
        assert client.get(url).json() == []
        assert client.delete(f"/api/weekly-schedules/{created['id']}").status_code == 404


class TestEffectiveEndpoints:
    def test_effective_from_template(self, client, employees, template_id):
        client.post("/api/weekly-schedules", json={
            "employee_id": employees[0].id, "template_id": template_id, "year": 2025, "week_number": 2,
        })

        body = client.get(f"/api/weekly-schedules/effective/{employees[0].id}/2025-01-08").json()

        assert body["source"] == "weekly_template"
        assert body["template_id"] == template_id
        assert body["is_working_day"] is True
        assert body["net_minutes"] == 420

    def test_effective_without_schedule(self, client, employees):
        body = client.get(f"/api/weekly-schedules/effective/{employees[1].id}/2025-01-08").json()
        assert body["source"] == "no_schedule"
        assert body["day"] is None
        assert body["net_minutes"] == 0

    def test_week_view(self, client, employees, template_id):
        client.post("/api/weekly-schedules", json={
            "employee_id": employees[0].id, "template_id": template_id, "year": 2025, "week_number": 2,
        })

        body = client.get(f"/api/weekly-schedules/week-view/{employees[0].id}/2025/2").json()

        assert [d["work_date"] for d in body] == [f"2025-01-{d:02d}" for d in range(6, 13)]
        assert sum(d["net_minutes"] for d in body) == 5 * 420
