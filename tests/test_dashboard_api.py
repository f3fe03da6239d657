"""
Integration tests for the Dashboard API routes.

Runs the FastAPI app with TestClient. Backend calls go through the
in-memory fake backend via the ``get_transport`` dependency, so the
bearer-token forwarding and the error mapping are exercised for real.

Usage:
    pytest tests/test_dashboard_api.py -v
"""
import pytest
from fastapi.testclient import TestClient

from conftest import BASE_URL, VALID_TOKEN
from server.dashboard_api.config import Settings, get_settings
from server.dashboard_api.dependencies import get_transport
from server.dashboard_api.main import app

AUTH = {"Authorization": f"Bearer {VALID_TOKEN}"}


@pytest.fixture
def api(backend):
    """TestClient wired to the fake backend."""
    app.dependency_overrides[get_transport] = backend.transport
    app.dependency_overrides[get_settings] = lambda: Settings(api_url=BASE_URL)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthAndAuth:
    """Test service health and credential handling."""

    def test_health(self, api):
        response = api.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_missing_token(self, api, backend):
        response = api.get("/api/dashboard")

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing bearer token"
        assert backend.requests == []

    def test_expired_token(self, api):
        response = api.get("/api/tasks", headers={"Authorization": "Bearer stale"})

        assert response.status_code == 401
        assert response.json()["sessionExpired"] is True
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_login(self, api):
        response = api.post(
            "/api/auth/login", json={"email": "ada@example.com", "password": "secret123"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token"] == VALID_TOKEN
        assert data["user"]["currentBMI"] == 24.2

    def test_login_rejected(self, api):
        response = api.post("/api/auth/login", json={"email": "ada@example.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_register_password_mismatch(self, api, backend):
        response = api.post(
            "/api/auth/register",
            json={
                "name": "Grace",
                "email": "grace@example.com",
                "password": "secret123",
                "confirmPassword": "secret321",
            },
        )

        assert response.status_code == 422
        assert response.json() == {"detail": "Passwords do not match", "field": "confirm_password"}
        assert backend.requests == []

    def test_register(self, api):
        response = api.post(
            "/api/auth/register",
            json={
                "name": "Grace",
                "email": "grace@example.com",
                "password": "secret123",
                "confirmPassword": "secret123",
                "height": "165",
                "weight": "60",
            },
        )

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Grace"


class TestDashboardRoute:
    """Test GET /api/dashboard."""

    def test_dashboard(self, api, backend):
        backend.add_task("Walk", completed=True)
        backend.add_task("Stretch")
        for _ in range(12):
            backend.bmi_history.append({"date": "2024-11-01T08:00:00Z", "bmi": 24.0})

        response = api.get("/api/dashboard", headers=AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["profile"]["name"] == "Ada Lovelace"
        assert data["stats"]["completedTasks"] == 1
        assert len(data["bmiHistory"]) == 10
        assert data["cards"] == {
            "currentBMI": "24.2",
            "completedTasks": "1",
            "pendingTasks": "1",
            "completionRate": "50%",
        }
        assert data["errors"] == {}

    def test_partial_failure(self, api, backend):
        backend.failures["/tasks/stats/summary"] = 500

        response = api.get("/api/dashboard", headers=AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["stats"] is None
        assert data["cards"]["completedTasks"] == "N/A"
        assert "stats" in data["errors"]

    def test_strict_failure(self, api, backend):
        backend.failures["/tasks/stats/summary"] = 500

        response = api.get("/api/dashboard", params={"strict": True}, headers=AUTH)

        assert response.status_code == 502
        assert response.json()["upstreamStatus"] == 500


class TestTaskRoutes:
    """Test the /api/tasks routes."""

    def test_list_with_filter(self, api, backend):
        backend.add_task("Walk", completed=True)
        backend.add_task("Stretch")

        response = api.get("/api/tasks", params={"filter": "pending"}, headers=AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["filter"] == "pending"
        assert [t["title"] for t in data["tasks"]] == ["Stretch"]

    def test_invalid_filter(self, api):
        response = api.get("/api/tasks", params={"filter": "someday"}, headers=AUTH)

        assert response.status_code == 422

    def test_create(self, api, backend):
        response = api.post(
            "/api/tasks", json={"title": "Drink water", "category": "hydration"}, headers=AUTH
        )

        assert response.status_code == 201
        tasks = response.json()["tasks"]
        assert tasks[0]["title"] == "Drink water"
        assert tasks[0]["category"] == "hydration"
        assert len(backend.tasks) == 1

    def test_create_empty_title(self, api, backend):
        response = api.post("/api/tasks", json={"title": "  "}, headers=AUTH)

        assert response.status_code == 422
        assert response.json() == {"detail": "Task title is required", "field": "title"}
        assert backend.calls("POST") == []

    def test_toggle(self, api, backend):
        task = backend.add_task("Walk")

        response = api.patch(f"/api/tasks/{task['_id']}/toggle", headers=AUTH)

        assert response.status_code == 200
        assert response.json()["tasks"][0]["completed"] is True

    def test_delete_requires_confirmation(self, api, backend):
        task = backend.add_task("Walk")

        response = api.delete(f"/api/tasks/{task['_id']}", headers=AUTH)

        assert response.status_code == 409
        assert backend.calls("DELETE") == []
        assert len(backend.tasks) == 1

    def test_delete_confirmed(self, api, backend):
        task = backend.add_task("Walk")

        response = api.delete(
            f"/api/tasks/{task['_id']}", params={"confirm": True}, headers=AUTH
        )

        assert response.status_code == 200
        assert response.json() == {"deleted": True, "tasks": []}
        assert backend.tasks == []

    def test_stats(self, api, backend):
        backend.add_task("Walk", completed=True)

        response = api.get("/api/tasks/stats", headers=AUTH)

        assert response.status_code == 200
        assert response.json()["completionRate"] == 100


class TestBMIRoutes:
    """Test the /api/bmi routes."""

    def test_calculate(self, api, backend):
        response = api.get("/api/bmi/calculate", params={"height": 170, "weight": 70})

        assert response.status_code == 200
        data = response.json()
        assert data["bmi"] == 24.2
        assert data["category"] == "Normal weight"
        assert data["persisted"] is False
        assert backend.requests == []

    def test_calculate_missing_weight(self, api):
        response = api.get("/api/bmi/calculate", params={"height": 170})

        assert response.status_code == 422
        assert response.json()["detail"] == "Please enter both height and weight"

    def test_calculate_rejects_nan(self, api, backend):
        response = api.get("/api/bmi/calculate", params={"height": "nan", "weight": 70})

        assert response.status_code == 422
        assert response.json()["detail"] == "Height and weight must be finite numbers"
        assert backend.requests == []

    def test_update(self, api, backend):
        response = api.post("/api/bmi", json={"height": 180, "weight": 90}, headers=AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["persisted"] is True
        assert data["currentBMI"] == 27.8
        assert backend.user["currentBMI"] == 27.8

    def test_history(self, api, backend):
        backend.bmi_history.extend(
            {"date": "2024-11-01T08:00:00Z", "bmi": bmi} for bmi in (24.0, 24.1, 24.2, 24.3, 24.4)
        )

        response = api.get("/api/bmi/history", params={"limit": 3}, headers=AUTH)

        assert response.status_code == 200
        assert [e["bmi"] for e in response.json()] == [24.0, 24.1, 24.2]


class TestPlanRoutes:
    """Test the /api/ai routes."""

    def test_structured_recommendations(self, api, backend):
        backend.ai_responses["recommendations"] = {
            "data": {"recommendations": {"nutrition": ["eat vegetables", "drink water"]}}
        }

        response = api.post("/api/ai/recommendations", json={"focus": "nutrition"}, headers=AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["structured"] is True
        assert data["entries"] == [
            {"key": "nutrition", "title": "nutrition", "items": ["eat vegetables", "drink water"]}
        ]
        assert data["lines"] == ["Nutrition", "  • eat vegetables", "  • drink water"]

    def test_invalid_focus(self, api, backend):
        response = api.post("/api/ai/recommendations", json={"focus": "sleep"}, headers=AUTH)

        assert response.status_code == 400
        assert backend.requests == []

    def test_raw_text_meal_plan(self, api):
        response = api.post("/api/ai/meal-plan", json={"duration": 3}, headers=AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["structured"] is False
        assert data["text"] == "Plain meal-plan advice."
        assert data["lines"] == ["Your Meal Plan", "Plain meal-plan advice."]

    def test_workout_plan_upstream_failure(self, api, backend):
        backend.failures["/ai/workout-plan"] = 500

        response = api.post("/api/ai/workout-plan", json={}, headers=AUTH)

        assert response.status_code == 502
        assert response.json()["detail"] == "/ai/workout-plan is broken"

    def test_status(self, api):
        response = api.get("/api/ai/status", headers=AUTH)

        assert response.json() == {"configured": True}
