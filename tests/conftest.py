"""
Pytest fixtures for Health Hub tests.
"""
import sys
import json
import itertools
from pathlib import Path
from typing import Optional

import httpx
import pytest
from dotenv import load_dotenv

# Ensure src/ and the project root are on sys.path so tests can import
# health_hub and server.dashboard_api.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for path in (SRC, ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Load environment variables
load_dotenv()

from health_hub import HealthHubClient, Session  # noqa: E402
from health_hub.models import User  # noqa: E402

BASE_URL = "http://backend.test/api"
VALID_TOKEN = "good-token"


# ============================================================================
# Fake Health Hub backend
# ============================================================================


class FakeBackend:
    """
    In-memory stand-in for the Health Hub REST backend.

    Mounted on httpx.MockTransport. Records every request so tests can
    assert what was (or was not) sent. ``failures`` maps a path to a
    status code that the path should answer with.
    """

    def __init__(self):
        self.user = {
            "_id": "user-1",
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "age": 36,
            "gender": "female",
            "height": 170.0,
            "weight": 70.0,
            "activityLevel": "moderately_active",
            "currentBMI": 24.2,
            "goals": ["improve_fitness"],
            "dietaryRestrictions": ["vegetarian"],
        }
        self.tasks: list[dict] = []
        self.bmi_history: list[dict] = []
        self.ai_responses: dict[str, dict] = {}
        self.failures: dict[str, int] = {}
        self.requests: list[httpx.Request] = []
        self._ids = itertools.count(1)

    # -- helpers ------------------------------------------------------------

    def add_task(self, title: str, completed: bool = False, **fields) -> dict:
        task = {
            "_id": f"task-{next(self._ids)}",
            "title": title,
            "description": fields.get("description", ""),
            "category": fields.get("category", "other"),
            "priority": fields.get("priority", "medium"),
            "completed": completed,
            "createdAt": "2024-12-01T08:00:00Z",
        }
        self.tasks.append(task)
        return task

    def calls(self, method: Optional[str] = None, path: Optional[str] = None) -> list:
        return [
            r for r in self.requests
            if (method is None or r.method == method)
            and (path is None or r.url.path == f"/api{path}")
        ]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client(self, token: Optional[str] = VALID_TOKEN, user: Optional[User] = None) -> HealthHubClient:
        return HealthHubClient(
            base_url=BASE_URL,
            session=Session(token=token, user=user),
            transport=self.transport(),
        )

    # -- request handling ---------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")

        if path in self.failures:
            return httpx.Response(self.failures[path], json={"message": f"{path} is broken"})

        if path == "/auth/login":
            body = json.loads(request.content)
            if body.get("password") != "secret123":
                return httpx.Response(401, json={"message": "Invalid credentials"})
            return httpx.Response(200, json={"token": VALID_TOKEN, "user": self.user})
        if path == "/auth/register":
            body = json.loads(request.content)
            self.user = {**self.user, **body, "_id": "user-2"}
            self.user.pop("password", None)
            return httpx.Response(201, json={"token": VALID_TOKEN, "user": self.user})

        if request.headers.get("Authorization") != f"Bearer {VALID_TOKEN}":
            return httpx.Response(401, json={"message": "Token is not valid"})

        method = request.method
        if path == "/auth/verify":
            return httpx.Response(200, json={"user": self.user})
        if path == "/users/profile" and method == "GET":
            return httpx.Response(200, json=self.user)
        if path == "/users/profile" and method == "PUT":
            self.user.update(json.loads(request.content))
            return httpx.Response(200, json={"message": "Profile updated"})
        if path == "/users/bmi" and method == "PUT":
            body = json.loads(request.content)
            bmi = round(body["weight"] / (body["height"] / 100) ** 2, 1)
            self.user.update(height=body["height"], weight=body["weight"], currentBMI=bmi)
            self.bmi_history.insert(
                0,
                {"date": "2024-12-08T09:00:00Z", "bmi": bmi,
                 "weight": body["weight"], "height": body["height"]},
            )
            return httpx.Response(200, json={"bmi": bmi})
        if path == "/users/bmi-history":
            # Ignores ?limit on purpose: the client must bound the list itself
            return httpx.Response(200, json=self.bmi_history)

        if path == "/tasks/stats/summary":
            completed = sum(1 for t in self.tasks if t["completed"])
            total = len(self.tasks)
            return httpx.Response(200, json={
                "completedTasks": completed,
                "pendingTasks": total - completed,
                "completionRate": round(completed / total * 100) if total else 0,
            })
        if path == "/tasks" and method == "GET":
            tasks = self.tasks
            flag = request.url.params.get("completed")
            if flag is not None:
                tasks = [t for t in tasks if t["completed"] == (flag == "true")]
            return httpx.Response(200, json={"tasks": tasks})
        if path == "/tasks" and method == "POST":
            body = json.loads(request.content)
            task = self.add_task(**body)
            return httpx.Response(201, json=task)
        if path.startswith("/tasks/"):
            task_id = path.split("/")[2]
            task = next((t for t in self.tasks if t["_id"] == task_id), None)
            if task is None:
                return httpx.Response(404, json={"message": "Task not found"})
            if path.endswith("/toggle") and method == "PATCH":
                task["completed"] = not task["completed"]
                return httpx.Response(200, json=task)
            if method == "DELETE":
                self.tasks.remove(task)
                return httpx.Response(200, json={"message": "Task deleted"})
            if method == "PUT":
                task.update(json.loads(request.content))
                return httpx.Response(200, json=task)
            return httpx.Response(200, json=task)

        if path.startswith("/ai/"):
            kind = path.split("/")[2]
            if kind in self.ai_responses:
                return httpx.Response(200, json=self.ai_responses[kind])
            return httpx.Response(200, json={"data": {"rawResponse": f"Plain {kind} advice."}})

        return httpx.Response(404, json={"message": f"No route for {method} {path}"})


@pytest.fixture
def backend():
    """A fresh fake backend per test."""
    return FakeBackend()


@pytest.fixture
def signed_in_user(backend):
    return User.model_validate(backend.user)
