"""
Task Store.

Keeps the signed-in user's task list in step with the backend. The
backend is authoritative: every successful mutation is followed by a
full refetch under the current filter, never a local merge.
"""

import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional, Union

from .errors import InputValidationError
from .models import Task, TaskDraft, TaskStats

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[Task | str], Union[bool, Awaitable[bool]]]
ChangeListener = Callable[[], Union[None, Awaitable[None]]]


class TaskFilter(str, Enum):
    """Which tasks the list shows."""

    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"

    def to_params(self) -> dict:
        """Query parameters for GET /tasks."""
        if self is TaskFilter.ALL:
            return {}
        return {"completed": self is TaskFilter.COMPLETED}


async def _maybe_await(value):
    if inspect.isawaitable(value):
        return await value
    return value


def validate_title(title: Any) -> str:
    """The one check made before a task is created."""
    if not isinstance(title, str) or not title.strip():
        raise InputValidationError("Task title is required", field="title")
    return title.strip()


class TaskStore:
    """
    CRUD over the user's tasks with a server-side completion filter.

    Args:
        client: HealthHubClient for the signed-in user
        on_change: called after every successful mutation (e.g. to
            refresh the dashboard)
    """

    def __init__(self, client, on_change: Optional[ChangeListener] = None):
        self.client = client
        self.on_change = on_change
        self.filter = TaskFilter.ALL
        self.tasks: List[Task] = []

    async def refresh(self) -> List[Task]:
        """Reload the list under the current filter."""
        body = await self.client.get("/tasks", params=self.filter.to_params())
        self.tasks = parse_tasks(body)
        return self.tasks

    async def set_filter(self, task_filter: Union[TaskFilter, str]) -> List[Task]:
        """Switch filter and re-query the backend."""
        self.filter = TaskFilter(task_filter)
        return await self.refresh()

    async def get(self, task_id: str) -> Task:
        body = await self.client.get(f"/tasks/{task_id}")
        if isinstance(body, dict) and isinstance(body.get("task"), dict):
            body = body["task"]
        return Task.model_validate(body)

    async def create(self, draft: Union[TaskDraft, dict]) -> List[Task]:
        if isinstance(draft, dict):
            validate_title(draft.get("title"))
            draft = TaskDraft.model_validate(draft)
        draft = draft.model_copy(update={"title": validate_title(draft.title)})

        try:
            await self.client.post("/tasks", json=draft.to_payload())
        except Exception as e:
            logger.error(f"[TASKS] Error creating task: {e}")
            raise
        logger.info(f"[TASKS] Created task '{draft.title}'")
        return await self._after_mutation()

    async def update(self, task_id: str, changes: dict) -> List[Task]:
        if "title" in changes:
            changes = {**changes, "title": validate_title(changes["title"])}
        try:
            await self.client.put(f"/tasks/{task_id}", json=changes)
        except Exception as e:
            logger.error(f"[TASKS] Error updating task {task_id}: {e}")
            raise
        return await self._after_mutation()

    async def toggle(self, task_id: str) -> List[Task]:
        try:
            await self.client.patch(f"/tasks/{task_id}/toggle")
        except Exception as e:
            logger.error(f"[TASKS] Error toggling task {task_id}: {e}")
            raise
        return await self._after_mutation()

    async def delete(self, task_id: str, confirm: ConfirmCallback) -> bool:
        """
        Delete a task once ``confirm`` agrees.

        ``confirm`` receives the task (or its id when it is not in the
        current list) and returns a bool, directly or as an awaitable.

        Returns:
            True if the task was deleted, False if the user cancelled
        """
        task = next((t for t in self.tasks if t.id == task_id), None)
        if not await _maybe_await(confirm(task or task_id)):
            logger.debug(f"[TASKS] Deletion of {task_id} cancelled")
            return False

        try:
            await self.client.delete(f"/tasks/{task_id}")
        except Exception as e:
            logger.error(f"[TASKS] Error deleting task {task_id}: {e}")
            raise
        logger.info(f"[TASKS] Deleted task {task_id}")
        await self._after_mutation()
        return True

    async def stats(self) -> TaskStats:
        body = await self.client.get("/tasks/stats/summary")
        return TaskStats.model_validate(body if isinstance(body, dict) else {})

    async def _after_mutation(self) -> List[Task]:
        tasks = await self.refresh()
        if self.on_change is not None:
            await _maybe_await(self.on_change())
        return tasks


def parse_tasks(body) -> List[Task]:
    """Tasks from a ``{tasks: [...]}`` response; malformed rows are skipped."""
    rows = body.get("tasks") if isinstance(body, dict) else body
    if not isinstance(rows, list):
        return []

    tasks = []
    for row in rows:
        try:
            tasks.append(Task.model_validate(row))
        except ValueError as e:
            logger.warning(f"[TASKS] Skipping malformed task: {e}")
    return tasks
