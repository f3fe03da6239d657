"""Task list routes."""
from fastapi import APIRouter, Depends, HTTPException, Query

from health_hub import HealthHubClient, TaskFilter, TaskStore
from health_hub.models import TaskDraft, TaskStats

from ..dependencies import get_client
from ..models.tasks import TaskCreateRequest, TaskDeleteResponse, TaskListResponse

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


async def _store(
    task_filter: TaskFilter = Query(
        default=TaskFilter.ALL, alias="filter", description="all, pending or completed"
    ),
    client: HealthHubClient = Depends(get_client),
) -> TaskStore:
    store = TaskStore(client)
    store.filter = task_filter
    return store


@router.get("", response_model=TaskListResponse)
async def list_tasks(store: TaskStore = Depends(_store)):
    """Get tasks under the requested completion filter."""
    tasks = await store.refresh()
    return TaskListResponse(filter=store.filter.value, tasks=tasks)


@router.post("", response_model=TaskListResponse, status_code=201)
async def create_task(request: TaskCreateRequest, store: TaskStore = Depends(_store)):
    """Create a task and return the refreshed list."""
    draft = TaskDraft(**request.model_dump())
    tasks = await store.create(draft)
    return TaskListResponse(filter=store.filter.value, tasks=tasks)


@router.get("/stats", response_model=TaskStats, response_model_by_alias=True)
async def get_task_stats(store: TaskStore = Depends(_store)):
    """Completed/pending counts and completion rate."""
    return await store.stats()


@router.patch("/{task_id}/toggle", response_model=TaskListResponse)
async def toggle_task(task_id: str, store: TaskStore = Depends(_store)):
    """Flip a task's completed flag and return the refreshed list."""
    tasks = await store.toggle(task_id)
    return TaskListResponse(filter=store.filter.value, tasks=tasks)


@router.delete("/{task_id}", response_model=TaskDeleteResponse)
async def delete_task(
    task_id: str,
    confirm: bool = Query(default=False, description="Must be true for the task to be deleted"),
    store: TaskStore = Depends(_store),
):
    """
    Delete a task. Without ``confirm=true`` nothing is sent to the backend
    and the request is rejected.
    """
    deleted = await store.delete(task_id, confirm=lambda _task: confirm)
    if not deleted:
        raise HTTPException(status_code=409, detail="Deletion not confirmed")
    return TaskDeleteResponse(deleted=True, tasks=store.tasks)
