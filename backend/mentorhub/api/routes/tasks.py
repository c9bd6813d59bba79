"""Task routes: kanban board, CRUD and checkbox toggle."""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from mentorhub.api.deps import Tasks, mutation_response
from mentorhub.schemas.tasks import TaskCreate, TasksPage, TaskStatusFilter, TaskToggle, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=TasksPage)
async def list_tasks(
    view: Tasks,
    search: str = "",
    status_filter: TaskStatusFilter = "all",
    action: Literal["add"] | None = None,
) -> TasksPage:
    """
    Tasks grouped into pending / in progress / completed columns.

    Filters:
    - search: case-insensitive match on title or description
    - status_filter: one task status, or "all"
    """
    return await view.load(search=search, status_filter=status_filter, form_open=action == "add")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(data: TaskCreate, view: Tasks) -> JSONResponse:
    """Create a new task. It starts pending."""
    return mutation_response(await view.create(data), status.HTTP_201_CREATED)


@router.post("/{task_id}/toggle")
async def toggle_task(task_id: UUID, data: TaskToggle, view: Tasks) -> JSONResponse:
    """Flip a task between completed and pending, given the status the card showed."""
    return mutation_response(await view.toggle(task_id, data.status))


@router.patch("/{task_id}")
async def update_task(task_id: UUID, data: TaskUpdate, view: Tasks) -> JSONResponse:
    return mutation_response(await view.update(task_id, data))


@router.delete("/{task_id}")
async def delete_task(task_id: UUID, view: Tasks) -> JSONResponse:
    return mutation_response(await view.delete(task_id))
