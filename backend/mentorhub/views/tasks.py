"""
Tasks page: kanban board with search, status filter and a create form.

The filtering, bucketing and toggle rules are plain functions that
work without a store.
"""

from collections.abc import Iterable
from uuid import UUID

from mentorhub.cache import keys
from mentorhub.db.models import TaskStatus
from mentorhub.schemas.feedback import MutationResult
from mentorhub.schemas.tasks import TaskBoard, TaskCreate, TaskRead, TasksPage, TaskUpdate
from mentorhub.store import Order
from mentorhub.views.base import ConsoleView, read_idea_options, read_student_options

# =============================================================================
# POLICIES
# =============================================================================


def toggle_status(status: str) -> str:
    """Checkbox flip. Completed goes back to pending, anything else completes."""
    if status == TaskStatus.COMPLETED.value:
        return TaskStatus.PENDING.value
    return TaskStatus.COMPLETED.value


def matches_search(search: str, *texts: str | None) -> bool:
    """Case-insensitive substring match against any of the given texts."""
    needle = search.lower()
    if not needle:
        return True
    return any(text is not None and needle in text.lower() for text in texts)


def filter_tasks(tasks: Iterable[TaskRead], search: str = "", status_filter: str = "all") -> list[TaskRead]:
    return [
        task
        for task in tasks
        if matches_search(search, task.title, task.description)
        and (status_filter == "all" or task.status == status_filter)
    ]


def bucket_tasks(tasks: Iterable[TaskRead]) -> TaskBoard:
    """Split tasks into the three status columns, preserving order."""
    board = TaskBoard()
    for task in tasks:
        getattr(board, task.status).append(task)
    return board


# =============================================================================
# VIEW
# =============================================================================


class TasksView(ConsoleView):
    """Reads tasks, students-list and ideas-list; writes tasks."""

    async def load(self, *, search: str = "", status_filter: str = "all", form_open: bool = False) -> TasksPage:
        tasks = await self.read(keys.TASKS, self.load_tasks, empty=[])
        students = await read_student_options(self)
        ideas = await read_idea_options(self)

        filtered = filter_tasks(tasks, search, status_filter)
        return TasksPage(
            board=bucket_tasks(filtered),
            total=len(filtered),
            search=search,
            status_filter=status_filter,
            students=students,
            ideas=ideas,
            form_open=form_open,
        )

    async def load_tasks(self) -> list[TaskRead]:
        rows = await self.store.query(
            "tasks",
            order=[Order.asc("due_date"), Order.desc("priority", nulls_first=False)],
            include=["students", "ideas"],
        )
        return [TaskRead.model_validate(row) for row in rows]

    async def create(self, form: TaskCreate) -> MutationResult:
        return await self.run_mutation(
            lambda: self.store.insert("tasks", form.model_dump()),
            invalidates=keys.TASK_MUTATION_KEYS,
            success="Task created successfully",
            failure="Failed to create task",
            form=form,
        )

    async def toggle(self, task_id: UUID, current_status: str) -> MutationResult:
        """Flip the task's checkbox based on the status the card was showing."""
        return await self.run_mutation(
            lambda: self.store.update("tasks", task_id, {"status": toggle_status(current_status)}),
            invalidates=keys.TASK_MUTATION_KEYS,
            success=None,
            failure="Failed to update task",
        )

    async def update(self, task_id: UUID, patch: TaskUpdate) -> MutationResult:
        return await self.run_mutation(
            lambda: self.store.update("tasks", task_id, patch.model_dump(exclude_unset=True)),
            invalidates=keys.TASK_MUTATION_KEYS,
            success="Task updated",
            failure="Failed to update task",
            form=patch,
        )

    async def delete(self, task_id: UUID) -> MutationResult:
        return await self.run_mutation(
            lambda: self.store.delete("tasks", task_id),
            invalidates=keys.TASK_MUTATION_KEYS,
            success="Task deleted",
            failure="Failed to delete task",
        )
