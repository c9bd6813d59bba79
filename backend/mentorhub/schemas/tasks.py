"""Task schemas."""

from typing import Literal
from uuid import UUID

from pydantic import Field

from mentorhub.schemas.base import BaseSchema, IDMixin, OptionalDate, OptionalText, OptionalUUID, TimestampMixin
from mentorhub.schemas.feedback import Notice
from mentorhub.schemas.pickers import IdeaOption, IdeaSummary, StudentOption, StudentSummary

# Type aliases for enums (used as literals for API validation)
TaskStatusType = Literal["pending", "in_progress", "completed"]
TaskPriorityType = Literal["low", "medium", "high"]
TaskStatusFilter = Literal["all", "pending", "in_progress", "completed"]


class TaskBase(BaseSchema):
    """Base task schema."""

    title: str = Field(..., min_length=1, max_length=255)
    description: OptionalText = None
    priority: TaskPriorityType = "medium"
    due_date: OptionalDate = None


class TaskCreate(TaskBase):
    """Schema for creating a task. New tasks always start pending."""

    student_id: OptionalUUID = None
    idea_id: OptionalUUID = None


class TaskRead(TaskBase, IDMixin, TimestampMixin):
    """Schema for reading task data. `student` / `idea` are set only when requested."""

    status: TaskStatusType
    priority: TaskPriorityType | None = None
    student_id: UUID | None = None
    idea_id: UUID | None = None
    student: StudentSummary | None = None
    idea: IdeaSummary | None = None


class TaskUpdate(BaseSchema):
    """Schema for updating a task. All fields optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: OptionalText = None
    status: TaskStatusType | None = None
    priority: TaskPriorityType | None = None
    due_date: OptionalDate = None
    student_id: OptionalUUID = None
    idea_id: OptionalUUID = None


class TaskToggle(BaseSchema):
    """Status of the task card as rendered when its checkbox was clicked."""

    status: TaskStatusType


class TaskBoard(BaseSchema):
    """Kanban columns. Every filtered task lands in exactly one column."""

    pending: list[TaskRead] = Field(default_factory=list)
    in_progress: list[TaskRead] = Field(default_factory=list)
    completed: list[TaskRead] = Field(default_factory=list)


class TasksPage(BaseSchema):
    """View model for /tasks."""

    board: TaskBoard
    total: int
    search: str = ""
    status_filter: TaskStatusFilter = "all"
    students: list[StudentOption] = Field(default_factory=list)
    ideas: list[IdeaOption] = Field(default_factory=list)
    form_open: bool = False
    notices: list[Notice] = Field(default_factory=list)
