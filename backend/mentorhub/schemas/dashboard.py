"""Dashboard schemas."""

from pydantic import Field

from mentorhub.schemas.base import BaseSchema
from mentorhub.schemas.ideas import IdeaRead
from mentorhub.schemas.tasks import TaskRead


class DashboardStats(BaseSchema):
    """Stat cards."""

    students: int = 0
    active_ideas: int = 0
    open_tasks: int = 0
    pending_receipts: int = 0


class DashboardPage(BaseSchema):
    """View model for /."""

    stats: DashboardStats
    priority_tasks: list[TaskRead] = Field(default_factory=list)
    recent_ideas: list[IdeaRead] = Field(default_factory=list)
