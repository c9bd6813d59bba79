"""Idea schemas."""

from typing import Literal
from uuid import UUID

from pydantic import Field

from mentorhub.schemas.base import BaseSchema, IDMixin, OptionalText, OptionalUUID, TimestampMixin
from mentorhub.schemas.feedback import Notice
from mentorhub.schemas.pickers import StudentOption, StudentSummary
from mentorhub.schemas.research import ResearchHistoryRead

# Type aliases for enums (used as literals for API validation)
IdeaStatusType = Literal["draft", "researching", "validated", "archived"]
IdeaStatusFilter = Literal["all", "draft", "researching", "validated", "archived"]


class IdeaBase(BaseSchema):
    """Base idea schema."""

    title: str = Field(..., min_length=1, max_length=255)
    description: OptionalText = None
    status: IdeaStatusType = "draft"
    category: OptionalText = Field(None, max_length=100)
    is_team_project: bool = False


class IdeaCreate(IdeaBase):
    """Schema for creating an idea. A team project may still name a lead student."""

    student_id: OptionalUUID = None


class IdeaRead(IdeaBase, IDMixin, TimestampMixin):
    """Schema for reading idea data. `student` is set only when requested."""

    student_id: UUID | None = None
    student: StudentSummary | None = None


class IdeaUpdate(BaseSchema):
    """Schema for updating an idea. All fields optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: OptionalText = None
    status: IdeaStatusType | None = None
    category: OptionalText = Field(None, max_length=100)
    is_team_project: bool | None = None
    student_id: OptionalUUID = None


class IdeasPage(BaseSchema):
    """View model for /ideas."""

    ideas: list[IdeaRead]
    total: int
    search: str = ""
    status_filter: IdeaStatusFilter = "all"
    students: list[StudentOption] = Field(default_factory=list)
    form_open: bool = False
    notices: list[Notice] = Field(default_factory=list)


class IdeaDetailPage(BaseSchema):
    """View model for /ideas/{id}."""

    idea: IdeaRead | None
    research_history: list[ResearchHistoryRead] = Field(default_factory=list)
