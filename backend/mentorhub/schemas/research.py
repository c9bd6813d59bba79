"""Research history schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from mentorhub.schemas.base import BaseSchema, OptionalText, OptionalUUID
from mentorhub.schemas.feedback import Notice
from mentorhub.schemas.pickers import IdeaOption


class ResearchHistoryCreate(BaseSchema):
    """Persisted result of one research run."""

    idea_id: UUID
    query: str = Field(..., min_length=1)
    research_type: str = Field(default="general", max_length=50)
    result: str


class ResearchHistoryRead(ResearchHistoryCreate):
    """Schema for reading research history."""

    id: UUID
    created_at: datetime


class ResearchRequest(BaseSchema):
    """
    Research form submission.

    Both fields are optional at the schema level so the view can answer an
    incomplete form with a notice instead of a validation error.
    """

    idea_id: OptionalUUID = None
    query: OptionalText = None
    research_type: str = Field(default="general", max_length=50)


class ResearchOutcome(BaseSchema):
    """Result panel after a research run."""

    result: str
    notice: Notice
    saved: bool = False
    history_id: UUID | None = None


class ResearchPage(BaseSchema):
    """View model for /research. History stays empty until an idea is selected."""

    ideas: list[IdeaOption]
    selected_idea_id: UUID | None = None
    history: list[ResearchHistoryRead] = Field(default_factory=list)
