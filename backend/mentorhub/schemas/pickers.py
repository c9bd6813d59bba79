"""Small related-row shapes: picker options and embedded summaries."""

from uuid import UUID

from mentorhub.schemas.base import BaseSchema


class StudentOption(BaseSchema):
    """Entry of the student picker (id + name)."""

    id: UUID
    name: str


class StudentSummary(BaseSchema):
    """Student embedded in an idea or task row."""

    id: UUID | None = None
    name: str


class IdeaOption(BaseSchema):
    """Entry of the idea picker (id + title)."""

    id: UUID
    title: str


class IdeaSummary(BaseSchema):
    """Idea embedded in a task or research row."""

    id: UUID | None = None
    title: str


class CategorySummary(BaseSchema):
    """Receipt category embedded in a receipt row."""

    id: UUID | None = None
    name: str
    color: str | None = None
