"""Student schemas."""

from pydantic import Field

from mentorhub.schemas.base import BaseSchema, IDMixin, OptionalText, TimestampMixin
from mentorhub.schemas.feedback import Notice


class StudentBase(BaseSchema):
    """Base student schema."""

    name: str = Field(..., min_length=1, max_length=255)
    email: OptionalText = Field(None, max_length=255)
    grade: OptionalText = Field(None, max_length=50)
    notes: OptionalText = None


class StudentCreate(StudentBase):
    """Schema for creating a student."""

    pass


class StudentRead(StudentBase, IDMixin, TimestampMixin):
    """Schema for reading student data."""


class StudentUpdate(BaseSchema):
    """Schema for updating a student. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: OptionalText = Field(None, max_length=255)
    grade: OptionalText = Field(None, max_length=50)
    notes: OptionalText = None


class StudentsPage(BaseSchema):
    """View model for /students."""

    students: list[StudentRead]
    form_open: bool = False
    notices: list[Notice] = Field(default_factory=list)
