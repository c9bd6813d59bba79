"""AI email assistant schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field

from mentorhub.schemas.base import BaseSchema, OptionalText
from mentorhub.schemas.feedback import Notice

EmailActionType = Literal["compose", "reply", "rewrite"]


class EmailRequest(BaseSchema):
    """
    Email assistant form.

    - compose: recipient, occasion, topic
    - reply: recipient, original_email, topic (what to say)
    - rewrite: original_email only
    """

    action: EmailActionType = "compose"
    # Same limits as EmailDraftCreate
    occasion: OptionalText = Field(None, max_length=255)
    recipient: OptionalText = Field(None, max_length=255)
    topic: OptionalText = None
    original_email: OptionalText = None


class EmailDraftCreate(BaseSchema):
    """Persisted output of one email generation."""

    action_type: EmailActionType
    content: str = Field(..., min_length=1)
    recipient: OptionalText = Field(None, max_length=255)
    subject: OptionalText = Field(None, max_length=255)
    occasion: OptionalText = Field(None, max_length=255)
    topic: OptionalText = None
    original_email: OptionalText = None


class EmailDraftRead(EmailDraftCreate):
    """Schema for reading a saved draft."""

    id: UUID
    action_type: str
    created_at: datetime


class EmailOutcome(BaseSchema):
    """Result panel after an email generation."""

    email: str
    notice: Notice
    saved: bool = False
    draft_id: UUID | None = None


class EmailPage(BaseSchema):
    """View model for /email."""

    drafts: list[EmailDraftRead] = Field(default_factory=list)
