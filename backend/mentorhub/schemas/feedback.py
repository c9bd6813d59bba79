"""User-facing notices and mutation outcomes returned by the views."""

from typing import Any, Literal

from mentorhub.schemas.base import BaseSchema

NoticeLevel = Literal["success", "error"]


class Notice(BaseSchema):
    """Transient notification (rendered as a toast by the console)."""

    level: NoticeLevel
    title: str
    detail: str | None = None


class MutationResult(BaseSchema):
    """
    Outcome of a create/update/delete issued from a view.

    On failure `form` carries the values the user entered so the form can be
    resubmitted; on success it carries the reset form (or None).
    """

    ok: bool
    notice: Notice | None = None
    record: dict[str, Any] | None = None
    form: dict[str, Any] | None = None
    error: str | None = None  # StoreError kind: constraint | not_found | unavailable | invalid_query
