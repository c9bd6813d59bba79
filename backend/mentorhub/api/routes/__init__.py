"""API routes package."""

from mentorhub.api.routes import (
    dashboard,
    email,
    events,
    ideas,
    receipts,
    research,
    students,
    tasks,
)

__all__ = [
    "dashboard",
    "email",
    "events",
    "ideas",
    "receipts",
    "research",
    "students",
    "tasks",
]
