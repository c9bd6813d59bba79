"""
SQLAlchemy 2.0 Models for Mentorhub.

Uses modern declarative syntax with Mapped[] type annotations.
All models use UUID primary keys generated by the store layer and proper
relationship definitions. Column types are dialect-neutral so the same models
run against hosted PostgreSQL and the SQLite test database.
"""

import datetime as dt
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum as PyEnum
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    Uuid,
    false,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mentorhub.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _domain_check(column: str, enum: type[PyEnum], name: str) -> CheckConstraint:
    """CHECK constraint restricting a string column to an enum's values."""
    values = ", ".join(f"'{member.value}'" for member in enum)
    return CheckConstraint(f"{column} IN ({values})", name=name)


JSONType = JSON().with_variant(JSONB(), "postgresql")


# =============================================================================
# ENUMS
# =============================================================================


class IdeaStatus(str, PyEnum):
    """Lifecycle status of an idea."""

    DRAFT = "draft"
    RESEARCHING = "researching"
    VALIDATED = "validated"
    ARCHIVED = "archived"


class TaskStatus(str, PyEnum):
    """Progress status of a task."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, PyEnum):
    """Task priority, declared lowest to highest."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ReceiptStatus(str, PyEnum):
    """Processing status of an uploaded receipt."""

    PENDING = "pending"
    PROCESSED = "processed"
    REIMBURSED = "reimbursed"


# Fields whose fixed domain orders by declaration rank instead of alphabetically
RANKED_FIELDS: dict[tuple[str, str], tuple[str, ...]] = {
    ("tasks", "priority"): tuple(member.value for member in TaskPriority),
}


# =============================================================================
# MODELS
# =============================================================================


class Student(Base):
    """A tutored/mentored student."""

    __tablename__ = "students"
    __table_args__ = (Index("idx_students_name", "name"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    grade: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, server_default=func.now(), nullable=False
    )

    # Relationships
    ideas: Mapped[list["Idea"]] = relationship("Idea", back_populates="student", passive_deletes=True)
    tasks: Mapped[list["Task"]] = relationship("Task", back_populates="student", passive_deletes=True)


class Idea(Base):
    """
    A project idea, owned by one student or run as a team project.

    Research runs against an idea are kept in research_history.
    """

    __tablename__ = "ideas"
    __table_args__ = (
        Index("idx_ideas_created_at", "created_at"),
        Index("idx_ideas_status", "status"),
        _domain_check("status", IdeaStatus, "valid_idea_status"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=IdeaStatus.DRAFT.value, server_default=IdeaStatus.DRAFT.value
    )
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    is_team_project: Mapped[bool] = mapped_column(nullable=False, default=False, server_default=false())
    student_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("students.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, server_default=func.now(), nullable=False
    )

    # Relationships
    student: Mapped[Optional["Student"]] = relationship("Student", back_populates="ideas")
    tasks: Mapped[list["Task"]] = relationship("Task", back_populates="idea", passive_deletes=True)
    research_history: Mapped[list["ResearchHistory"]] = relationship(
        "ResearchHistory", back_populates="idea", passive_deletes=True
    )


class Task(Base):
    """To-do item, optionally tied to a student and/or an idea."""

    __tablename__ = "tasks"
    __table_args__ = (
        Index("idx_tasks_due_date", "due_date"),
        Index("idx_tasks_status", "status"),
        _domain_check("status", TaskStatus, "valid_task_status"),
        _domain_check("priority", TaskPriority, "valid_task_priority"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TaskStatus.PENDING.value, server_default=TaskStatus.PENDING.value
    )
    priority: Mapped[Optional[str]] = mapped_column(
        String(10), nullable=True, default=TaskPriority.MEDIUM.value, server_default=TaskPriority.MEDIUM.value
    )
    due_date: Mapped[Optional[date]] = mapped_column(nullable=True)
    student_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("students.id", ondelete="SET NULL"), nullable=True, index=True
    )
    idea_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("ideas.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, server_default=func.now(), nullable=False
    )

    # Relationships
    student: Mapped[Optional["Student"]] = relationship("Student", back_populates="tasks")
    idea: Mapped[Optional["Idea"]] = relationship("Idea", back_populates="tasks")


class ReceiptCategory(Base):
    """Spending category for receipts."""

    __tablename__ = "receipt_categories"
    __table_args__ = (
        CheckConstraint(
            "color IS NULL OR length(color) = 7",
            name="valid_color",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[Optional[str]] = mapped_column(String(7), nullable=True)  # Hex color
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )

    # Relationships
    receipts: Mapped[list["Receipt"]] = relationship("Receipt", back_populates="category", passive_deletes=True)


class Receipt(Base):
    """
    Uploaded receipt.

    Starts as a pending placeholder; the analysed fields (vendor, amount,
    line items, raw OCR text) are filled in by a later update.
    """

    __tablename__ = "receipts"
    __table_args__ = (
        Index("idx_receipts_created_at", "created_at"),
        Index("idx_receipts_status", "status"),
        _domain_check("status", ReceiptStatus, "valid_receipt_status"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    vendor: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    currency: Mapped[Optional[str]] = mapped_column(String(3), nullable=True)
    date: Mapped[Optional[dt.date]] = mapped_column(nullable=True)
    status: Mapped[Optional[str]] = mapped_column(
        String(20), nullable=True, default=ReceiptStatus.PENDING.value, server_default=ReceiptStatus.PENDING.value
    )
    category_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("receipt_categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    items: Mapped[Optional[Any]] = mapped_column(JSONType, nullable=True)
    raw_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, server_default=func.now(), nullable=False
    )

    # Relationships
    category: Mapped[Optional["ReceiptCategory"]] = relationship("ReceiptCategory", back_populates="receipts")


class ResearchHistory(Base):
    """One AI research run against an idea."""

    __tablename__ = "research_history"
    __table_args__ = (Index("idx_research_history_idea_created", "idea_id", "created_at"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    idea_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("ideas.id", ondelete="CASCADE"), nullable=False
    )
    query: Mapped[str] = mapped_column(Text, nullable=False)
    research_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default="general", server_default="general"
    )
    result: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )

    # Relationships
    idea: Mapped["Idea"] = relationship("Idea", back_populates="research_history")


class EmailDraft(Base):
    """Saved output of the AI email assistant."""

    __tablename__ = "email_drafts"
    __table_args__ = (Index("idx_email_drafts_created_at", "created_at"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    action_type: Mapped[str] = mapped_column(String(20), nullable=False)  # compose | reply | rewrite
    content: Mapped[str] = mapped_column(Text, nullable=False)
    recipient: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    subject: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    occasion: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    topic: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    original_email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )


# Table name -> model, the full set of tables reachable through the DataStore
TABLES: dict[str, type[Base]] = {
    model.__tablename__: model
    for model in (Student, Idea, Task, ReceiptCategory, Receipt, ResearchHistory, EmailDraft)
}
