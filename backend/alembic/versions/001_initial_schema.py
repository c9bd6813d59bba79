"""Initial schema with all tables.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

This migration creates the complete Mentorhub database schema:
- Extensions: uuid-ossp
- Tables: students, ideas, tasks, receipt_categories, receipts, research_history, email_drafts
- Indexes: list ordering and dashboard count indexes
- Triggers: updated_at auto-update function and triggers
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

UPDATED_AT_TABLES = ["students", "ideas", "tasks", "receipts"]


def _id_column() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), server_default=sa.text("uuid_generate_v4()"), nullable=False)


def _timestamp(name: str) -> sa.Column:
    return sa.Column(name, postgresql.TIMESTAMP(timezone=True), server_default=sa.text("NOW()"), nullable=False)


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ==========================================================================
    # STUDENTS TABLE
    # ==========================================================================
    op.create_table(
        "students",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("grade", sa.String(50), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_students_name", "students", ["name"])

    # ==========================================================================
    # IDEAS TABLE
    # ==========================================================================
    op.create_table(
        "ideas",
        _id_column(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), server_default="draft", nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("is_team_project", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("student_id", postgresql.UUID(as_uuid=True), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="SET NULL"),
        sa.CheckConstraint(
            "status IN ('draft', 'researching', 'validated', 'archived')",
            name="valid_idea_status",
        ),
    )
    op.create_index("idx_ideas_student_id", "ideas", ["student_id"])
    op.create_index("idx_ideas_created_at", "ideas", [sa.text("created_at DESC")])
    op.create_index("idx_ideas_status", "ideas", ["status"])

    # ==========================================================================
    # TASKS TABLE
    # ==========================================================================
    op.create_table(
        "tasks",
        _id_column(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), server_default="pending", nullable=False),
        sa.Column("priority", sa.String(10), server_default="medium", nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("student_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("idea_id", postgresql.UUID(as_uuid=True), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["idea_id"], ["ideas.id"], ondelete="SET NULL"),
        sa.CheckConstraint("status IN ('pending', 'in_progress', 'completed')", name="valid_task_status"),
        sa.CheckConstraint("priority IN ('low', 'medium', 'high')", name="valid_task_priority"),
    )
    op.create_index("idx_tasks_student_id", "tasks", ["student_id"])
    op.create_index("idx_tasks_idea_id", "tasks", ["idea_id"])
    op.create_index("idx_tasks_due_date", "tasks", ["due_date"])
    op.create_index("idx_tasks_status", "tasks", ["status"])

    # ==========================================================================
    # RECEIPT_CATEGORIES TABLE
    # ==========================================================================
    op.create_table(
        "receipt_categories",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("color", sa.String(7), nullable=True),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("color IS NULL OR length(color) = 7", name="valid_color"),
    )

    # ==========================================================================
    # RECEIPTS TABLE
    # ==========================================================================
    op.create_table(
        "receipts",
        _id_column(),
        sa.Column("vendor", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("currency", sa.String(3), nullable=True),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(20), server_default="pending", nullable=True),
        sa.Column("category_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("items", postgresql.JSONB(), nullable=True),
        sa.Column("raw_text", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["category_id"], ["receipt_categories.id"], ondelete="SET NULL"),
        sa.CheckConstraint("status IN ('pending', 'processed', 'reimbursed')", name="valid_receipt_status"),
    )
    op.create_index("idx_receipts_category_id", "receipts", ["category_id"])
    op.create_index("idx_receipts_created_at", "receipts", [sa.text("created_at DESC")])
    op.create_index("idx_receipts_status", "receipts", ["status"])

    # ==========================================================================
    # RESEARCH_HISTORY TABLE
    # ==========================================================================
    op.create_table(
        "research_history",
        _id_column(),
        sa.Column("idea_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("query", sa.Text(), nullable=False),
        sa.Column("research_type", sa.String(50), server_default="general", nullable=False),
        sa.Column("result", sa.Text(), nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["idea_id"], ["ideas.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_research_history_idea_created", "research_history", ["idea_id", sa.text("created_at DESC")])

    # ==========================================================================
    # EMAIL_DRAFTS TABLE
    # ==========================================================================
    op.create_table(
        "email_drafts",
        _id_column(),
        sa.Column("action_type", sa.String(20), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("recipient", sa.String(255), nullable=True),
        sa.Column("subject", sa.String(255), nullable=True),
        sa.Column("occasion", sa.String(255), nullable=True),
        sa.Column("topic", sa.Text(), nullable=True),
        sa.Column("original_email", sa.Text(), nullable=True),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_email_drafts_created_at", "email_drafts", [sa.text("created_at DESC")])

    # ==========================================================================
    # UPDATED_AT TRIGGER FUNCTION
    # ==========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)

    for table in UPDATED_AT_TABLES:
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
                BEFORE UPDATE ON {table}
                FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();
        """)


def downgrade() -> None:
    for table in UPDATED_AT_TABLES:
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}")

    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables in reverse dependency order
    op.drop_table("email_drafts")
    op.drop_table("research_history")
    op.drop_table("receipts")
    op.drop_table("receipt_categories")
    op.drop_table("tasks")
    op.drop_table("ideas")
    op.drop_table("students")
