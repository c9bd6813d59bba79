"""Pydantic schemas for API request/response validation."""

from mentorhub.schemas.feedback import MutationResult, Notice
from mentorhub.schemas.pickers import CategorySummary, IdeaOption, IdeaSummary, StudentOption, StudentSummary
from mentorhub.schemas.students import StudentCreate, StudentRead, StudentsPage, StudentUpdate
from mentorhub.schemas.research import (
    ResearchHistoryCreate,
    ResearchHistoryRead,
    ResearchOutcome,
    ResearchPage,
    ResearchRequest,
)
from mentorhub.schemas.ideas import IdeaCreate, IdeaDetailPage, IdeaRead, IdeasPage, IdeaUpdate
from mentorhub.schemas.tasks import TaskBoard, TaskCreate, TaskRead, TasksPage, TaskToggle, TaskUpdate
from mentorhub.schemas.receipts import (
    ReceiptCategoryCreate,
    ReceiptCategoryRead,
    ReceiptRead,
    ReceiptsPage,
    ReceiptUpdate,
    ReceiptUpload,
)
from mentorhub.schemas.email_drafts import EmailDraftCreate, EmailDraftRead, EmailOutcome, EmailPage, EmailRequest
from mentorhub.schemas.dashboard import DashboardPage, DashboardStats

__all__ = [
    # Feedback
    "MutationResult",
    "Notice",
    # Pickers / embeds
    "CategorySummary",
    "IdeaOption",
    "IdeaSummary",
    "StudentOption",
    "StudentSummary",
    # Students
    "StudentCreate",
    "StudentRead",
    "StudentUpdate",
    "StudentsPage",
    # Research
    "ResearchHistoryCreate",
    "ResearchHistoryRead",
    "ResearchOutcome",
    "ResearchPage",
    "ResearchRequest",
    # Ideas
    "IdeaCreate",
    "IdeaRead",
    "IdeaUpdate",
    "IdeasPage",
    "IdeaDetailPage",
    # Tasks
    "TaskBoard",
    "TaskCreate",
    "TaskRead",
    "TaskToggle",
    "TaskUpdate",
    "TasksPage",
    # Receipts
    "ReceiptCategoryCreate",
    "ReceiptCategoryRead",
    "ReceiptRead",
    "ReceiptUpdate",
    "ReceiptUpload",
    "ReceiptsPage",
    # Email
    "EmailDraftCreate",
    "EmailDraftRead",
    "EmailOutcome",
    "EmailPage",
    "EmailRequest",
    # Dashboard
    "DashboardPage",
    "DashboardStats",
]
