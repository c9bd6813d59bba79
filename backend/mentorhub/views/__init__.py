"""Console views: one class per page, reading through the cache and writing through the store."""

from mentorhub.views.base import ConsoleView
from mentorhub.views.dashboard import DashboardView
from mentorhub.views.email import EMAIL_FALLBACK, EmailView
from mentorhub.views.ideas import IdeasView, filter_ideas
from mentorhub.views.receipts import ReceiptsView
from mentorhub.views.research import RESEARCH_FALLBACK, ResearchView
from mentorhub.views.students import StudentsView
from mentorhub.views.tasks import TasksView, bucket_tasks, filter_tasks, toggle_status

__all__ = [
    "ConsoleView",
    "DashboardView",
    "EmailView",
    "IdeasView",
    "ReceiptsView",
    "ResearchView",
    "StudentsView",
    "TasksView",
    # Policies
    "bucket_tasks",
    "filter_ideas",
    "filter_tasks",
    "toggle_status",
    # Fallback texts
    "EMAIL_FALLBACK",
    "RESEARCH_FALLBACK",
]
