"""Dashboard: four stat counts, the priority task list and recent ideas."""

from mentorhub.cache import keys
from mentorhub.config import get_settings
from mentorhub.db.models import IdeaStatus, ReceiptStatus, TaskStatus
from mentorhub.schemas.dashboard import DashboardPage, DashboardStats
from mentorhub.schemas.ideas import IdeaRead
from mentorhub.schemas.tasks import TaskRead
from mentorhub.store import Filter, Order
from mentorhub.views.base import ConsoleView

settings = get_settings()


class DashboardView(ConsoleView):
    """Read-only page."""

    async def load(self) -> DashboardPage:
        stats = DashboardStats(
            students=await self.read(keys.STUDENTS_COUNT, self._count_students, empty=0),
            active_ideas=await self.read(keys.ACTIVE_IDEAS_COUNT, self._count_active_ideas, empty=0),
            open_tasks=await self.read(keys.OPEN_TASKS_COUNT, self._count_open_tasks, empty=0),
            pending_receipts=await self.read(keys.PENDING_RECEIPTS_COUNT, self._count_pending_receipts, empty=0),
        )
        priority_tasks = await self.read(keys.PRIORITY_TASKS, self.load_priority_tasks, empty=[])
        recent_ideas = await self.read(keys.RECENT_IDEAS, self.load_recent_ideas, empty=[])

        return DashboardPage(
            stats=stats,
            priority_tasks=priority_tasks[: settings.priority_tasks_display_limit],
            recent_ideas=recent_ideas,
        )

    async def _count_students(self) -> int:
        return await self.store.count("students")

    async def _count_active_ideas(self) -> int:
        return await self.store.count("ideas", filters=[Filter.neq("status", IdeaStatus.ARCHIVED)])

    async def _count_open_tasks(self) -> int:
        return await self.store.count("tasks", filters=[Filter.neq("status", TaskStatus.COMPLETED)])

    async def _count_pending_receipts(self) -> int:
        return await self.store.count("receipts", filters=[Filter.eq("status", ReceiptStatus.PENDING)])

    async def load_priority_tasks(self) -> list[TaskRead]:
        """Open tasks, highest priority then earliest due date."""
        rows = await self.store.query(
            "tasks",
            filters=[Filter.neq("status", TaskStatus.COMPLETED)],
            order=[Order.desc("priority", nulls_first=False), Order.asc("due_date")],
            limit=settings.priority_tasks_fetch_limit,
            include="students",
        )
        return [TaskRead.model_validate(row) for row in rows]

    async def load_recent_ideas(self) -> list[IdeaRead]:
        rows = await self.store.query(
            "ideas",
            order=[Order.desc("created_at")],
            limit=settings.recent_ideas_limit,
            include="students",
        )
        return [IdeaRead.model_validate(row) for row in rows]
