"""Ideas page and idea detail page."""

from collections.abc import Iterable
from uuid import UUID

from mentorhub.cache import keys
from mentorhub.schemas.feedback import MutationResult
from mentorhub.schemas.ideas import IdeaCreate, IdeaDetailPage, IdeaRead, IdeasPage, IdeaUpdate
from mentorhub.schemas.research import ResearchHistoryRead
from mentorhub.store import Filter, Order
from mentorhub.views.base import ConsoleView, read_student_options
from mentorhub.views.tasks import matches_search


def filter_ideas(ideas: Iterable[IdeaRead], search: str = "", status_filter: str = "all") -> list[IdeaRead]:
    """Search title and description; status "all" keeps every status."""
    return [
        idea
        for idea in ideas
        if matches_search(search, idea.title, idea.description)
        and (status_filter == "all" or idea.status == status_filter)
    ]


async def load_research_history(view: ConsoleView, idea_id: UUID) -> list[ResearchHistoryRead]:
    """Research runs for one idea, newest first."""
    rows = await view.store.query(
        "research_history",
        filters=[Filter.eq("idea_id", idea_id)],
        order=[Order.desc("created_at")],
    )
    return [ResearchHistoryRead.model_validate(row) for row in rows]


class IdeasView(ConsoleView):
    """Reads ideas and students-list; writes ideas."""

    async def load(self, *, search: str = "", status_filter: str = "all", form_open: bool = False) -> IdeasPage:
        ideas = await self.read(keys.IDEAS, self.load_ideas, empty=[])
        students = await read_student_options(self)

        filtered = filter_ideas(ideas, search, status_filter)
        return IdeasPage(
            ideas=filtered,
            total=len(filtered),
            search=search,
            status_filter=status_filter,
            students=students,
            form_open=form_open,
        )

    async def load_ideas(self) -> list[IdeaRead]:
        rows = await self.store.query("ideas", order=[Order.desc("created_at")], include="students")
        return [IdeaRead.model_validate(row) for row in rows]

    async def detail(self, idea_id: UUID) -> IdeaDetailPage:
        """One idea with its research history. `idea` is None when it does not exist."""
        idea = await self.read(keys.idea(idea_id), lambda: self._load_idea(idea_id), empty=None)
        history = []
        if idea is not None:
            history = await self.read(
                keys.research_history(idea_id), lambda: load_research_history(self, idea_id), empty=[]
            )
        return IdeaDetailPage(idea=idea, research_history=history)

    async def _load_idea(self, idea_id: UUID) -> IdeaRead | None:
        rows = await self.store.query("ideas", filters=[Filter.eq("id", idea_id)], limit=1, include="students")
        return IdeaRead.model_validate(rows[0]) if rows else None

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    async def create(self, form: IdeaCreate) -> MutationResult:
        return await self.run_mutation(
            lambda: self.store.insert("ideas", form.model_dump()),
            invalidates=keys.IDEA_MUTATION_KEYS,
            success="Idea created successfully",
            failure="Failed to create idea",
            form=form,
        )

    async def update(self, idea_id: UUID, patch: IdeaUpdate) -> MutationResult:
        return await self.run_mutation(
            lambda: self.store.update("ideas", idea_id, patch.model_dump(exclude_unset=True)),
            invalidates=keys.IDEA_MUTATION_KEYS | keys.IDEA_EMBED_KEYS | {keys.idea(idea_id)},
            success="Idea updated",
            failure="Failed to update idea",
            form=patch,
        )

    async def delete(self, idea_id: UUID) -> MutationResult:
        # Tasks lose their idea link; research history goes with the idea
        return await self.run_mutation(
            lambda: self.store.delete("ideas", idea_id),
            invalidates=keys.IDEA_MUTATION_KEYS
            | keys.IDEA_EMBED_KEYS
            | {keys.idea(idea_id), keys.research_history(idea_id)},
            success="Idea deleted",
            failure="Failed to delete idea",
        )
