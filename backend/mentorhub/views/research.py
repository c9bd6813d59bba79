"""Research assistant page: pick an idea, ask a question, keep the answer."""

import logging
from uuid import UUID

from mentorhub.cache import QueryCache, keys
from mentorhub.schemas.feedback import Notice
from mentorhub.schemas.research import ResearchHistoryCreate, ResearchOutcome, ResearchPage, ResearchRequest
from mentorhub.services.ai_functions import AIFunctionError, AIFunctionsClient
from mentorhub.store import DataStore
from mentorhub.views.base import ConsoleView, read_idea_options
from mentorhub.views.ideas import load_research_history

logger = logging.getLogger(__name__)

RESEARCH_FALLBACK = "AI research requires the edge function to be deployed."


class ResearchView(ConsoleView):
    """Reads ideas-list and research-history(idea); writes research_history."""

    def __init__(self, store: DataStore, cache: QueryCache, ai: AIFunctionsClient) -> None:
        super().__init__(store, cache)
        self.ai = ai

    async def load(self, *, idea_id: UUID | None = None) -> ResearchPage:
        ideas = await read_idea_options(self)
        history = []
        if idea_id is not None:
            history = await self.read(
                keys.research_history(idea_id), lambda: load_research_history(self, idea_id), empty=[]
            )
        return ResearchPage(ideas=ideas, selected_idea_id=idea_id, history=history)

    async def run(self, request: ResearchRequest) -> ResearchOutcome:
        """
        Send the query to the research function and save the answer.

        An incomplete form never reaches the function. A function failure
        shows the fallback text and nothing is saved.
        """
        if request.idea_id is None or not request.query:
            return ResearchOutcome(result="", notice=Notice(level="error", title="Select an idea and enter a query"))

        try:
            result = await self.ai.research_idea(request.idea_id, request.query)
        except AIFunctionError as e:
            logger.warning("Research for idea %s fell back: %s", request.idea_id, e)
            return ResearchOutcome(
                result=RESEARCH_FALLBACK,
                notice=Notice(level="error", title="Research failed - edge function needed"),
            )

        entry = ResearchHistoryCreate(
            idea_id=request.idea_id,
            query=request.query,
            research_type=request.research_type,
            result=result,
        )
        saved = await self.run_mutation(
            lambda: self.store.insert("research_history", entry.model_dump()),
            invalidates={keys.research_history(request.idea_id)},
            success="Research complete!",
            failure="Research complete, but saving it failed",
        )
        return ResearchOutcome(
            result=result,
            notice=saved.notice,
            saved=saved.ok,
            history_id=saved.record["id"] if saved.ok else None,
        )
