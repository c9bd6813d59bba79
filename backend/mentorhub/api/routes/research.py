"""Research assistant routes."""

from uuid import UUID

from fastapi import APIRouter

from mentorhub.api.deps import Research
from mentorhub.schemas.research import ResearchOutcome, ResearchPage, ResearchRequest

router = APIRouter(prefix="/research", tags=["research"])


@router.get("", response_model=ResearchPage)
async def get_research(view: Research, idea_id: UUID | None = None) -> ResearchPage:
    """Idea picker, plus the selected idea's past research."""
    return await view.load(idea_id=idea_id)


@router.post("", response_model=ResearchOutcome)
async def run_research(data: ResearchRequest, view: Research) -> ResearchOutcome:
    """
    Run a research query against an idea.

    Always 200: an incomplete form or a failed AI call comes back as an error
    notice (with the fallback text for the latter).
    """
    return await view.run(data)
