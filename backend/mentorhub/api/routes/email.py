"""Email assistant routes."""

from uuid import UUID

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from mentorhub.api.deps import Email, mutation_response
from mentorhub.schemas.email_drafts import EmailOutcome, EmailPage, EmailRequest

router = APIRouter(prefix="/email", tags=["email"])


@router.get("", response_model=EmailPage)
async def list_drafts(view: Email) -> EmailPage:
    """Saved drafts, newest first."""
    return await view.load()


@router.post("", response_model=EmailOutcome)
async def generate_email(data: EmailRequest, view: Email) -> EmailOutcome:
    """Compose, reply or rewrite. A failed AI call returns the fallback text with status 200."""
    return await view.generate(data)


@router.delete("/drafts/{draft_id}")
async def delete_draft(draft_id: UUID, view: Email) -> JSONResponse:
    return mutation_response(await view.delete_draft(draft_id))
