"""Email assistant page: compose, reply or rewrite with the email function."""

import logging
from uuid import UUID

from mentorhub.cache import QueryCache, keys
from mentorhub.schemas.email_drafts import EmailDraftCreate, EmailDraftRead, EmailOutcome, EmailPage, EmailRequest
from mentorhub.schemas.feedback import MutationResult, Notice
from mentorhub.services.ai_functions import AIFunctionError, AIFunctionsClient
from mentorhub.store import DataStore, Order
from mentorhub.views.base import ConsoleView

logger = logging.getLogger(__name__)

EMAIL_FALLBACK = "AI email generation requires the edge function to be deployed."


class EmailView(ConsoleView):
    """Reads email-drafts; writes email_drafts after a successful generation."""

    def __init__(self, store: DataStore, cache: QueryCache, ai: AIFunctionsClient) -> None:
        super().__init__(store, cache)
        self.ai = ai

    async def load(self) -> EmailPage:
        drafts = await self.read(keys.EMAIL_DRAFTS, self.load_drafts, empty=[])
        return EmailPage(drafts=drafts)

    async def load_drafts(self) -> list[EmailDraftRead]:
        rows = await self.store.query("email_drafts", order=[Order.desc("created_at")])
        return [EmailDraftRead.model_validate(row) for row in rows]

    async def generate(self, request: EmailRequest) -> EmailOutcome:
        try:
            email = await self.ai.generate_email(
                request.action,
                occasion=request.occasion,
                recipient=request.recipient,
                topic=request.topic,
                original_email=request.original_email,
            )
        except AIFunctionError as e:
            logger.warning("Email %s fell back: %s", request.action, e)
            return EmailOutcome(
                email=EMAIL_FALLBACK,
                notice=Notice(level="error", title="Email generation failed - edge function needed"),
            )

        draft = EmailDraftCreate(
            action_type=request.action,
            content=email,
            recipient=request.recipient,
            occasion=request.occasion,
            topic=request.topic,
            original_email=request.original_email,
        )
        saved = await self.run_mutation(
            lambda: self.store.insert("email_drafts", draft.model_dump()),
            invalidates=keys.EMAIL_DRAFT_MUTATION_KEYS,
            success="Email generated!",
            failure="Email generated, but saving the draft failed",
        )
        return EmailOutcome(
            email=email,
            notice=saved.notice,
            saved=saved.ok,
            draft_id=saved.record["id"] if saved.ok else None,
        )

    async def delete_draft(self, draft_id: UUID) -> MutationResult:
        return await self.run_mutation(
            lambda: self.store.delete("email_drafts", draft_id),
            invalidates=keys.EMAIL_DRAFT_MUTATION_KEYS,
            success="Draft deleted",
            failure="Failed to delete draft",
        )
