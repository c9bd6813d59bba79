"""Receipts page: uploads land as pending placeholders until analysed."""

from uuid import UUID

from mentorhub.cache import keys
from mentorhub.db.models import ReceiptStatus
from mentorhub.schemas.feedback import MutationResult
from mentorhub.schemas.receipts import (
    ReceiptCategoryCreate,
    ReceiptCategoryRead,
    ReceiptRead,
    ReceiptsPage,
    ReceiptUpdate,
    ReceiptUpload,
)
from mentorhub.store import Order
from mentorhub.views.base import ConsoleView

PLACEHOLDER_VENDOR = "Pending Analysis"


def placeholder_receipt(upload: ReceiptUpload) -> dict:
    """Row inserted for a freshly uploaded file."""
    return {
        "vendor": PLACEHOLDER_VENDOR,
        "description": f"Uploaded: {upload.file_name}",
        "status": ReceiptStatus.PENDING.value,
    }


class ReceiptsView(ConsoleView):
    """Reads receipts and receipt-categories; writes both tables."""

    async def load(self) -> ReceiptsPage:
        receipts = await self.read(keys.RECEIPTS, self.load_receipts, empty=[])
        categories = await self.read(keys.RECEIPT_CATEGORIES, self.load_categories, empty=[])
        return ReceiptsPage(receipts=receipts, categories=categories)

    async def load_receipts(self) -> list[ReceiptRead]:
        rows = await self.store.query("receipts", order=[Order.desc("created_at")], include="receipt_categories")
        return [ReceiptRead.model_validate(row) for row in rows]

    async def load_categories(self) -> list[ReceiptCategoryRead]:
        rows = await self.store.query("receipt_categories", order=[Order.asc("name")])
        return [ReceiptCategoryRead.model_validate(row) for row in rows]

    async def upload(self, upload: ReceiptUpload) -> MutationResult:
        return await self.run_mutation(
            lambda: self.store.insert("receipts", placeholder_receipt(upload)),
            invalidates=keys.RECEIPT_MUTATION_KEYS,
            success="Receipt uploaded! AI analysis coming soon.",
            failure="Upload failed",
            form=upload,
        )

    async def update(self, receipt_id: UUID, patch: ReceiptUpdate) -> MutationResult:
        return await self.run_mutation(
            lambda: self.store.update("receipts", receipt_id, patch.model_dump(exclude_unset=True)),
            invalidates=keys.RECEIPT_MUTATION_KEYS,
            success="Receipt updated",
            failure="Failed to update receipt",
            form=patch,
        )

    async def delete(self, receipt_id: UUID) -> MutationResult:
        return await self.run_mutation(
            lambda: self.store.delete("receipts", receipt_id),
            invalidates=keys.RECEIPT_MUTATION_KEYS,
            success="Receipt deleted",
            failure="Failed to delete receipt",
        )

    async def create_category(self, form: ReceiptCategoryCreate) -> MutationResult:
        return await self.run_mutation(
            lambda: self.store.insert("receipt_categories", form.model_dump()),
            invalidates=keys.RECEIPT_CATEGORY_MUTATION_KEYS,
            success="Category created",
            failure="Failed to create category",
            form=form,
        )

    async def delete_category(self, category_id: UUID) -> MutationResult:
        # Receipts in the category stay, uncategorized
        return await self.run_mutation(
            lambda: self.store.delete("receipt_categories", category_id),
            invalidates=keys.RECEIPT_CATEGORY_MUTATION_KEYS,
            success="Category deleted",
            failure="Failed to delete category",
        )
