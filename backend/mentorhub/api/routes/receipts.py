"""Receipt and receipt category routes."""

from uuid import UUID

from fastapi import APIRouter, File, UploadFile, status
from fastapi.responses import JSONResponse

from mentorhub.api.deps import Receipts, mutation_response
from mentorhub.schemas.receipts import ReceiptCategoryCreate, ReceiptsPage, ReceiptUpdate, ReceiptUpload

router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.get("", response_model=ReceiptsPage)
async def list_receipts(view: Receipts) -> ReceiptsPage:
    """Receipts newest first, each with its category, plus the category list."""
    return await view.load()


@router.post("/upload", status_code=status.HTTP_201_CREATED)
async def upload_receipt(view: Receipts, file: UploadFile = File(...)) -> JSONResponse:
    """
    Upload a receipt file.

    Only a pending placeholder row is stored; analysis fills in the real
    fields later through PATCH.
    """
    upload = ReceiptUpload(file_name=file.filename or "receipt")
    return mutation_response(await view.upload(upload), status.HTTP_201_CREATED)


@router.patch("/{receipt_id}")
async def update_receipt(receipt_id: UUID, data: ReceiptUpdate, view: Receipts) -> JSONResponse:
    return mutation_response(await view.update(receipt_id, data))


@router.delete("/{receipt_id}")
async def delete_receipt(receipt_id: UUID, view: Receipts) -> JSONResponse:
    return mutation_response(await view.delete(receipt_id))


# =============================================================================
# CATEGORIES
# =============================================================================


@router.post("/categories", status_code=status.HTTP_201_CREATED)
async def create_category(data: ReceiptCategoryCreate, view: Receipts) -> JSONResponse:
    return mutation_response(await view.create_category(data), status.HTTP_201_CREATED)


@router.delete("/categories/{category_id}")
async def delete_category(category_id: UUID, view: Receipts) -> JSONResponse:
    """Delete a category. Its receipts become uncategorized."""
    return mutation_response(await view.delete_category(category_id))
