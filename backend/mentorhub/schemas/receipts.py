"""Receipt and receipt category schemas."""

import datetime as dt
from datetime import datetime
from decimal import Decimal
from typing import Any, Literal
from uuid import UUID

from pydantic import Field

from mentorhub.schemas.base import BaseSchema, IDMixin, OptionalDate, OptionalText, OptionalUUID, TimestampMixin
from mentorhub.schemas.feedback import Notice
from mentorhub.schemas.pickers import CategorySummary

ReceiptStatusType = Literal["pending", "processed", "reimbursed"]


class ReceiptCategoryCreate(BaseSchema):
    """Schema for creating a receipt category."""

    name: str = Field(..., min_length=1, max_length=100)
    color: OptionalText = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")


class ReceiptCategoryRead(ReceiptCategoryCreate):
    """Schema for reading a receipt category."""

    id: UUID
    created_at: datetime


class ReceiptUpload(BaseSchema):
    """An uploaded receipt file. Only the name reaches the store; analysis happens later."""

    file_name: str = Field(..., min_length=1, max_length=255)


class ReceiptRead(BaseSchema, IDMixin, TimestampMixin):
    """Schema for reading receipt data. `category` is set only when requested."""

    vendor: str | None = None
    description: str | None = None
    amount: Decimal | None = None
    currency: str | None = None
    date: dt.date | None = None
    status: ReceiptStatusType | None = None
    category_id: UUID | None = None
    items: Any | None = None
    raw_text: str | None = None
    image_url: str | None = None
    category: CategorySummary | None = None


class ReceiptUpdate(BaseSchema):
    """Analysed fields and status changes. All fields optional."""

    vendor: OptionalText = Field(None, max_length=255)
    description: OptionalText = None
    amount: Decimal | None = Field(None, ge=0, decimal_places=2)
    currency: OptionalText = Field(None, min_length=3, max_length=3)
    date: OptionalDate = None
    status: ReceiptStatusType | None = None
    category_id: OptionalUUID = None
    items: list[dict[str, Any]] | None = None
    raw_text: OptionalText = None


class ReceiptsPage(BaseSchema):
    """View model for /receipts."""

    receipts: list[ReceiptRead]
    categories: list[ReceiptCategoryRead] = Field(default_factory=list)
    notices: list[Notice] = Field(default_factory=list)
