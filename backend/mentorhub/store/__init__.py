"""Data access facade over the relational store."""

from mentorhub.store.errors import (
    ConstraintViolationError,
    InvalidQueryError,
    RecordNotFoundError,
    StoreError,
    StoreUnavailableError,
)
from mentorhub.store.facade import EMBEDS, DataStore, Row
from mentorhub.store.query import Filter, FilterOp, Order

__all__ = [
    "DataStore",
    "Row",
    "EMBEDS",
    "Filter",
    "FilterOp",
    "Order",
    # Errors
    "StoreError",
    "StoreUnavailableError",
    "ConstraintViolationError",
    "RecordNotFoundError",
    "InvalidQueryError",
]
