"""Filter and ordering primitives accepted by DataStore.query()."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FilterOp(str, Enum):
    EQ = "eq"
    NEQ = "neq"


@dataclass(frozen=True)
class Filter:
    """Equality/inequality predicate on a named field."""

    field: str
    value: Any
    op: FilterOp = FilterOp.EQ

    @classmethod
    def eq(cls, field: str, value: Any) -> "Filter":
        return cls(field, value, FilterOp.EQ)

    @classmethod
    def neq(cls, field: str, value: Any) -> "Filter":
        return cls(field, value, FilterOp.NEQ)


@dataclass(frozen=True)
class Order:
    """
    One (field, direction) ordering term.

    nulls_first=None follows the PostgreSQL default: nulls sort last when
    ascending and first when descending. It is always rendered explicitly so
    every dialect behaves the same.
    """

    field: str
    ascending: bool = True
    nulls_first: bool | None = None

    @property
    def resolved_nulls_first(self) -> bool:
        if self.nulls_first is None:
            return not self.ascending
        return self.nulls_first

    @classmethod
    def asc(cls, field: str, *, nulls_first: bool | None = None) -> "Order":
        return cls(field, True, nulls_first)

    @classmethod
    def desc(cls, field: str, *, nulls_first: bool | None = None) -> "Order":
        return cls(field, False, nulls_first)
