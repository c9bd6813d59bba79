"""Typed failures raised by the DataStore."""


class StoreError(Exception):
    """Base class for every DataStore failure."""

    kind = "store_error"

    def __init__(self, message: str, *, table: str | None = None) -> None:
        super().__init__(message)
        self.table = table


class StoreUnavailableError(StoreError):
    """The store could not be reached or the round trip failed in transit."""

    kind = "unavailable"


class ConstraintViolationError(StoreError):
    """The store rejected a write (missing required field, out-of-domain value, bad foreign key)."""

    kind = "constraint"


class RecordNotFoundError(StoreError):
    """Update or delete targeted a row that does not exist."""

    kind = "not_found"

    def __init__(self, table: str, record_id: object) -> None:
        super().__init__(f"{table} record {record_id} not found", table=table)
        self.record_id = record_id


class InvalidQueryError(StoreError):
    """The call named an unknown table, field or include; rejected before any round trip."""

    kind = "invalid_query"
