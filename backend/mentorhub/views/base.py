"""
Shared plumbing for the console views.

A view reads through the query cache and writes through the data store:

- read(): a store failure is logged and the view renders its empty state.
- run_mutation(): the cache invalidates only after the write succeeds; a
  failure comes back as a MutationResult carrying an error notice and the
  form values the user entered.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeVar

from pydantic import BaseModel

from mentorhub.cache import QueryCache, QueryKey, QueryName, QueryObserver, keys
from mentorhub.config import sanitize_error
from mentorhub.schemas.feedback import MutationResult, Notice
from mentorhub.schemas.pickers import IdeaOption, StudentOption
from mentorhub.store import DataStore, Order, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConsoleView:
    """Base class for one console page."""

    def __init__(self, store: DataStore, cache: QueryCache) -> None:
        self.store = store
        self.cache = cache
        self._observers: list[QueryObserver] = []

    async def read(self, key: QueryKey, loader: Callable[[], Awaitable[T]], *, empty: T) -> T:
        """Cached read of one key; `empty` stands in when the store fails."""
        try:
            return await self.cache.fetch(key, loader)
        except StoreError:
            logger.exception("Read of %s failed, rendering empty state", key)
            return empty

    async def run_mutation(
        self,
        action: Callable[[], Awaitable[Any]],
        *,
        invalidates: Iterable[QueryKey],
        success: str | None,
        failure: str,
        form: BaseModel | None = None,
        invalidates_names: Iterable[QueryName] = (),
    ) -> MutationResult:
        try:
            record = await self.cache.mutate(action, invalidates=invalidates, invalidates_names=invalidates_names)
        except StoreError as e:
            logger.warning("%s (%s): %s", failure, e.kind, e)
            return MutationResult(
                ok=False,
                notice=Notice(level="error", title=failure, detail=sanitize_error(e)),
                form=form.model_dump(mode="json") if form is not None else None,
                error=e.kind,
            )

        return MutationResult(
            ok=True,
            notice=Notice(level="success", title=success) if success else None,
            record=record,
        )

    # =========================================================================
    # MOUNTING
    # =========================================================================

    async def observe(
        self,
        key: QueryKey,
        loader: Callable[[], Awaitable[T]],
        on_data: Callable[[T], Any],
        on_error: Callable[[Exception], Any] | None = None,
    ) -> T:
        """Register interest in key: on_data gets the current value and every refetch after an invalidation."""
        observer = QueryObserver(self.cache, key, loader, on_data, on_error)
        self._observers.append(observer)
        return await observer.start()

    async def settle(self) -> None:
        """Wait for background refetches triggered by invalidations."""
        for observer in self._observers:
            await observer.settle()

    def unmount(self) -> None:
        for observer in self._observers:
            observer.close()
        self._observers.clear()


# =============================================================================
# PICKER LISTS (shared by every page with a student or idea selector)
# =============================================================================


async def load_student_options(store: DataStore) -> list[StudentOption]:
    rows = await store.query("students", columns=["id", "name"], order=[Order.asc("name")])
    return [StudentOption.model_validate(row) for row in rows]


async def load_idea_options(store: DataStore) -> list[IdeaOption]:
    rows = await store.query("ideas", columns=["id", "title"], order=[Order.asc("title")])
    return [IdeaOption.model_validate(row) for row in rows]


async def read_student_options(view: ConsoleView) -> list[StudentOption]:
    return await view.read(keys.STUDENTS_LIST, lambda: load_student_options(view.store), empty=[])


async def read_idea_options(view: ConsoleView) -> list[IdeaOption]:
    return await view.read(keys.IDEAS_LIST, lambda: load_idea_options(view.store), empty=[])
