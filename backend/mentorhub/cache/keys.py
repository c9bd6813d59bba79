"""
Typed cache keys for console reads.

A key is a query name plus its parameters. Mutations name the exact keys they
invalidate; there is no prefix or string matching.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any
from uuid import UUID


class QueryName(str, Enum):
    """Every read the console performs."""

    # Dashboard
    STUDENTS_COUNT = "students-count"
    ACTIVE_IDEAS_COUNT = "active-ideas-count"
    OPEN_TASKS_COUNT = "open-tasks-count"
    PENDING_RECEIPTS_COUNT = "pending-receipts-count"
    PRIORITY_TASKS = "priority-tasks"
    RECENT_IDEAS = "recent-ideas"

    # Collections
    STUDENTS = "students"
    IDEAS = "ideas"
    TASKS = "tasks"
    RECEIPTS = "receipts"
    RECEIPT_CATEGORIES = "receipt-categories"
    EMAIL_DRAFTS = "email-drafts"

    # Picker lists
    STUDENTS_LIST = "students-list"
    IDEAS_LIST = "ideas-list"

    # Parameterized
    IDEA = "idea"
    RESEARCH_HISTORY = "research-history"


@dataclass(frozen=True)
class QueryKey:
    """Hashable cache key: query name + sorted (param, value) pairs."""

    name: QueryName
    params: tuple[tuple[str, Any], ...] = ()

    @classmethod
    def of(cls, name: QueryName, **params: Any) -> "QueryKey":
        return cls(name, tuple(sorted(params.items())))

    def __str__(self) -> str:
        if not self.params:
            return self.name.value
        args = ",".join(f"{param}={value}" for param, value in self.params)
        return f"{self.name.value}({args})"

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name.value, "params": {param: str(value) for param, value in self.params}}


STUDENTS_COUNT = QueryKey(QueryName.STUDENTS_COUNT)
ACTIVE_IDEAS_COUNT = QueryKey(QueryName.ACTIVE_IDEAS_COUNT)
OPEN_TASKS_COUNT = QueryKey(QueryName.OPEN_TASKS_COUNT)
PENDING_RECEIPTS_COUNT = QueryKey(QueryName.PENDING_RECEIPTS_COUNT)
PRIORITY_TASKS = QueryKey(QueryName.PRIORITY_TASKS)
RECENT_IDEAS = QueryKey(QueryName.RECENT_IDEAS)

STUDENTS = QueryKey(QueryName.STUDENTS)
IDEAS = QueryKey(QueryName.IDEAS)
TASKS = QueryKey(QueryName.TASKS)
RECEIPTS = QueryKey(QueryName.RECEIPTS)
RECEIPT_CATEGORIES = QueryKey(QueryName.RECEIPT_CATEGORIES)
EMAIL_DRAFTS = QueryKey(QueryName.EMAIL_DRAFTS)

STUDENTS_LIST = QueryKey(QueryName.STUDENTS_LIST)
IDEAS_LIST = QueryKey(QueryName.IDEAS_LIST)


def idea(idea_id: UUID) -> QueryKey:
    return QueryKey.of(QueryName.IDEA, idea_id=idea_id)


def research_history(idea_id: UUID) -> QueryKey:
    return QueryKey.of(QueryName.RESEARCH_HISTORY, idea_id=idea_id)


# =============================================================================
# INVALIDATION SETS
# =============================================================================

STUDENT_MUTATION_KEYS = frozenset({STUDENTS, STUDENTS_LIST, STUDENTS_COUNT})
# Student edits also change the embedded student names on ideas and tasks
STUDENT_EMBED_KEYS = frozenset({IDEAS, RECENT_IDEAS, TASKS, PRIORITY_TASKS})
# ...and on every idea detail page, whichever idea it shows
STUDENT_EMBED_NAMES = frozenset({QueryName.IDEA})
IDEA_MUTATION_KEYS = frozenset({IDEAS, ACTIVE_IDEAS_COUNT, RECENT_IDEAS, IDEAS_LIST})
# Idea edits also change the embedded idea titles on tasks
IDEA_EMBED_KEYS = frozenset({TASKS})
TASK_MUTATION_KEYS = frozenset({TASKS, OPEN_TASKS_COUNT, PRIORITY_TASKS})
RECEIPT_MUTATION_KEYS = frozenset({RECEIPTS, PENDING_RECEIPTS_COUNT})
RECEIPT_CATEGORY_MUTATION_KEYS = frozenset({RECEIPT_CATEGORIES, RECEIPTS})
EMAIL_DRAFT_MUTATION_KEYS = frozenset({EMAIL_DRAFTS})
