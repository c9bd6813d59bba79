"""Tests for task/idea filtering, bucketing and toggle rules."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from mentorhub.schemas.ideas import IdeaRead
from mentorhub.schemas.tasks import TaskRead
from mentorhub.views import bucket_tasks, filter_ideas, filter_tasks, toggle_status

NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


def make_task(title: str = "Task", **fields) -> TaskRead:
    fields.setdefault("status", "pending")
    return TaskRead(id=uuid4(), title=title, created_at=NOW, updated_at=NOW, **fields)


def make_idea(title: str, status: str = "draft", description: str | None = None) -> IdeaRead:
    return IdeaRead(id=uuid4(), title=title, status=status, description=description, created_at=NOW, updated_at=NOW)


def test_bucketing_puts_each_task_in_exactly_one_column():
    tasks = [
        make_task("a", status="pending"),
        make_task("b", status="pending"),
        make_task("c", status="in_progress"),
        make_task("d", status="completed"),
        make_task("e", status="completed"),
    ]

    board = bucket_tasks(tasks)

    assert [len(board.pending), len(board.in_progress), len(board.completed)] == [2, 1, 2]
    ids = [task.id for column in (board.pending, board.in_progress, board.completed) for task in column]
    assert sorted(ids) == sorted(task.id for task in tasks)


@pytest.mark.parametrize(
    ("current", "expected"),
    [
        ("pending", "completed"),
        ("completed", "pending"),
        ("in_progress", "completed"),
    ],
)
def test_toggle_status(current: str, expected: str):
    assert toggle_status(current) == expected


def test_toggle_never_produces_in_progress():
    status = "pending"
    for _ in range(4):
        status = toggle_status(status)
        assert status != "in_progress"


def test_filter_tasks_by_search_and_status():
    tasks = [
        make_task("Order solar panels", status="pending"),
        make_task("Write report", description="Include SOLAR data", status="completed"),
        make_task("Book lab", status="in_progress"),
    ]

    assert [t.title for t in filter_tasks(tasks, search="solar")] == ["Order solar panels", "Write report"]
    assert [t.title for t in filter_tasks(tasks, search="solar", status_filter="completed")] == ["Write report"]
    assert len(filter_tasks(tasks)) == 3


def test_filter_ideas_by_title_search_and_status():
    ideas = [
        make_idea("Solar Car", status="draft"),
        make_idea("Robot Arm", status="validated"),
        make_idea("Weather Station", status="archived"),
    ]

    assert [idea.title for idea in filter_ideas(ideas, search="robot")] == ["Robot Arm"]
    assert len(filter_ideas(ideas, status_filter="all")) == 3
    assert [idea.title for idea in filter_ideas(ideas, status_filter="archived")] == ["Weather Station"]


def test_filter_ideas_searches_description():
    ideas = [make_idea("Untitled", description="A greenhouse monitor"), make_idea("Other")]

    assert [idea.title for idea in filter_ideas(ideas, search="GREENHOUSE")] == ["Untitled"]
