"""Tests for the console views: reads through the cache, writes through the store."""

from datetime import date
from uuid import uuid4

import pytest
from pydantic import ValidationError

from mentorhub.cache import QueryCache, keys
from mentorhub.schemas.email_drafts import EmailRequest
from mentorhub.schemas.ideas import IdeaCreate, IdeaUpdate
from mentorhub.schemas.receipts import ReceiptCategoryCreate, ReceiptUpdate, ReceiptUpload
from mentorhub.schemas.research import ResearchRequest
from mentorhub.schemas.students import StudentCreate, StudentUpdate
from mentorhub.schemas.tasks import TaskCreate
from mentorhub.services.ai_functions import AIFunctionsClient
from mentorhub.store import DataStore
from mentorhub.views import (
    EMAIL_FALLBACK,
    RESEARCH_FALLBACK,
    DashboardView,
    EmailView,
    IdeasView,
    ReceiptsView,
    ResearchView,
    StudentsView,
    TasksView,
)

from conftest import AI_EMAIL_TEXT, AI_RESEARCH_TEXT


# =============================================================================
# DASHBOARD
# =============================================================================


async def test_dashboard_counts(store: DataStore, cache: QueryCache):
    for name in ["Ava", "Noah"]:
        await store.insert("students", {"name": name})
    await store.insert("ideas", {"title": "Solar Car", "status": "draft"})
    await store.insert("ideas", {"title": "Old Idea", "status": "archived"})
    for status in ["pending", "in_progress", "completed"]:
        await store.insert("tasks", {"title": status, "status": status})
    await store.insert("receipts", {"vendor": "Cafe", "status": "pending"})
    await store.insert("receipts", {"vendor": "Books", "status": "reimbursed"})

    page = await DashboardView(store, cache).load()

    assert page.stats.students == 2
    assert page.stats.active_ideas == 1
    assert page.stats.open_tasks == 2
    assert page.stats.pending_receipts == 1


async def test_dashboard_priority_tasks(store: DataStore, cache: QueryCache):
    student = await store.insert("students", {"name": "Ava"})
    await store.insert("tasks", {"title": "low", "priority": "low", "due_date": date(2024, 5, 2)})
    await store.insert("tasks", {"title": "high-late", "priority": "high", "due_date": date(2024, 5, 10)})
    await store.insert(
        "tasks",
        {"title": "high-early", "priority": "high", "due_date": date(2024, 5, 1), "student_id": student["id"]},
    )
    await store.insert("tasks", {"title": "done", "priority": "high", "status": "completed"})

    page = await DashboardView(store, cache).load()

    assert [task.title for task in page.priority_tasks] == ["high-early", "high-late", "low"]
    assert page.priority_tasks[0].student.name == "Ava"


async def test_dashboard_puts_missing_priority_and_due_date_last(store: DataStore, cache: QueryCache):
    unranked = await store.insert("tasks", {"title": "no-priority", "due_date": date(2024, 5, 1)})
    await store.update("tasks", unranked["id"], {"priority": None})
    await store.insert("tasks", {"title": "medium-undated", "priority": "medium"})
    await store.insert("tasks", {"title": "medium-dated", "priority": "medium", "due_date": date(2024, 6, 1)})

    page = await DashboardView(store, cache).load()

    assert [task.title for task in page.priority_tasks] == ["medium-dated", "medium-undated", "no-priority"]


async def test_dashboard_shows_at_most_four_priority_tasks(store: DataStore, cache: QueryCache):
    for index in range(6):
        await store.insert("tasks", {"title": f"task {index}", "priority": "medium"})

    page = await DashboardView(store, cache).load()

    assert len(page.priority_tasks) == 4
    assert len(cache.peek(keys.PRIORITY_TASKS)) == 5


async def test_dashboard_recent_ideas_limited_and_embed_student(store: DataStore, cache: QueryCache):
    student = await store.insert("students", {"name": "Mia"})
    for index in range(5):
        await store.insert("ideas", {"title": f"Idea {index}", "student_id": student["id"]})

    page = await DashboardView(store, cache).load()

    assert len(page.recent_ideas) == 4
    assert all(idea.student.name == "Mia" for idea in page.recent_ideas)


async def test_dashboard_renders_zeroes_when_store_is_down(broken_store: DataStore, cache: QueryCache):
    page = await DashboardView(broken_store, cache).load()

    assert page.stats.students == 0
    assert page.priority_tasks == []
    assert cache.snapshot() == {}


# =============================================================================
# STUDENTS
# =============================================================================


async def test_student_create_refreshes_list_and_count(store: DataStore, cache: QueryCache):
    students = StudentsView(store, cache)
    dashboard = DashboardView(store, cache)
    assert (await students.load()).students == []
    assert (await dashboard.load()).stats.students == 0

    result = await students.create(StudentCreate(name="Ava", email="", grade="11"))

    assert result.ok
    assert result.notice.level == "success"
    assert result.record["email"] is None
    assert [s.name for s in (await students.load()).students] == ["Ava"]
    assert (await dashboard.load()).stats.students == 1


async def test_student_delete_clears_embedded_names(store: DataStore, cache: QueryCache):
    student = await store.insert("students", {"name": "Ava"})
    await store.insert("ideas", {"title": "Robot Arm", "student_id": student["id"]})
    ideas = IdeasView(store, cache)
    assert (await ideas.load()).ideas[0].student.name == "Ava"

    result = await StudentsView(store, cache).delete(student["id"])

    assert result.ok
    idea = (await ideas.load()).ideas[0]
    assert idea.student is None
    assert idea.student_id is None


async def test_student_rename_refreshes_idea_detail(store: DataStore, cache: QueryCache):
    student = await store.insert("students", {"name": "Ava"})
    idea = await store.insert("ideas", {"title": "Robot Arm", "student_id": student["id"]})
    ideas = IdeasView(store, cache)
    assert (await ideas.detail(idea["id"])).idea.student.name == "Ava"

    result = await StudentsView(store, cache).update(student["id"], StudentUpdate(name="Bea"))

    assert result.ok
    assert (await ideas.detail(idea["id"])).idea.student.name == "Bea"


async def test_student_delete_refreshes_idea_detail(store: DataStore, cache: QueryCache):
    student = await store.insert("students", {"name": "Ava"})
    idea = await store.insert("ideas", {"title": "Robot Arm", "student_id": student["id"]})
    ideas = IdeasView(store, cache)
    assert (await ideas.detail(idea["id"])).idea.student is not None

    await StudentsView(store, cache).delete(student["id"])

    assert (await ideas.detail(idea["id"])).idea.student is None



async def test_students_page_is_empty_when_store_is_down(broken_store: DataStore, cache: QueryCache):
    page = await StudentsView(broken_store, cache).load(form_open=True)

    assert page.students == []
    assert page.form_open is True


# =============================================================================
# IDEAS
# =============================================================================


async def test_ideas_search_and_status_filter(store: DataStore, cache: QueryCache):
    for title, status in [("Solar Car", "draft"), ("Robot Arm", "validated"), ("Weather Station", "archived")]:
        await store.insert("ideas", {"title": title, "status": status})
    view = IdeasView(store, cache)

    searched = await view.load(search="robot")
    everything = await view.load(status_filter="all")

    assert [idea.title for idea in searched.ideas] == ["Robot Arm"]
    assert searched.total == 1
    assert everything.total == 3


async def test_idea_create_refreshes_every_idea_read(store: DataStore, cache: QueryCache):
    view = IdeasView(store, cache)
    dashboard = DashboardView(store, cache)
    await view.load()
    await dashboard.load()
    await TasksView(store, cache).load()

    result = await view.create(IdeaCreate(title="Greenhouse Monitor", student_id=""))

    assert result.ok
    assert (await view.load()).total == 1
    page = await dashboard.load()
    assert page.stats.active_ideas == 1
    assert [idea.title for idea in page.recent_ideas] == ["Greenhouse Monitor"]
    assert [option.title for option in (await TasksView(store, cache).load()).ideas] == ["Greenhouse Monitor"]


async def test_idea_update_refreshes_detail(store: DataStore, cache: QueryCache):
    idea = await store.insert("ideas", {"title": "Robot Arm"})
    view = IdeasView(store, cache)
    assert (await view.detail(idea["id"])).idea.status == "draft"

    result = await view.update(idea["id"], IdeaUpdate(status="researching"))

    assert result.ok
    assert (await view.detail(idea["id"])).idea.status == "researching"


async def test_idea_detail_missing(store: DataStore, cache: QueryCache):
    page = await IdeasView(store, cache).detail(uuid4())

    assert page.idea is None
    assert page.research_history == []


async def test_idea_create_failure_keeps_form_and_cache(store: DataStore, cache: QueryCache):
    view = IdeasView(store, cache)
    await view.load()
    before = cache.snapshot()

    result = await view.create(IdeaCreate(title="Orphan", student_id=uuid4()))

    assert not result.ok
    assert result.error == "constraint"
    assert result.notice.level == "error"
    assert result.notice.title == "Failed to create idea"
    assert result.form["title"] == "Orphan"
    assert cache.snapshot() == before


# =============================================================================
# TASKS
# =============================================================================


async def test_task_board_buckets_and_embeds(store: DataStore, cache: QueryCache):
    student = await store.insert("students", {"name": "Ava"})
    idea = await store.insert("ideas", {"title": "Robot Arm"})
    await store.insert("tasks", {"title": "Wire motors", "student_id": student["id"], "idea_id": idea["id"]})
    await store.insert("tasks", {"title": "Test grip", "status": "in_progress"})
    await store.insert("tasks", {"title": "Buy servos", "status": "completed"})

    page = await TasksView(store, cache).load()

    assert [t.title for t in page.board.pending] == ["Wire motors"]
    assert [t.title for t in page.board.in_progress] == ["Test grip"]
    assert [t.title for t in page.board.completed] == ["Buy servos"]
    assert page.board.pending[0].student.name == "Ava"
    assert page.board.pending[0].idea.title == "Robot Arm"
    assert [s.name for s in page.students] == ["Ava"]


async def test_task_board_orders_by_due_date_then_priority(store: DataStore, cache: QueryCache):
    await store.insert("tasks", {"title": "undated"})
    await store.insert("tasks", {"title": "may-low", "priority": "low", "due_date": date(2024, 5, 1)})
    await store.insert("tasks", {"title": "may-high", "priority": "high", "due_date": date(2024, 5, 1)})
    await store.insert("tasks", {"title": "april", "priority": "low", "due_date": date(2024, 4, 1)})

    page = await TasksView(store, cache).load()

    assert [t.title for t in page.board.pending] == ["april", "may-high", "may-low", "undated"]


async def test_task_create_refreshes_board_and_dashboard(store: DataStore, cache: QueryCache):
    tasks = TasksView(store, cache)
    dashboard = DashboardView(store, cache)
    await tasks.load()
    await dashboard.load()

    result = await tasks.create(TaskCreate(title="Draft abstract", priority="high", due_date="", student_id=""))

    assert result.ok
    assert result.record["status"] == "pending"
    assert (await tasks.load()).total == 1
    page = await dashboard.load()
    assert page.stats.open_tasks == 1
    assert [t.title for t in page.priority_tasks] == ["Draft abstract"]


async def test_task_toggle_flips_between_pending_and_completed(store: DataStore, cache: QueryCache):
    task = await store.insert("tasks", {"title": "Draft abstract"})
    view = TasksView(store, cache)

    first = await view.toggle(task["id"], "pending")
    second = await view.toggle(task["id"], "completed")

    assert first.record["status"] == "completed"
    assert second.record["status"] == "pending"
    assert first.notice is None


async def test_task_toggle_of_missing_task_fails(store: DataStore, cache: QueryCache):
    result = await TasksView(store, cache).toggle(uuid4(), "pending")

    assert not result.ok
    assert result.error == "not_found"
    assert result.notice.title == "Failed to update task"


async def test_task_delete(store: DataStore, cache: QueryCache):
    task = await store.insert("tasks", {"title": "Draft abstract"})
    view = TasksView(store, cache)
    assert (await view.load()).total == 1

    result = await view.delete(task["id"])

    assert result.ok
    assert result.notice.title == "Task deleted"
    assert (await view.load()).total == 0


async def test_mounted_task_view_receives_refetch(store: DataStore, cache: QueryCache):
    view = TasksView(store, cache)
    seen = []
    await view.observe(keys.TASKS, view.load_tasks, seen.append)

    await view.create(TaskCreate(title="Order parts"))
    await view.settle()

    assert [len(tasks) for tasks in seen] == [0, 1]

    view.unmount()
    await view.create(TaskCreate(title="Another"))
    await view.settle()

    assert len(seen) == 2


# =============================================================================
# RESEARCH
# =============================================================================


async def test_research_requires_idea_and_query(store: DataStore, cache: QueryCache, ai: AIFunctionsClient, ai_requests):
    view = ResearchView(store, cache, ai)

    outcome = await view.run(ResearchRequest(idea_id="", query="prior art"))

    assert outcome.notice.level == "error"
    assert outcome.notice.title == "Select an idea and enter a query"
    assert outcome.saved is False
    assert ai_requests == []


async def test_research_success_is_saved_and_listed(store: DataStore, cache: QueryCache, ai: AIFunctionsClient):
    idea = await store.insert("ideas", {"title": "Robot Arm"})
    view = ResearchView(store, cache, ai)
    assert (await view.load(idea_id=idea["id"])).history == []

    outcome = await view.run(ResearchRequest(idea_id=idea["id"], query="prior art", research_type="market"))

    assert outcome.result == AI_RESEARCH_TEXT
    assert outcome.saved is True
    assert outcome.notice.level == "success"
    history = (await view.load(idea_id=idea["id"])).history
    assert [(entry.query, entry.research_type, entry.result) for entry in history] == [
        ("prior art", "market", AI_RESEARCH_TEXT)
    ]
    assert (await IdeasView(store, cache).detail(idea["id"])).research_history[0].id == outcome.history_id


async def test_research_failure_returns_fallback(store: DataStore, cache: QueryCache, failing_ai: AIFunctionsClient):
    idea = await store.insert("ideas", {"title": "Robot Arm"})

    outcome = await ResearchView(store, cache, failing_ai).run(ResearchRequest(idea_id=idea["id"], query="prior art"))

    assert outcome.result == RESEARCH_FALLBACK
    assert outcome.notice.level == "error"
    assert outcome.saved is False
    assert await store.count("research_history") == 0


async def test_research_page_without_selection_has_no_history(store: DataStore, cache: QueryCache, ai: AIFunctionsClient):
    await store.insert("ideas", {"title": "Robot Arm"})

    page = await ResearchView(store, cache, ai).load()

    assert [option.title for option in page.ideas] == ["Robot Arm"]
    assert page.selected_idea_id is None
    assert page.history == []


# =============================================================================
# EMAIL
# =============================================================================


async def test_email_success_saves_draft(store: DataStore, cache: QueryCache, ai: AIFunctionsClient):
    view = EmailView(store, cache, ai)
    assert (await view.load()).drafts == []

    outcome = await view.generate(EmailRequest(action="compose", recipient="Ms. Rivera", occasion="thank you"))

    assert outcome.email == AI_EMAIL_TEXT
    assert outcome.saved is True
    drafts = (await view.load()).drafts
    assert [(d.action_type, d.recipient, d.content) for d in drafts] == [("compose", "Ms. Rivera", AI_EMAIL_TEXT)]


async def test_email_failure_returns_fallback(store: DataStore, cache: QueryCache):
    view = EmailView(store, cache, AIFunctionsClient(None))

    outcome = await view.generate(EmailRequest(action="rewrite", original_email="pls send notes"))

    assert outcome.email == EMAIL_FALLBACK
    assert outcome.notice.level == "error"
    assert outcome.saved is False
    assert await store.count("email_drafts") == 0


def test_oversized_email_fields_are_rejected():
    with pytest.raises(ValidationError):
        EmailRequest(action="compose", recipient="x" * 300, topic="hi")
    with pytest.raises(ValidationError):
        EmailRequest(action="compose", occasion="x" * 256)


async def test_longest_accepted_recipient_is_saved(store: DataStore, cache: QueryCache, ai: AIFunctionsClient):
    recipient = "x" * 255

    outcome = await EmailView(store, cache, ai).generate(EmailRequest(action="compose", recipient=recipient))

    assert outcome.saved is True
    assert [d.recipient for d in (await EmailView(store, cache, ai).load()).drafts] == [recipient]


# =============================================================================
# RECEIPTS
# =============================================================================


async def test_receipt_upload_inserts_pending_placeholder(store: DataStore, cache: QueryCache):
    view = ReceiptsView(store, cache)
    dashboard = DashboardView(store, cache)
    assert (await dashboard.load()).stats.pending_receipts == 0

    result = await view.upload(ReceiptUpload(file_name="lunch.jpg"))

    assert result.ok
    receipt = (await view.load()).receipts[0]
    assert receipt.vendor == "Pending Analysis"
    assert receipt.description == "Uploaded: lunch.jpg"
    assert receipt.status == "pending"
    assert (await dashboard.load()).stats.pending_receipts == 1


async def test_receipt_category_assignment_is_embedded(store: DataStore, cache: QueryCache):
    view = ReceiptsView(store, cache)
    category = (await view.create_category(ReceiptCategoryCreate(name="Supplies", color="#22C55E"))).record
    upload = (await view.upload(ReceiptUpload(file_name="parts.pdf"))).record

    result = await view.update(
        upload["id"],
        ReceiptUpdate(vendor="Parts Co", amount="12.50", status="processed", category_id=str(category["id"])),
    )

    assert result.ok
    page = await view.load()
    assert [c.name for c in page.categories] == ["Supplies"]
    assert page.receipts[0].category.name == "Supplies"
    assert page.receipts[0].status == "processed"
