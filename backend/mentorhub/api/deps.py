"""
FastAPI dependencies for the console routes.

Key patterns:
1. Store, cache and AI client are resolved per request so tests can swap them
   through app.dependency_overrides.
2. Each page's view is built from those three; routes only take the view.
3. A failed MutationResult is turned into a JSON error response here, in one
   place, so every router maps store failures the same way.
"""

from typing import Annotated

from fastapi import Depends, status
from fastapi.responses import JSONResponse

from mentorhub.cache import QueryCache, query_cache
from mentorhub.db.session import AsyncSessionLocal
from mentorhub.schemas.feedback import MutationResult
from mentorhub.services.ai_functions import AIFunctionsClient, ai_functions
from mentorhub.store import DataStore
from mentorhub.views import (
    DashboardView,
    EmailView,
    IdeasView,
    ReceiptsView,
    ResearchView,
    StudentsView,
    TasksView,
)

# =============================================================================
# CORE DEPENDENCIES
# =============================================================================


def get_store() -> DataStore:
    return DataStore(AsyncSessionLocal)


def get_cache() -> QueryCache:
    return query_cache


def get_ai() -> AIFunctionsClient:
    return ai_functions


# Type aliases for dependency injection
Store = Annotated[DataStore, Depends(get_store)]
Cache = Annotated[QueryCache, Depends(get_cache)]
AI = Annotated[AIFunctionsClient, Depends(get_ai)]


# =============================================================================
# VIEWS
# =============================================================================


def get_dashboard_view(store: Store, cache: Cache) -> DashboardView:
    return DashboardView(store, cache)


def get_students_view(store: Store, cache: Cache) -> StudentsView:
    return StudentsView(store, cache)


def get_ideas_view(store: Store, cache: Cache) -> IdeasView:
    return IdeasView(store, cache)


def get_tasks_view(store: Store, cache: Cache) -> TasksView:
    return TasksView(store, cache)


def get_receipts_view(store: Store, cache: Cache) -> ReceiptsView:
    return ReceiptsView(store, cache)


def get_research_view(store: Store, cache: Cache, ai: AI) -> ResearchView:
    return ResearchView(store, cache, ai)


def get_email_view(store: Store, cache: Cache, ai: AI) -> EmailView:
    return EmailView(store, cache, ai)


Dashboard = Annotated[DashboardView, Depends(get_dashboard_view)]
Students = Annotated[StudentsView, Depends(get_students_view)]
Ideas = Annotated[IdeasView, Depends(get_ideas_view)]
Tasks = Annotated[TasksView, Depends(get_tasks_view)]
Receipts = Annotated[ReceiptsView, Depends(get_receipts_view)]
Research = Annotated[ResearchView, Depends(get_research_view)]
Email = Annotated[EmailView, Depends(get_email_view)]


# =============================================================================
# RESPONSE HELPERS
# =============================================================================

ERROR_STATUS = {
    "constraint": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "not_found": status.HTTP_404_NOT_FOUND,
    "unavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
    "invalid_query": status.HTTP_400_BAD_REQUEST,
}


def mutation_response(result: MutationResult, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """
    Serialize a view's MutationResult.

    Failures keep the same body (notice + retained form) under a 4xx/5xx status.
    """
    if result.ok:
        code = success_status
    else:
        code = ERROR_STATUS.get(result.error or "", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=code, content=result.model_dump(mode="json"))
