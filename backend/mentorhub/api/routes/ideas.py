"""Idea routes: list with search/filter, detail with research history, CRUD."""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from mentorhub.api.deps import Ideas, mutation_response
from mentorhub.schemas.ideas import IdeaCreate, IdeaDetailPage, IdeasPage, IdeaStatusFilter, IdeaUpdate

router = APIRouter(prefix="/ideas", tags=["ideas"])


@router.get("", response_model=IdeasPage)
async def list_ideas(
    view: Ideas,
    search: str = "",
    status_filter: IdeaStatusFilter = "all",
    action: Literal["add"] | None = None,
) -> IdeasPage:
    """
    List ideas, newest first.

    Filters:
    - search: case-insensitive match on title or description
    - status_filter: one idea status, or "all"
    """
    return await view.load(search=search, status_filter=status_filter, form_open=action == "add")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_idea(data: IdeaCreate, view: Ideas) -> JSONResponse:
    """Create a new idea."""
    return mutation_response(await view.create(data), status.HTTP_201_CREATED)


@router.get("/{idea_id}", response_model=IdeaDetailPage)
async def get_idea(idea_id: UUID, view: Ideas) -> IdeaDetailPage:
    """Get one idea with its research history."""
    page = await view.detail(idea_id)
    if page.idea is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Idea not found")
    return page


@router.patch("/{idea_id}")
async def update_idea(idea_id: UUID, data: IdeaUpdate, view: Ideas) -> JSONResponse:
    return mutation_response(await view.update(idea_id, data))


@router.delete("/{idea_id}")
async def delete_idea(idea_id: UUID, view: Ideas) -> JSONResponse:
    """Delete an idea and its research history."""
    return mutation_response(await view.delete(idea_id))
