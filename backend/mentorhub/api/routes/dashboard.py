"""Dashboard route."""

from fastapi import APIRouter

from mentorhub.api.deps import Dashboard
from mentorhub.schemas.dashboard import DashboardPage

router = APIRouter(tags=["dashboard"])


@router.get("/", response_model=DashboardPage)
async def get_dashboard(view: Dashboard) -> DashboardPage:
    """Stat counts, the top open tasks by priority, and the latest ideas."""
    return await view.load()
