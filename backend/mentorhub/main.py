"""
Mentorhub FastAPI Application Entry Point.

Run with: uvicorn mentorhub.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mentorhub.api.routes import dashboard, email, events, ideas, receipts, research, students, tasks
from mentorhub.cache import query_cache
from mentorhub.config import get_settings
from mentorhub.db.session import engine

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown."""
    # Startup
    logger.info("Starting %s (%s)", settings.app_name, settings.environment)
    if not settings.ai_functions_url:
        logger.warning("AI_FUNCTIONS_URL is not set; email and research will return fallback text")
    yield
    # Shutdown
    query_cache.clear()
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Tutoring console API: students, ideas, tasks, receipts and AI assists",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(dashboard.router)
app.include_router(students.router)
app.include_router(ideas.router)
app.include_router(research.router)
app.include_router(tasks.router)
app.include_router(receipts.router)
app.include_router(email.router)
app.include_router(events.router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.exception_handler(status.HTTP_404_NOT_FOUND)
async def not_found(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unmatched paths get a page-level message; route 404s keep their own detail."""
    detail = exc.detail
    if detail == "Not Found":
        detail = f"No page at {request.url.path}"
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": detail})
