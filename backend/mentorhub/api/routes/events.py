"""Server-sent stream of cache invalidations for mounted console pages."""

import asyncio
import json
import logging
from typing import AsyncGenerator

from fastapi import APIRouter
from sse_starlette.sse import EventSourceResponse

from mentorhub.api.deps import Cache
from mentorhub.cache import QueryCache, QueryKey

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


async def invalidation_events(cache: QueryCache) -> AsyncGenerator[dict[str, str], None]:
    """Yield one SSE event per invalidated key until the stream is closed."""
    queue: asyncio.Queue[QueryKey] = asyncio.Queue()
    # Subscribes on first iteration; closing the stream cancels it
    subscription = cache.subscribe_all(queue.put_nowait)
    try:
        while True:
            key = await queue.get()
            yield {"event": "invalidate", "data": json.dumps(key.as_dict())}
    finally:
        subscription.cancel()
        logger.debug("Invalidation stream closed")


@router.get("/events")
async def stream_invalidations(cache: Cache) -> EventSourceResponse:
    """
    One 'invalidate' event per invalidated cache key.

    Event data is the key as JSON: {"name": "tasks", "params": {}}. A page
    refetches the keys it displays when they show up here.
    """
    return EventSourceResponse(invalidation_events(cache))
