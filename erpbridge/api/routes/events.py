"""Progress event history and the server-sent event stream."""

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import StreamingResponse

from ..models import EventHistoryResponse
from ...events.progress_bus import ProgressBus
from ...events.sse import stream_frames

logger = logging.getLogger(__name__)

router = APIRouter()

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable nginx buffering
}


def get_bus(request: Request) -> ProgressBus:
    return request.app.state.progress_bus


@router.get("/history", response_model=EventHistoryResponse)
async def event_history(
    request: Request,
    count: Optional[int] = Query(default=None, ge=0),
    type: Optional[str] = Query(default=None, description="Event type prefix, e.g. 'migration'"),
):
    """Recent events, oldest first."""
    bus = get_bus(request)
    return {"events": bus.history(count=count, type=type), "clients": bus.client_count}


@router.get("")
async def event_stream(request: Request, replay: int = Query(default=0, ge=0)):
    """
    Stream events as SSE.

    The first frame is ``connected``, followed by up to ``replay`` past
    events and then every new event until the client disconnects.
    """
    bus = get_bus(request)
    client = bus.connect_sse(replay=replay)
    logger.info(f"SSE client {client.id} connected (replay={replay})")
    return StreamingResponse(
        stream_frames(client, request.is_disconnected),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
