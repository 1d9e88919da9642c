"""Server-Sent Events (SSE) helper utilities for streaming progress."""

import asyncio
import json
from typing import Any, AsyncIterator, Awaitable, Callable, Dict


def format_sse_message(event: str, data: Dict[str, Any]) -> str:
    """
    Format a message as a Server-Sent Event.

    Args:
        event: Event type (e.g., 'connected', 'extraction:progress')
        data: Event data to send as JSON

    Returns:
        Formatted SSE message string
    """
    json_data = json.dumps(data, default=str)
    return f"event: {event}\ndata: {json_data}\n\n"


KEEPALIVE_FRAME = ": keep-alive\n\n"


async def stream_frames(
    client,
    is_disconnected: Callable[[], Awaitable[bool]],
    keepalive_seconds: float = 15.0,
) -> AsyncIterator[str]:
    """
    Yield frames queued for an SSE client until the peer goes away.

    A comment frame is sent when nothing happened for ``keepalive_seconds``
    so intermediaries keep the connection open. The client is always closed
    (and thereby pruned from its bus) when the generator finishes.

    Args:
        client: An ``SSEClient`` returned by ``ProgressBus.connect_sse``
        is_disconnected: Coroutine function reporting whether the peer left
        keepalive_seconds: Idle interval before a keep-alive comment
    """
    try:
        while not client.closed:
            if await is_disconnected():
                break
            try:
                frame = await asyncio.wait_for(client.next_frame(), timeout=keepalive_seconds)
            except asyncio.TimeoutError:
                yield KEEPALIVE_FRAME
                continue
            yield frame
    finally:
        client.close()
