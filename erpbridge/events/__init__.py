"""Progress events and server-sent event streaming."""

from .progress_bus import EVENT_TYPES, ProgressBus, ProgressEvent, SSEClient, progress_bus
from .sse import format_sse_message, stream_frames

__all__ = [
    "EVENT_TYPES",
    "ProgressBus",
    "ProgressEvent",
    "SSEClient",
    "progress_bus",
    "format_sse_message",
    "stream_frames",
]
