"""
Channel Routes

The two channels the application layer talks to:
- method channel: POST /channels/{name}/invoke
- event channel: GET /channels/{name}/stream (server-sent events)
"""

import asyncio
import logging
from collections import deque
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from ezmap_bridge.api.deps import get_shared_file_service
from ezmap_bridge.features.shared_file import MethodNotImplemented, SharedFileService
from ezmap_bridge.features.shared_file.schemas import MethodCall, MethodResult
from ezmap_bridge.shared.constants import METHOD_CHANNEL, EVENT_CHANNEL

logger = logging.getLogger(__name__)

router = APIRouter()

# Seconds between disconnect checks while the stream is idle
DISCONNECT_POLL_SECONDS = 1.0


class QueueEventSink:
    """
    EventSink buffering paths for one stream connection.

    success() may be called from any thread. Values go into a deque
    right away and the owning loop is only woken up, so drain() sees
    everything delivered before the listener was detached.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self.loop = loop
        self.events: deque[str] = deque()
        self._ready = asyncio.Event()

    def success(self, event: str) -> None:
        self.events.append(event)
        self.loop.call_soon_threadsafe(self._ready.set)

    async def get(self, timeout: float) -> Optional[str]:
        """Next path, or None if nothing arrived within `timeout` seconds."""
        if not self.events:
            self._ready.clear()
            if not self.events:
                try:
                    await asyncio.wait_for(self._ready.wait(), timeout)
                except asyncio.TimeoutError:
                    return None
        try:
            return self.events.popleft()
        except IndexError:
            return None

    def drain(self) -> list[str]:
        """Remove and return everything not yet sent."""
        drained = []
        while True:
            try:
                drained.append(self.events.popleft())
            except IndexError:
                return drained


def format_sse(data: str) -> str:
    """One server-sent event carrying `data`."""
    lines = data.splitlines() or [""]
    return "".join(f"data: {line}\n" for line in lines) + "\n"


async def stream_events(
    service: SharedFileService,
    sink: QueueEventSink,
    request: Request,
) -> AsyncIterator[str]:
    """
    SSE frames for one listener.

    Attaches `sink` on start. On close it detaches and hands the latest
    path still in the sink back to the relay as pending.
    """
    service.attach_listener(sink)
    logger.info("Event channel listener attached")
    try:
        while True:
            path = await sink.get(DISCONNECT_POLL_SECONDS)
            if path is None:
                if await request.is_disconnected():
                    break
                continue
            yield format_sse(path)
    finally:
        service.detach_listener(sink)
        undelivered = sink.drain()
        if undelivered:
            logger.info(f"Stream closed with {len(undelivered)} undelivered shared file(s)")
            service.hold_undelivered(undelivered[-1])
        logger.info("Event channel listener detached")


@router.post("/{channel:path}/invoke", response_model=MethodResult)
def invoke(
    channel: str,
    call: MethodCall,
    service: SharedFileService = Depends(get_shared_file_service),
):
    """
    Call a method on a method channel.

    Only `getInitialSharedFile` exists; anything else answers 501.
    """
    if channel != METHOD_CHANNEL:
        raise HTTPException(status_code=404, detail=f"Unknown method channel: {channel}")

    try:
        result = service.handle_method_call(call.method, call.arguments)
    except MethodNotImplemented as e:
        raise HTTPException(status_code=501, detail=str(e))

    return MethodResult(result=result)


@router.get("/{channel:path}/stream")
async def stream(
    channel: str,
    request: Request,
    service: SharedFileService = Depends(get_shared_file_service),
):
    """
    Listen on the event channel.

    Opening the stream attaches the listener (flushing a pending file),
    closing it detaches. Emits one event per file path, never errors,
    never completes on its own.
    """
    if channel != EVENT_CHANNEL:
        raise HTTPException(status_code=404, detail=f"Unknown event channel: {channel}")

    sink = QueueEventSink(asyncio.get_running_loop())
    return StreamingResponse(stream_events(service, sink, request), media_type="text/event-stream")
