"""
Platform Event Routes

Endpoints the platform host calls when the OS hands the app a file.
Handlers are sync: copying content locators blocks, so they run in
the thread pool.
"""

import logging

from fastapi import APIRouter, Body, Depends

from ezmap_bridge.api.deps import get_shared_file_service
from ezmap_bridge.features.shared_file import SharedFileService
from ezmap_bridge.features.shared_file.schemas import IncomingEvent, EventResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/launch", response_model=EventResponse)
def report_launch(
    event: IncomingEvent = Body(..., discriminator="kind"),
    service: SharedFileService = Depends(get_shared_file_service),
):
    """Event the app was (re)started with; answers getInitialSharedFile."""
    logger.info(f"Launch event: {event.kind}")
    path = service.on_launch(event.to_payload())
    return EventResponse(path=path)


@router.post("/intent", response_model=EventResponse)
def report_intent(
    event: IncomingEvent = Body(..., discriminator="kind"),
    service: SharedFileService = Depends(get_shared_file_service),
):
    """Event delivered to the running app."""
    logger.info(f"Runtime event: {event.kind}")
    path = service.on_new_intent(event.to_payload())
    return EventResponse(path=path)
