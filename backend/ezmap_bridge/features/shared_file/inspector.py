"""
Intent/URL Inspector

Decides whether a platform event is an incoming GPX file and extracts
its locator. Pure functions, no I/O.

Matching rules differ per source:
- send: MIME type only (no extension check)
- view: literal ".gpx" suffix on the resolved path (no MIME check)
- open URL / browser continuation: URL path extension == "gpx"
"""

import logging
from typing import Optional

from ezmap_bridge.shared.constants import (
    GPX_MIME_TYPE,
    XML_MIME_TYPE,
    XML_MARKER,
    GPX_EXTENSION,
    GPX_PATH_SUFFIX,
    BROWSING_WEB_ACTIVITY,
)
from .exceptions import NotRelevantEvent, MissingResourceLocator
from .models import (
    EventPayload,
    IncomingFileEvent,
    Locator,
    SendPayload,
    ViewPayload,
    OpenUrlPayload,
    ContinueActivityPayload,
    SourceKind,
)

logger = logging.getLogger(__name__)


def is_xml_mime_type(mime_type: Optional[str]) -> bool:
    """True for application/gpx+xml, application/xml* or anything containing "xml"."""
    if mime_type is None:
        return False
    return (
        mime_type.startswith(GPX_MIME_TYPE)
        or mime_type.startswith(XML_MIME_TYPE)
        or XML_MARKER in mime_type
    )


def inspect(payload: EventPayload) -> Optional[IncomingFileEvent]:
    """
    Turn a platform payload into an incoming file event.

    Args:
        payload: Event payload from the platform host

    Returns:
        IncomingFileEvent, or None if the event is not relevant or has
        no locator. VIEW events still need is_relevant_path() once the
        locator is resolved.
    """
    try:
        return extract_event(payload)
    except (NotRelevantEvent, MissingResourceLocator) as e:
        logger.debug(f"Ignoring {type(payload).__name__}: {e}")
        return None


def extract_event(payload: EventPayload) -> IncomingFileEvent:
    """
    Strict variant of inspect().

    Raises:
        NotRelevantEvent: Action or type/extension does not match
        MissingResourceLocator: Relevant action without a locator
    """
    if isinstance(payload, SendPayload):
        if not is_xml_mime_type(payload.mime_type):
            raise NotRelevantEvent(f"MIME type {payload.mime_type!r} is not XML")
        if payload.stream is None:
            raise MissingResourceLocator("send event has no stream extra")
        return IncomingFileEvent(
            source_kind=SourceKind.SEND,
            locator=payload.stream,
            mime_or_extension_hint=payload.mime_type,
        )

    if isinstance(payload, ViewPayload):
        if payload.data is None:
            raise MissingResourceLocator("view event has no data")
        return IncomingFileEvent(
            source_kind=SourceKind.VIEW,
            locator=payload.data,
            mime_or_extension_hint=GPX_PATH_SUFFIX,
        )

    if isinstance(payload, OpenUrlPayload):
        return _url_event(payload.url)

    if isinstance(payload, ContinueActivityPayload):
        if payload.activity_type != BROWSING_WEB_ACTIVITY:
            raise NotRelevantEvent(f"activity type {payload.activity_type!r}")
        if payload.webpage_url is None:
            raise MissingResourceLocator("browsing activity has no webpage URL")
        return _url_event(payload.webpage_url)

    raise NotRelevantEvent(f"unsupported action {getattr(payload, 'action', None)!r}")


def _url_event(url: Locator) -> IncomingFileEvent:
    if url.path_extension != GPX_EXTENSION:
        raise NotRelevantEvent(f"URL without .gpx extension: {url}")
    return IncomingFileEvent(
        source_kind=SourceKind.OPEN_URL,
        locator=url,
        mime_or_extension_hint=GPX_EXTENSION,
    )


def is_relevant_path(event: IncomingFileEvent, path: str) -> bool:
    """
    Final relevance check on a resolved path.

    Only VIEW events are filtered here; SEND and OPEN_URL events were
    already decided by inspect().
    """
    if event.source_kind == SourceKind.VIEW:
        return path.endswith(GPX_PATH_SUFFIX)
    return True
