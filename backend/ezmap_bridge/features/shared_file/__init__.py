"""
Shared file relay module.

Usage:
    from ezmap_bridge.features.shared_file import SharedFileService, ViewPayload, Locator

Components:
- inspect / is_relevant_path: decide whether a platform event is an incoming GPX file
- ResourceMaterializer: resolve locators to local paths (copying content:// data)
- ChannelRelay: event stream with one listener and one pending slot
- SharedFileService: the pipeline plus the getInitialSharedFile method
"""

from .exceptions import (
    SharedFileError,
    NotRelevantEvent,
    MissingResourceLocator,
    ResourceMetadataUnavailable,
    IOFailureDuringCopy,
    MethodNotImplemented,
)
from .models import (
    SourceKind,
    Locator,
    EventPayload,
    SendPayload,
    ViewPayload,
    OpenUrlPayload,
    ContinueActivityPayload,
    OtherPayload,
    IncomingFileEvent,
)
from .inspector import inspect, extract_event, is_relevant_path, is_xml_mime_type
from .providers import ContentProvider, InMemoryContentProvider, DirectoryContentProvider
from .materializer import ResourceMaterializer
from .relay import ChannelRelay, RelayState, EventSink, CallbackSink
from .service import SharedFileService

__all__ = [
    # Errors
    "SharedFileError",
    "NotRelevantEvent",
    "MissingResourceLocator",
    "ResourceMetadataUnavailable",
    "IOFailureDuringCopy",
    "MethodNotImplemented",
    # Models
    "SourceKind",
    "Locator",
    "EventPayload",
    "SendPayload",
    "ViewPayload",
    "OpenUrlPayload",
    "ContinueActivityPayload",
    "OtherPayload",
    "IncomingFileEvent",
    # Inspector
    "inspect",
    "extract_event",
    "is_relevant_path",
    "is_xml_mime_type",
    # Providers
    "ContentProvider",
    "InMemoryContentProvider",
    "DirectoryContentProvider",
    # Services
    "ResourceMaterializer",
    "ChannelRelay",
    "RelayState",
    "EventSink",
    "CallbackSink",
    "SharedFileService",
]
