"""
Channel names and matching constants.

The channel names are addressed by the application layer and must match
it exactly.
"""

from enum import Enum


# === Channels ===
METHOD_CHANNEL = "com.chijia.flutter_ezmap/shared_file"
EVENT_CHANNEL = "com.chijia.flutter_ezmap/shared_file_stream"

# Only method on METHOD_CHANNEL
GET_INITIAL_SHARED_FILE = "getInitialSharedFile"


# === Matching ===
# "send" events: checked in this order, case-sensitive
GPX_MIME_TYPE = "application/gpx+xml"
XML_MIME_TYPE = "application/xml"
XML_MARKER = "xml"

# "view" events compare a literal path suffix, URL events the extension
GPX_EXTENSION = "gpx"
GPX_PATH_SUFFIX = ".gpx"

# Activity type for continuation from a browser (universal links)
BROWSING_WEB_ACTIVITY = "NSUserActivityTypeBrowsingWeb"


class LocatorScheme(str, Enum):
    """URI schemes the materializer knows how to resolve."""
    FILE = "file"
    CONTENT = "content"
