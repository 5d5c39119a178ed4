"""
Shared constants (NOT business logic).

Usage:
    from ezmap_bridge.shared import METHOD_CHANNEL, EVENT_CHANNEL
"""
from .constants import (
    METHOD_CHANNEL,
    EVENT_CHANNEL,
    GET_INITIAL_SHARED_FILE,
    GPX_EXTENSION,
    GPX_PATH_SUFFIX,
    BROWSING_WEB_ACTIVITY,
    LocatorScheme,
)

__all__ = [
    "METHOD_CHANNEL",
    "EVENT_CHANNEL",
    "GET_INITIAL_SHARED_FILE",
    "GPX_EXTENSION",
    "GPX_PATH_SUFFIX",
    "BROWSING_WEB_ACTIVITY",
    "LocatorScheme",
]
