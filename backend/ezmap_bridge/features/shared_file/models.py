"""
Shared file models.

Locators, platform event payloads and the transient incoming-file event.
None of these are persisted.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union
from urllib.parse import quote, unquote, urlsplit

# RFC 3986: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")


class SourceKind(str, Enum):
    """Where an incoming file came from."""
    SEND = "send"          # share sheet
    VIEW = "view"          # opened directly (double-tap, file manager)
    OPEN_URL = "open_url"  # app opened via URL or browser continuation


@dataclass(frozen=True)
class Locator:
    """
    Opaque reference to a resource: scheme + identifier.

    `identifier` is everything after "<scheme>:". `path` is the decoded
    path component, which for a file:// locator is the filesystem path.
    """
    scheme: str
    identifier: str

    @classmethod
    def parse(cls, uri: str) -> "Locator":
        scheme, sep, rest = uri.partition(":")
        if not sep or not SCHEME_RE.match(scheme):
            # Bare path (possibly with ":" in a file name), treat as a file locator
            if uri.startswith("/"):
                return cls(scheme="file", identifier=f"//{quote(uri)}")
            return cls(scheme="file", identifier=quote(uri))
        return cls(scheme=scheme.lower(), identifier=rest)

    @property
    def uri(self) -> str:
        return f"{self.scheme}:{self.identifier}"

    @property
    def authority(self) -> str:
        return urlsplit(self.uri).netloc

    @property
    def path(self) -> str:
        return unquote(urlsplit(self.uri).path)

    @property
    def path_extension(self) -> str:
        """Extension of the last path component, without the dot."""
        name = self.path.rstrip("/").rsplit("/", 1)[-1]
        if "." not in name.lstrip("."):
            return ""
        return name.rsplit(".", 1)[-1]

    def __str__(self) -> str:
        return self.uri


# =============================================================================
# Event payloads (produced by the platform host)
# =============================================================================

@dataclass(frozen=True)
class SendPayload:
    """Share action: MIME type plus the stream extra."""
    mime_type: Optional[str] = None
    stream: Optional[Locator] = None


@dataclass(frozen=True)
class ViewPayload:
    """Open action: the primary data locator."""
    data: Optional[Locator] = None


@dataclass(frozen=True)
class OpenUrlPayload:
    """App opened via a URL."""
    url: Locator


@dataclass(frozen=True)
class ContinueActivityPayload:
    """App continued from a user activity (e.g. a browser handoff)."""
    activity_type: str
    webpage_url: Optional[Locator] = None


@dataclass(frozen=True)
class OtherPayload:
    """Any action the bridge does not handle."""
    action: Optional[str] = None


EventPayload = Union[
    SendPayload,
    ViewPayload,
    OpenUrlPayload,
    ContinueActivityPayload,
    OtherPayload,
]


@dataclass(frozen=True)
class IncomingFileEvent:
    """A relevant incoming file, before its locator is resolved."""
    source_kind: SourceKind
    locator: Locator
    mime_or_extension_hint: Optional[str] = None
