"""
Content providers.

Back content:// locators, which are not filesystem paths. A provider
reports a display name and opens a byte stream for a locator.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Protocol

from .models import Locator

logger = logging.getLogger(__name__)


class ContentProvider(Protocol):
    """Resolves content locators to metadata and bytes."""

    def query_display_name(self, locator: Locator) -> Optional[str]:
        ...

    def open_input_stream(self, locator: Locator) -> Optional[BinaryIO]:
        ...


class InMemoryContentProvider:
    """
    Provider backed by registered blobs.

    Usage:
        provider = InMemoryContentProvider()
        provider.register("content://downloads/1", "track.gpx", b"<gpx/>")
    """

    def __init__(self):
        self._entries: dict[str, tuple[Optional[str], bytes]] = {}

    def register(self, uri: str, display_name: Optional[str], data: bytes) -> Locator:
        locator = Locator.parse(uri)
        self._entries[locator.uri] = (display_name, data)
        return locator

    def query_display_name(self, locator: Locator) -> Optional[str]:
        entry = self._entries.get(locator.uri)
        return entry[0] if entry else None

    def open_input_stream(self, locator: Locator) -> Optional[BinaryIO]:
        entry = self._entries.get(locator.uri)
        if entry is None:
            return None
        return io.BytesIO(entry[1])


class DirectoryContentProvider:
    """
    Provider mapping content://<authority>/<path> to <root>/<authority>/<path>.

    The display name is the file name. Locators that resolve outside
    the root are treated as unknown.
    """

    def __init__(self, root: Path):
        self.root = Path(root).resolve()

    def _resolve(self, locator: Locator) -> Optional[Path]:
        relative = f"{locator.authority}/{locator.path.lstrip('/')}"
        try:
            candidate = (self.root / relative).resolve()
        except (OSError, ValueError) as e:
            # e.g. embedded null byte
            logger.warning(f"Unusable content locator {locator}: {e}")
            return None
        if self.root not in candidate.parents:
            logger.warning(f"Content locator escapes provider root: {locator}")
            return None
        try:
            is_file = candidate.is_file()
        except (OSError, ValueError):
            return None
        if not is_file:
            return None
        return candidate

    def query_display_name(self, locator: Locator) -> Optional[str]:
        path = self._resolve(locator)
        return path.name if path else None

    def open_input_stream(self, locator: Locator) -> Optional[BinaryIO]:
        path = self._resolve(locator)
        if path is None:
            return None
        return path.open("rb")
