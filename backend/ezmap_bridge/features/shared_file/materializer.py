"""
Resource Materializer

Turns a locator into a local filesystem path.

- file://    -> the path component, no copy
- content:// -> copy into <cache_dir>/<display name>
- anything else -> no result

Copies overwrite an earlier copy with the same display name.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from ezmap_bridge.shared.constants import LocatorScheme
from .exceptions import (
    ResourceMetadataUnavailable,
    IOFailureDuringCopy,
)
from .models import Locator
from .providers import ContentProvider

logger = logging.getLogger(__name__)


class ResourceMaterializer:
    """
    Resolves locators to paths, copying provider content into the cache.

    Usage:
        materializer = ResourceMaterializer(cache_dir, provider)
        path = materializer.materialize(Locator.parse("content://..."))
    """

    def __init__(self, cache_dir: Path, provider: Optional[ContentProvider] = None):
        self.cache_dir = Path(cache_dir)
        self.provider = provider

    def materialize(self, locator: Locator) -> Optional[str]:
        """
        Resolve a locator to a local path.

        Failures are logged and reported as None; they never propagate.
        """
        try:
            return self.resolve(locator)
        except ResourceMetadataUnavailable as e:
            logger.warning(f"No display name for content locator: {e}")
        except IOFailureDuringCopy as e:
            logger.error(f"Error reading content locator: {e}")
        return None

    def resolve(self, locator: Locator) -> Optional[str]:
        """
        Strict variant of materialize().

        Returns:
            Local path, or None for schemes that cannot be resolved

        Raises:
            ResourceMetadataUnavailable: Provider has no display name
            IOFailureDuringCopy: Stream could not be opened or copied
        """
        if locator.scheme == LocatorScheme.FILE.value:
            return locator.path
        if locator.scheme == LocatorScheme.CONTENT.value:
            return self._copy_content(locator)
        logger.debug(f"Unsupported locator scheme: {locator.scheme}")
        return None

    def _copy_content(self, locator: Locator) -> str:
        if self.provider is None:
            raise ResourceMetadataUnavailable(f"{locator} (no content provider configured)")

        try:
            display_name = self.provider.query_display_name(locator)
        except (OSError, ValueError) as e:
            raise IOFailureDuringCopy(f"{locator}: {e}") from e

        file_name = _safe_file_name(display_name)
        if not file_name:
            raise ResourceMetadataUnavailable(str(locator))

        destination = self.cache_dir / file_name
        try:
            source = self.provider.open_input_stream(locator)
            if source is None:
                raise IOFailureDuringCopy(f"{locator}: provider returned no stream")
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with source, destination.open("wb") as output:
                shutil.copyfileobj(source, output)
        except (OSError, ValueError) as e:
            raise IOFailureDuringCopy(f"{locator}: {e}") from e

        logger.info(f"Copied {locator} to {destination}")
        return str(destination.absolute())


def _safe_file_name(display_name: Optional[str]) -> Optional[str]:
    """Last path component of a display name, so copies stay in the cache."""
    if not display_name:
        return None
    name = display_name.replace("\\", "/").rsplit("/", 1)[-1]
    if name in ("", ".", ".."):
        return None
    return name
