"""
Shared file service.

Runs the pipeline Inspector -> Materializer -> Relay and answers the
method channel. One instance per application session.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Optional

from ezmap_bridge.shared.constants import GET_INITIAL_SHARED_FILE
from .exceptions import MethodNotImplemented
from .inspector import inspect, is_relevant_path
from .materializer import ResourceMaterializer
from .models import EventPayload, IncomingFileEvent, SourceKind
from .providers import ContentProvider
from .relay import ChannelRelay, EventSink, RelayState

logger = logging.getLogger(__name__)


# Marks "launch payload not resolved yet" (None is a valid answer)
_UNRESOLVED = object()


class SharedFileService:
    """
    Service for relaying incoming files to the application layer.

    Handles:
    - Launch and runtime events from the platform host
    - The "getInitialSharedFile" method call (pull)
    - Stream listener attach/detach (push)

    Usage:
        service = SharedFileService(cache_dir=settings.cache_dir)
        service.on_launch(ViewPayload(data=Locator.parse(path)))
        service.handle_method_call("getInitialSharedFile")
    """

    def __init__(
        self,
        cache_dir: Path,
        provider: Optional[ContentProvider] = None,
        relay_launch_to_stream: bool = True,
        state: Optional[RelayState] = None,
    ):
        self.materializer = ResourceMaterializer(cache_dir, provider)
        self.relay = ChannelRelay(state)
        self.relay_launch_to_stream = relay_launch_to_stream

        self._launch_payload: Optional[EventPayload] = None
        self._launch_path: Any = _UNRESOLVED
        self._launch_lock = threading.Lock()

    # =========================================================================
    # Platform events
    # =========================================================================

    def on_launch(self, payload: Optional[EventPayload]) -> Optional[str]:
        """
        Record the event the app was launched with.

        The pull surface answers from this payload. Unless disabled, it
        is also pushed through the pipeline like a runtime event.
        """
        if payload is None or not self.relay_launch_to_stream:
            self._set_launch_payload(payload)
            return None
        path = self.resolve(payload)
        self._set_launch_payload(payload, path)
        return self._publish(path)

    def on_new_intent(self, payload: Optional[EventPayload]) -> Optional[str]:
        """
        Runtime event on a running app.

        It replaces the launch payload, the way a reused activity's
        current intent does.
        """
        if payload is None:
            self._set_launch_payload(None)
            return None
        path = self.resolve(payload)
        self._set_launch_payload(payload, path)
        return self._publish(path)

    def on_incoming_event(self, payload: EventPayload) -> Optional[str]:
        """
        Inspect, resolve and relay one event.

        Returns:
            Path that was delivered or stored as pending, None otherwise
        """
        return self._publish(self.resolve(payload))

    def _publish(self, path: Optional[str]) -> Optional[str]:
        if path is None:
            return None
        self.relay.publish(path)
        return path

    def resolve(self, payload: EventPayload) -> Optional[str]:
        """Path for a relevant payload, or None. Does not touch the relay."""
        event = inspect(payload)
        if event is None:
            return None

        path = self._resolve_event(event)
        if path is None:
            return None

        if not is_relevant_path(event, path):
            logger.debug(f"Ignoring resolved path without .gpx suffix: {path}")
            return None
        return path

    def _resolve_event(self, event: IncomingFileEvent) -> Optional[str]:
        # URL events carry the path as-is; copying is the application's job
        if event.source_kind == SourceKind.OPEN_URL:
            return event.locator.path or None
        return self.materializer.materialize(event.locator)

    # =========================================================================
    # Method channel (pull)
    # =========================================================================

    def get_initial_shared_file(self) -> Optional[str]:
        """
        Path of the latest known launch event, or None.

        Resolved once per launch payload, so repeated calls return the
        same snapshot.
        """
        with self._launch_lock:
            if self._launch_path is _UNRESOLVED:
                payload = self._launch_payload
                self._launch_path = self.resolve(payload) if payload is not None else None
            return self._launch_path

    def handle_method_call(self, method: str, arguments: Any = None) -> Optional[str]:
        """
        Dispatch a call on the method channel.

        Raises:
            MethodNotImplemented: Unknown method
        """
        if method == GET_INITIAL_SHARED_FILE:
            return self.get_initial_shared_file()
        raise MethodNotImplemented(method)

    def _set_launch_payload(self, payload: Optional[EventPayload], path: Any = _UNRESOLVED) -> None:
        with self._launch_lock:
            self._launch_payload = payload
            self._launch_path = path

    # =========================================================================
    # Event stream (push)
    # =========================================================================

    def attach_listener(self, sink: EventSink) -> None:
        self.relay.attach(sink)

    def detach_listener(self, sink: Optional[EventSink] = None) -> None:
        self.relay.detach(sink)

    def hold_undelivered(self, path: str) -> None:
        """Return a path a closed listener never received to the relay."""
        self.relay.hold(path)
