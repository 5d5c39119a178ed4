"""
Channel Relay

Push side of the bridge: one listener at a time, one pending slot.

States:
- NoListener: an incoming path is stored as pending (last write wins)
- ListenerActive: an incoming path is delivered immediately

Attaching a listener flushes the pending path. Detaching keeps it.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    """Receiving end of the event stream."""

    def success(self, event: str) -> None:
        ...


class CallbackSink:
    """EventSink wrapping a plain callable."""

    def __init__(self, callback: Callable[[str], None]):
        self._callback = callback

    def success(self, event: str) -> None:
        self._callback(event)


@dataclass
class RelayState:
    """Pending path and active listener of one application session."""
    pending_path: Optional[str] = None
    active_listener: Optional[EventSink] = None


class ChannelRelay:
    """
    Delivers paths to the stream listener or holds them as pending.

    Callbacks may arrive from several threads (the HTTP host runs sync
    handlers in a thread pool), so state changes happen under a lock.
    Deliveries are serialized by a second, reentrant lock: a flushed
    pending path always reaches a new listener before anything
    published after it.
    """

    def __init__(self, state: Optional[RelayState] = None):
        self.state = state or RelayState()
        self._lock = threading.Lock()
        self._delivery_lock = threading.RLock()

    @property
    def has_listener(self) -> bool:
        return self.state.active_listener is not None

    @property
    def pending_path(self) -> Optional[str]:
        return self.state.pending_path

    def attach(self, sink: EventSink) -> None:
        """Make `sink` the listener and flush the pending path to it."""
        with self._delivery_lock:
            with self._lock:
                if self.state.active_listener is not None:
                    logger.debug("Replacing active stream listener")
                self.state.active_listener = sink
                pending = self.state.pending_path
                self.state.pending_path = None

            if pending is not None:
                logger.info(f"Flushing pending shared file to new listener: {pending}")
                self._deliver(sink, pending)

    def detach(self, sink: Optional[EventSink] = None) -> None:
        """
        Drop the listener. A pending path stays for the next attach.

        If `sink` is given, only detach when it is still the active one,
        so a late cancel from a replaced listener is ignored.
        """
        with self._lock:
            if sink is not None and self.state.active_listener is not sink:
                return
            self.state.active_listener = None
        logger.debug("Stream listener detached")

    def publish(self, path: str) -> bool:
        """
        Deliver a path to the listener, or keep it as pending.

        Returns:
            True if delivered now, False if stored as pending
        """
        with self._delivery_lock:
            with self._lock:
                sink = self.state.active_listener
                if sink is None:
                    if self.state.pending_path is not None:
                        logger.debug(f"Overwriting pending shared file {self.state.pending_path}")
                    self.state.pending_path = path
                    logger.info(f"No stream listener, holding shared file: {path}")
                    return False

            return self._deliver(sink, path)

    def hold(self, path: str) -> bool:
        """
        Put back a path a detached listener never received.

        A newer pending path wins over it. If another listener is
        already attached, the path is delivered to it.

        Returns:
            True if delivered now, False otherwise
        """
        with self._delivery_lock:
            with self._lock:
                sink = self.state.active_listener
                if sink is None:
                    if self.state.pending_path is None:
                        self.state.pending_path = path
                        logger.info(f"Holding undelivered shared file: {path}")
                    return False

            return self._deliver(sink, path)

    def _deliver(self, sink: EventSink, path: str) -> bool:
        try:
            sink.success(path)
        except Exception as e:
            # Drop the listener; value goes back to pending unless a newer one is there
            logger.error(f"Stream listener failed, holding shared file {path}: {e}")
            with self._lock:
                if self.state.active_listener is sink:
                    self.state.active_listener = None
                if self.state.pending_path is None:
                    self.state.pending_path = path
            return False
        logger.info(f"Delivered shared file: {path}")
        return True
