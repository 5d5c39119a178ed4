"""
Tests for SharedFileService.

End-to-end pipeline: inspect -> materialize -> relay, plus the
getInitialSharedFile method call.
"""

import pytest

from ezmap_bridge.features.shared_file import (
    SharedFileService,
    InMemoryContentProvider,
    Locator,
    SendPayload,
    ViewPayload,
    OpenUrlPayload,
    OtherPayload,
    MethodNotImplemented,
)
from ezmap_bridge.shared.constants import GET_INITIAL_SHARED_FILE


GPX_BYTES = b'<?xml version="1.0"?><gpx version="1.1"/>'


class RecordingSink:
    def __init__(self):
        self.events = []

    def success(self, event):
        self.events.append(event)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def provider():
    return InMemoryContentProvider()


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def service(cache_dir, provider):
    return SharedFileService(cache_dir=cache_dir, provider=provider)


# =============================================================================
# Test Pull Surface
# =============================================================================

class TestInitialSharedFile:
    """getInitialSharedFile answers from the latest launch event."""

    def test_cold_start_view_intent(self, service):
        """Cold start with a view intent returns the exact path."""
        service.on_launch(ViewPayload(data=Locator.parse("/storage/emulated/0/Download/route.gpx")))

        result = service.handle_method_call(GET_INITIAL_SHARED_FILE)

        assert result == "/storage/emulated/0/Download/route.gpx"

    def test_no_launch_event(self, service):
        """Nothing launched, absent result."""
        assert service.get_initial_shared_file() is None

    def test_irrelevant_launch(self, service):
        """A plain launcher start has no shared file."""
        service.on_launch(OtherPayload(action="android.intent.action.MAIN"))
        assert service.get_initial_shared_file() is None

    def test_repeated_calls_same_snapshot(self, service, provider, cache_dir):
        """Repeated calls return the same value without copying again."""
        locator = provider.register("content://downloads/1", "launch.gpx", GPX_BYTES)
        service.on_launch(SendPayload(mime_type="application/gpx+xml", stream=locator))

        first = service.get_initial_shared_file()
        (cache_dir / "launch.gpx").unlink()
        second = service.get_initial_shared_file()

        assert first == second == str(cache_dir / "launch.gpx")

    def test_new_intent_replaces_launch(self, service):
        """A reused app answers with its latest intent."""
        service.on_launch(ViewPayload(data=Locator.parse("/sdcard/first.gpx")))
        service.on_new_intent(ViewPayload(data=Locator.parse("/sdcard/second.gpx")))

        assert service.get_initial_shared_file() == "/sdcard/second.gpx"

    def test_launch_without_stream_relay(self, cache_dir, provider):
        """With launch relaying disabled, the launch file is pull-only."""
        service = SharedFileService(cache_dir=cache_dir, provider=provider, relay_launch_to_stream=False)
        service.on_launch(ViewPayload(data=Locator.parse("/sdcard/route.gpx")))

        sink = RecordingSink()
        service.attach_listener(sink)

        assert sink.events == []
        assert service.get_initial_shared_file() == "/sdcard/route.gpx"

    def test_unknown_method(self, service):
        """Unknown methods are reported as not implemented."""
        with pytest.raises(MethodNotImplemented):
            service.handle_method_call("getLatestSharedFile")


# =============================================================================
# Test Push Surface
# =============================================================================

class TestIncomingEvents:
    """Runtime events flow to the event stream."""

    def test_runtime_send_pending_until_attach(self, service, provider, cache_dir):
        """Shared content is copied and delivered on the next attach."""
        locator = provider.register("content://com.example.files/9", "shared.gpx", GPX_BYTES)

        path = service.on_new_intent(SendPayload(mime_type="application/gpx+xml", stream=locator))

        assert path == str(cache_dir / "shared.gpx")
        sink = RecordingSink()
        service.attach_listener(sink)
        assert sink.events == [str(cache_dir / "shared.gpx")]
        assert (cache_dir / "shared.gpx").read_bytes() == GPX_BYTES

    def test_launch_also_pushed(self, service):
        """By default the launch file also reaches the first listener."""
        service.on_launch(ViewPayload(data=Locator.parse("/sdcard/route.gpx")))
        sink = RecordingSink()
        service.attach_listener(sink)
        assert sink.events == ["/sdcard/route.gpx"]

    def test_delivered_to_active_listener(self, service):
        """Attached listener receives events immediately."""
        sink = RecordingSink()
        service.attach_listener(sink)

        service.on_incoming_event(ViewPayload(data=Locator.parse("/sdcard/a.gpx")))
        service.on_incoming_event(ViewPayload(data=Locator.parse("/sdcard/b.gpx")))

        assert sink.events == ["/sdcard/a.gpx", "/sdcard/b.gpx"]

    def test_view_content_without_gpx_name(self, service, provider):
        """View of a content locator is dropped when the copy is not .gpx."""
        locator = provider.register("content://downloads/2", "photo.jpg", b"\xff\xd8")
        assert service.on_incoming_event(ViewPayload(data=locator)) is None
        assert service.relay.pending_path is None

    def test_view_content_with_gpx_name(self, service, provider, cache_dir):
        """View of a content locator named *.gpx is copied and relayed."""
        locator = provider.register("content://downloads/3", "trail.gpx", GPX_BYTES)
        assert service.on_incoming_event(ViewPayload(data=locator)) == str(cache_dir / "trail.gpx")

    def test_open_url_not_copied(self, service, cache_dir):
        """URL events relay the URL path as-is."""
        path = service.on_incoming_event(
            OpenUrlPayload(url=Locator.parse("file:///private/var/mobile/Inbox/hike.gpx"))
        )
        assert path == "/private/var/mobile/Inbox/hike.gpx"
        assert not cache_dir.exists()

    def test_materializer_failure_is_silent(self, service):
        """Unresolvable content is dropped without raising."""
        payload = SendPayload(mime_type="application/xml", stream=Locator.parse("content://downloads/404"))
        assert service.on_incoming_event(payload) is None
        assert service.relay.pending_path is None

    def test_view_path_with_colon(self, service):
        """A bare path with ":" in the file name is still relayed."""
        path = "/storage/emulated/0/Download/run 10:30.gpx"
        assert service.on_incoming_event(ViewPayload(data=Locator.parse(path))) == path

    def test_detach_keeps_pending(self, service):
        """Detach keeps anything not yet delivered."""
        sink = RecordingSink()
        service.attach_listener(sink)
        service.detach_listener()
        service.on_incoming_event(ViewPayload(data=Locator.parse("/sdcard/a.gpx")))

        assert sink.events == []
        assert service.relay.pending_path == "/sdcard/a.gpx"
