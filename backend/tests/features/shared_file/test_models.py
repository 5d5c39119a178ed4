"""
Tests for shared file models.
"""

from ezmap_bridge.features.shared_file import Locator


class TestLocator:
    """Tests for Locator parsing."""

    def test_file_uri(self):
        """file:// URI keeps scheme and decoded path."""
        locator = Locator.parse("file:///storage/emulated/0/My%20Tracks/route.gpx")
        assert locator.scheme == "file"
        assert locator.path == "/storage/emulated/0/My Tracks/route.gpx"

    def test_bare_path_is_file_locator(self):
        """Plain paths become file locators with the same path."""
        locator = Locator.parse("/storage/emulated/0/Download/route 2.gpx")
        assert locator.scheme == "file"
        assert locator.path == "/storage/emulated/0/Download/route 2.gpx"

    def test_content_uri(self):
        """content:// URI exposes authority and path."""
        locator = Locator.parse("content://com.example.files/tracks/7")
        assert locator.scheme == "content"
        assert locator.authority == "com.example.files"
        assert locator.path == "/tracks/7"
        assert str(locator) == "content://com.example.files/tracks/7"

    def test_colon_in_bare_path(self):
        """A ":" in a file name does not turn a bare path into a URI."""
        path = "/storage/emulated/0/Download/run 10:30.gpx"
        locator = Locator.parse(path)
        assert locator.scheme == "file"
        assert locator.path == path

    def test_invalid_scheme_prefix(self):
        """Only RFC 3986 scheme names are treated as schemes."""
        locator = Locator.parse("my tracks:ridge.gpx")
        assert locator.scheme == "file"
        assert locator.path == "my tracks:ridge.gpx"

    def test_scheme_is_lowercased(self):
        """Schemes compare case-insensitively."""
        assert Locator.parse("FILE:///a.gpx").scheme == "file"

    def test_path_extension(self):
        """Extension of the last path component, without the dot."""
        assert Locator.parse("https://example.com/a/b.gpx").path_extension == "gpx"
        assert Locator.parse("https://example.com/a/b.GPX").path_extension == "GPX"
        assert Locator.parse("https://example.com/a.gpx/b").path_extension == ""
        assert Locator.parse("file:///tmp/.gpx").path_extension == ""
