"""Tests for trailhead.errors — exception hierarchy and error messages."""

from trailhead.errors import (
    ConfigurationError,
    NavigationCancelled,
    NavigationError,
    TrailheadError,
    UpstreamFailure,
)
from trailhead.redirect import RedirectRequest


class TestHierarchy:
    def test_configuration_error_is_trailhead_error(self) -> None:
        assert issubclass(ConfigurationError, TrailheadError)

    def test_navigation_errors(self) -> None:
        assert issubclass(NavigationError, TrailheadError)
        assert issubclass(UpstreamFailure, NavigationError)
        assert issubclass(NavigationCancelled, NavigationError)

    def test_redirect_is_outside_hierarchy(self) -> None:
        assert not issubclass(RedirectRequest, TrailheadError)


class TestMessages:
    def test_upstream_failure(self) -> None:
        original = OSError("disk full")
        err = UpstreamFailure("/a", original)
        assert err.uri == "/a"
        assert err.original is original
        assert str(err) == "Navigation to '/a' failed: disk full"

    def test_cancelled(self) -> None:
        err = NavigationCancelled("/a")
        assert err.uri == "/a"
        assert str(err) == "Navigation to '/a' was cancelled"
