"""Trailhead exception hierarchy.

Shared across the matcher, the history coordinator, and link helpers so
every module raises and catches the same types.

``RedirectRequest`` is deliberately *not* part of this hierarchy: it is
a control-flow signal, see ``trailhead.redirect``.
"""


class TrailheadError(Exception):
    """Base for all trailhead-specific errors."""


class ConfigurationError(TrailheadError):
    """Raised when a route pattern or router configuration is invalid.

    Typically raised while building the route table, never while matching.
    """


class NavigationError(TrailheadError):
    """Base for failures surfaced through a ``NavigationHandle``."""


class UpstreamFailure(NavigationError):
    """The location store rejected a navigation.

    The store's own exception is kept in ``original`` and chained as
    ``__cause__``.
    """

    def __init__(self, uri: str, original: BaseException) -> None:
        super().__init__(f"Navigation to {uri!r} failed: {original}")
        self.uri = uri
        self.original = original


class NavigationCancelled(NavigationError):  # noqa: N818
    """Raised when awaiting a handle that was cancelled before it settled."""

    def __init__(self, uri: str) -> None:
        super().__init__(f"Navigation to {uri!r} was cancelled")
        self.uri = uri
