"""Redirects as an out-of-band control signal.

``redirect_to()`` aborts whatever is rendering and asks the nearest
``RedirectBoundary`` to replace the current location::

    def dashboard(user=None):
        if user is None:
            redirect_to("/login")
        return render_dashboard(user)

    with RedirectBoundary(history):
        router.render()

``RedirectRequest`` derives from ``BaseException`` so that handler code
catching ``Exception`` never swallows it by accident. Anything that is
not a redirect passes through the boundary unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import TYPE_CHECKING, Any, NoReturn

from trailhead.context import get_history

if TYPE_CHECKING:
    from trailhead.history.coordinator import HistoryCoordinator

logger = logging.getLogger("trailhead.redirect")


class RedirectRequest(BaseException):  # noqa: N818
    """Raised by ``redirect_to()``. Carries only the destination."""

    def __init__(self, uri: str) -> None:
        super().__init__(uri)
        self.uri = uri
        self.handled = False


def is_redirect(obj: object) -> bool:
    """Return whether *obj* is a redirect signal."""
    return isinstance(obj, RedirectRequest)


def redirect_to(uri: str) -> NoReturn:
    """Abort the current render and redirect to *uri*. Never returns."""
    raise RedirectRequest(uri)


class RedirectBoundary:
    """Intercepts ``RedirectRequest`` and turns it into a replace-navigation.

    Works as a sync or async context manager, or via ``render()``. When
    no history is given, the active one from ``trailhead.context`` is
    looked up at interception time.
    """

    __slots__ = ("_history",)

    def __init__(self, history: HistoryCoordinator | None = None) -> None:
        self._history = history

    @property
    def history(self) -> HistoryCoordinator:
        return self._history if self._history is not None else get_history()

    def render(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Call *fn* inside the boundary. Returns ``None`` if it redirected."""
        with self:
            return fn(*args, **kwargs)
        return None

    def intercept(self, signal: RedirectRequest) -> None:
        """Navigate for *signal* unless another boundary already did."""
        if signal.handled:
            return
        signal.handled = True
        logger.debug("Redirecting to %s", signal.uri)
        self.history.navigate(signal.uri, replace=True)

    # -- Context manager protocol --

    def __enter__(self) -> RedirectBoundary:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if isinstance(exc, RedirectRequest):
            self.intercept(exc)
            return True
        return False

    async def __aenter__(self) -> RedirectBoundary:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if isinstance(exc, RedirectRequest):
            self.intercept(exc)
            return True

        # Redirects raised inside a task group arrive wrapped in a group.
        if isinstance(exc, BaseExceptionGroup):
            redirects, rest = exc.split(RedirectRequest)
            if redirects is None:
                return False
            first = _first_redirect(redirects)
            if first is not None:
                self.intercept(first)
            if rest is not None:
                raise rest
            return True

        return False


def _first_redirect(group: BaseExceptionGroup[Any]) -> RedirectRequest | None:
    for exc in group.exceptions:
        if isinstance(exc, RedirectRequest):
            return exc
        if isinstance(exc, BaseExceptionGroup):
            found = _first_redirect(exc)
            if found is not None:
                return found
    return None
