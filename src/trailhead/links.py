"""Link state and click handling.

The core never renders anything. It computes what a link-rendering
layer needs (``href``, ``is_current``, ``is_partially_current``,
``navigating``) and decides whether a click should become a client-side
navigation.

Usage::

    link = LinkNav("settings", history=history)
    props = link.state()            # LinkState(href="/users/42/settings", ...)
    link.click(ClickEvent())        # navigates; props.navigating is True until settled
    link.unmount()                  # cancels the in-flight navigation's callbacks
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from trailhead.context import current_match, get_history
from trailhead.routing.resolve import resolve, starts_with

if TYPE_CHECKING:
    from trailhead.history.coordinator import HistoryCoordinator
    from trailhead.history.handle import NavigationHandle
    from trailhead.history.location import Location

logger = logging.getLogger("trailhead.links")


@dataclass(slots=True)
class ClickEvent:
    """The parts of a pointer click that decide whether to navigate."""

    button: int = 0
    default_prevented: bool = False
    meta_key: bool = False
    alt_key: bool = False
    ctrl_key: bool = False
    shift_key: bool = False

    @property
    def has_modifier(self) -> bool:
        return self.meta_key or self.alt_key or self.ctrl_key or self.shift_key

    def prevent_default(self) -> None:
        self.default_prevented = True


def should_navigate(event: ClickEvent) -> bool:
    """Return whether a click should become a client-side navigation.

    Primary button only, no modifier keys, and nobody called
    ``prevent_default()`` yet — so "open in new tab" gestures still work.
    """
    return not event.default_prevented and event.button == 0 and not event.has_modifier


@dataclass(frozen=True, slots=True)
class LinkState:
    """What the rendering layer needs to draw a link."""

    href: str
    is_current: bool
    is_partially_current: bool
    navigating: bool = False

    @property
    def aria_current(self) -> str | None:
        return "page" if self.is_current else None


def link_state(to: str, location: Location, base_uri: str, navigating: bool = False) -> LinkState:
    """Compute a link's state relative to *location*."""
    href = resolve(to, base_uri)
    return LinkState(
        href=href,
        is_current=location.pathname == href,
        is_partially_current=starts_with(location.pathname, href),
        navigating=navigating,
    )


class Link:
    """A link resolved against the enclosing match.

    The base uri is captured at construction, the way a link rendered
    inside a matched route sees that route's uri.
    """

    __slots__ = ("_history", "base_uri", "on_click", "replace", "state_value", "to")

    def __init__(
        self,
        to: str,
        *,
        state: Any = None,
        replace: bool = False,
        on_click: Callable[[ClickEvent], None] | None = None,
        history: HistoryCoordinator | None = None,
        base_uri: str | None = None,
    ) -> None:
        self.to = to
        self.state_value = state
        self.replace = replace
        self.on_click = on_click
        self.base_uri = base_uri if base_uri is not None else current_match().uri
        self._history = history

    @property
    def history(self) -> HistoryCoordinator:
        return self._history if self._history is not None else get_history()

    @property
    def href(self) -> str:
        return resolve(self.to, self.base_uri)

    def state(self) -> LinkState:
        return link_state(self.to, self.history.location, self.base_uri)

    def click(self, event: ClickEvent) -> NavigationHandle | None:
        """Handle a click. Returns the navigation handle if it navigated."""
        if self.on_click is not None:
            self.on_click(event)
        if not should_navigate(event):
            return None
        event.prevent_default()
        return self.history.navigate(self.href, state=self.state_value, replace=self.replace)


def _no_props(state: LinkState) -> dict[str, Any]:
    return {}


class LinkNav(Link):
    """A link that reports ``navigating`` while its navigation is in flight.

    ``unmount()`` cancels the in-flight handle so a late completion never
    touches a link that is gone.
    """

    __slots__ = ("_handle", "get_props", "navigating")

    def __init__(
        self,
        to: str,
        *,
        get_props: Callable[[LinkState], dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(to, **kwargs)
        self.get_props = get_props or _no_props
        self.navigating = False
        self._handle: NavigationHandle | None = None

    def state(self) -> LinkState:
        return link_state(self.to, self.history.location, self.base_uri, self.navigating)

    def props(self) -> dict[str, Any]:
        """Rendering props: ``href``, ``aria-current`` and whatever ``get_props`` adds."""
        state = self.state()
        props: dict[str, Any] = {"aria-current": state.aria_current}
        props.update(self.get_props(state))
        props["href"] = state.href
        return props

    def click(self, event: ClickEvent) -> NavigationHandle | None:
        handle = super().click(event)
        if handle is None:
            return None

        self.navigating = True
        handle.add_done_callback(self._stop)
        handle.add_error_callback(self._failed)
        self._handle = handle
        return handle

    def unmount(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()

    def _stop(self, _handle: NavigationHandle) -> None:
        self.navigating = False

    def _failed(self, error: BaseException) -> None:
        logger.debug("Link navigation to %r failed: %s", self.href, error)
        self.navigating = False
