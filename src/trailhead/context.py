"""Router context via ContextVar.

Provides:
- ``history_var``: The active ``HistoryCoordinator`` for this task/thread.
- ``match_var``: The enclosing ``RouteMatch`` — what nested routers and
  relative links resolve against.

``provide_history()`` installs a coordinator for a block of code, the
way a provider component would for a subtree. ``bind_match()`` is used
by the router while a matched handler runs.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading (3.14t). No locks needed.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

from trailhead.routing.route import ROOT_MATCH, RouteMatch

if TYPE_CHECKING:
    from trailhead.history.coordinator import HistoryCoordinator

# -- History context --

history_var: ContextVar[HistoryCoordinator] = ContextVar("trailhead_history")
"""The active history coordinator. Set by ``provide_history()``."""


def get_history() -> HistoryCoordinator:
    """Return the active history coordinator.

    Raises ``LookupError`` if called outside ``provide_history()``.
    """
    return history_var.get()


@contextmanager
def provide_history(history: HistoryCoordinator) -> Iterator[HistoryCoordinator]:
    """Make *history* the active coordinator inside the block::

        with provide_history(HistoryCoordinator(store)):
            app.render()
    """
    token = history_var.set(history)
    try:
        yield history
    finally:
        history_var.reset(token)


# -- Match context --

match_var: ContextVar[RouteMatch] = ContextVar("trailhead_match", default=ROOT_MATCH)
"""The enclosing route match. Outside any router this is the root match."""


def current_match() -> RouteMatch:
    """Return the enclosing route match."""
    return match_var.get()


@contextmanager
def bind_match(match: RouteMatch) -> Iterator[RouteMatch]:
    """Make *match* the enclosing match inside the block."""
    token = match_var.set(match)
    try:
        yield match
    finally:
        match_var.reset(token)
