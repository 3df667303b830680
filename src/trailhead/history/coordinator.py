"""History coordinator — one upstream subscription, many observers.

The coordinator is the single source of truth for "current location".
However many routers and links observe it, at most one listener is ever
installed on the underlying location store:

- the first ``subscribe()`` installs it (tearing down any stale one first)
- the last unsubscribe removes it

Upstream changes are queued on an ``IdleScheduler`` and committed in
order. Each commit replaces ``location``, notifies observers, then fires
the transition-complete hooks. Hooks never run before the new state is visible.

Usage::

    history = HistoryCoordinator(store)

    async with history:
        unsubscribe = history.subscribe(lambda loc: print(loc.pathname))
        await history.navigate("/users/42")
        unsubscribe()
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING, Any

import anyio

from trailhead.config import RouterConfig
from trailhead.history.handle import NavigationHandle
from trailhead.history.location import Location
from trailhead.history.scheduler import IdleScheduler
from trailhead.history.store import LocationStore, Unsubscribe, acknowledge_transition

if TYPE_CHECKING:
    from anyio.abc import TaskGroup

logger = logging.getLogger("trailhead.history")

type Observer = Callable[[Location], None]


def _keep_alive(_: Location) -> None:
    return None


class HistoryCoordinator:
    """Presents one ``(location, navigate)`` pair backed by a single store listener.

    Free-threading safety:
        - Observer registry and upstream handle are guarded by a Lock
        - Location values are immutable; commits swap the reference
    """

    __slots__ = (
        "_config",
        "_ids",
        "_keepalive",
        "_location",
        "_lock",
        "_observers",
        "_scheduler",
        "_store",
        "_task_group",
        "_transition_hooks",
        "_unlisten",
    )

    def __init__(
        self,
        store: LocationStore,
        *,
        config: RouterConfig | None = None,
        scheduler: IdleScheduler | None = None,
    ) -> None:
        self._store = store
        self._config = config or RouterConfig()
        self._scheduler = scheduler or IdleScheduler(checkpoint=self._config.idle_checkpoint)
        self._location = store.location
        self._observers: dict[int, Observer] = {}
        self._ids = itertools.count()
        self._transition_hooks: dict[int, Callable[[Location], None]] = {}
        self._unlisten: Unsubscribe | None = None
        self._keepalive: Unsubscribe | None = None
        self._task_group: TaskGroup | None = None
        self._lock = threading.Lock()

    # -- State --

    @property
    def location(self) -> Location:
        """The last committed location.

        While nobody observes the store there is nothing to commit, so the
        store's own location is read through.
        """
        if self._unlisten is None:
            return self._store.location
        return self._location

    @property
    def store(self) -> LocationStore:
        return self._store

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def scheduler(self) -> IdleScheduler:
        return self._scheduler

    @property
    def listening(self) -> bool:
        """True while the upstream listener is installed."""
        return self._unlisten is not None

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    # -- Observers --

    def subscribe(self, observer: Observer) -> Unsubscribe:
        """Register *observer* for committed location changes.

        Returns an idempotent unsubscribe callable.
        """
        observer_id = next(self._ids)
        with self._lock:
            self._observers[observer_id] = observer
            first = len(self._observers) == 1
            if first:
                self._attach()

        def unsubscribe() -> None:
            with self._lock:
                removed = self._observers.pop(observer_id, None) is not None
                if removed and not self._observers:
                    self._detach()

        return unsubscribe

    def on_transition_complete(self, hook: Callable[[Location], None]) -> Unsubscribe:
        """Register *hook* to run after every committed location change.

        Hooks see the new location already applied (focus management,
        scroll restoration and the like).
        """
        hook_id = next(self._ids)
        self._transition_hooks[hook_id] = hook

        def remove() -> None:
            self._transition_hooks.pop(hook_id, None)

        return remove

    def _attach(self) -> None:
        # A stale handle means setup ran twice without teardown; drop it
        # before installing the new listener.
        self._detach()
        self._location = self._store.location
        self._unlisten = self._store.listen(self._on_upstream)
        logger.debug("Subscribed to location store %r", self._store)

    def _detach(self) -> None:
        unlisten, self._unlisten = self._unlisten, None
        if unlisten is not None:
            unlisten()
            logger.debug("Unsubscribed from location store %r", self._store)

    # -- Propagation --

    def _on_upstream(self, location: Location) -> None:
        if self._config.deferred_updates:
            self._scheduler.defer(partial(self._commit, location))
        else:
            self._commit(location)

    def _commit(self, location: Location) -> None:
        if location is self._location:
            logger.debug("Dropping duplicate location %s", location.href)
            acknowledge_transition(self._store)
            return

        self._location = location
        with self._lock:
            observers = list(self._observers.values())
        for observer in observers:
            try:
                observer(location)
            except Exception:
                logger.exception("Location observer %r failed on %s", observer, location.href)

        acknowledge_transition(self._store)
        for hook in list(self._transition_hooks.values()):
            try:
                hook(location)
            except Exception:
                logger.exception("Transition hook %r failed on %s", hook, location.href)

    def flush(self) -> int:
        """Commit every queued upstream change now. Returns how many ran."""
        return self._scheduler.flush()

    # -- Navigation --

    def navigate(self, to: str, *, state: Any = None, replace: bool = False) -> NavigationHandle:
        """Push (or replace) *to* on the store and return a handle for it.

        A store that rejects synchronously yields an already-failed handle;
        failures are never raised from here.
        """
        if self._config.log_navigation:
            logger.info("%s %s", "replace" if replace else "push", to)

        try:
            completion = self._store.navigate(to, state=state, replace=replace)
        except Exception as exc:
            logger.debug("Location store rejected %r: %s", to, exc)
            return NavigationHandle.failed(to, exc)

        handle = NavigationHandle(to, completion)
        if self._task_group is not None:
            self._task_group.start_soon(handle.drive)
        return handle

    # -- Runtime --

    async def __aenter__(self) -> HistoryCoordinator:
        """Start the drain loop and keep the upstream listener alive."""
        task_group = anyio.create_task_group()
        await task_group.__aenter__()
        task_group.start_soon(self._scheduler.run)
        self._task_group = task_group
        self._keepalive = self.subscribe(_keep_alive)
        return self

    async def __aexit__(self, *exc_info: Any) -> bool | None:
        keepalive, self._keepalive = self._keepalive, None
        if keepalive is not None:
            keepalive()

        task_group, self._task_group = self._task_group, None
        if task_group is None:
            return None
        task_group.cancel_scope.cancel()
        return await task_group.__aexit__(*exc_info)

    def __repr__(self) -> str:
        state = "listening" if self.listening else "idle"
        return f"<HistoryCoordinator {self.location.href} {state} observers={self.observer_count}>"
