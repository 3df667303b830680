"""Cancellable navigation handles.

A NavigationHandle wraps the awaitable a location store returns from
``navigate()``. Cancelling the handle does not abort the store-level
transition (it may already be committed); it only guarantees that this
handle's callbacks never fire afterwards.

Usage::

    handle = history.navigate("/users/42")
    handle.add_done_callback(lambda h: set_busy(False))

    # later, e.g. when the owner goes away
    handle.cancel()
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Generator
from typing import Any

import anyio

from trailhead.errors import NavigationCancelled, UpstreamFailure

logger = logging.getLogger("trailhead.history")

type DoneCallback = Callable[[NavigationHandle], None]
type ErrorCallback = Callable[[UpstreamFailure], None]


class NavigationHandle:
    """A cancellable, awaitable token for one in-flight navigation.

    The handle is driven either by the coordinator's task group or by
    whoever awaits it first. Either way the store's awaitable is awaited
    exactly once.
    """

    __slots__ = (
        "_cancelled",
        "_completion",
        "_done_callbacks",
        "_error",
        "_error_callbacks",
        "_event",
        "_settled",
        "_started",
        "uri",
    )

    def __init__(self, uri: str, completion: Awaitable[Any] | None = None) -> None:
        self.uri = uri
        self._completion = completion
        self._cancelled = False
        self._settled = False
        self._started = False
        self._error: UpstreamFailure | None = None
        self._event: anyio.Event | None = None
        self._done_callbacks: list[DoneCallback] = []
        self._error_callbacks: list[ErrorCallback] = []

    @classmethod
    def failed(cls, uri: str, error: BaseException) -> NavigationHandle:
        """Create a handle that has already settled with an upstream failure."""
        handle = cls(uri)
        handle._started = True
        handle._settle(_wrap(uri, error))
        return handle

    # -- State --

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        """True once the navigation settled or the handle was cancelled."""
        return self._settled or self._cancelled

    def exception(self) -> UpstreamFailure | None:
        """Return the upstream failure, if the navigation settled with one."""
        return self._error

    # -- Callbacks --

    def add_done_callback(self, callback: DoneCallback) -> None:
        """Call *callback(handle)* when the navigation completes successfully.

        Runs immediately if the handle already completed. Never runs for
        a cancelled handle.
        """
        if self._cancelled:
            return
        if self._settled:
            if self._error is None:
                callback(self)
            return
        self._done_callbacks.append(callback)

    def add_error_callback(self, callback: ErrorCallback) -> None:
        """Call *callback(error)* if the store rejects the navigation."""
        if self._cancelled:
            return
        if self._settled:
            if self._error is not None:
                callback(self._error)
            return
        self._error_callbacks.append(callback)

    def cancel(self) -> bool:
        """Suppress every pending callback of this handle.

        Returns ``False`` (and does nothing) if the handle already
        settled or was already cancelled.
        """
        if self._settled or self._cancelled:
            return False
        self._cancelled = True
        self._done_callbacks.clear()
        self._error_callbacks.clear()
        if self._event is not None:
            self._event.set()
        return True

    # -- Driving --

    async def drive(self) -> None:
        """Await the store's completion once and settle the handle.

        If the driving task is cancelled before the store answers, the
        handle stays pending and the next awaiter drives it again. A
        completion that cannot be awaited twice (a bare coroutine) settles
        as an ``UpstreamFailure`` wrapping ``NavigationCancelled`` instead.
        """
        while not (self._settled or self._cancelled):
            if self._started:
                event = self._event
                assert event is not None
                await event.wait()
                continue

            self._started = True
            self._event = event = anyio.Event()
            try:
                if self._completion is not None:
                    await self._completion
            except Exception as exc:
                self._settle(_wrap(self.uri, exc))
            except BaseException:
                if inspect.iscoroutine(self._completion):
                    self._settle(_wrap(self.uri, NavigationCancelled(self.uri)))
                else:
                    self._started = False
                raise
            else:
                self._settle(None)
            finally:
                event.set()

    async def wait(self) -> None:
        """Wait for the navigation to settle.

        Raises ``UpstreamFailure`` if the store rejected the navigation and
        ``NavigationCancelled`` if the handle was cancelled first.
        """
        if not self._cancelled:
            await self.drive()
        if self._cancelled:
            raise NavigationCancelled(self.uri)
        if self._error is not None:
            raise self._error

    def __await__(self) -> Generator[Any, None, None]:
        return self.wait().__await__()

    def _settle(self, error: UpstreamFailure | None) -> None:
        if self._settled:
            return
        self._settled = True
        if self._cancelled:
            if error is not None:
                logger.debug("Dropping failure of cancelled navigation to %r: %s", self.uri, error)
            return

        self._error = error
        done, self._done_callbacks = self._done_callbacks, []
        errored, self._error_callbacks = self._error_callbacks, []
        if error is None:
            for callback in done:
                _run_callback(callback, self)
        else:
            for callback in errored:
                _run_callback(callback, error)

    def __repr__(self) -> str:
        if self._cancelled:
            state = "cancelled"
        elif self._error is not None:
            state = "failed"
        elif self._settled:
            state = "done"
        else:
            state = "pending"
        return f"<NavigationHandle {self.uri!r} {state}>"


def _wrap(uri: str, error: BaseException) -> UpstreamFailure:
    if isinstance(error, UpstreamFailure):
        return error
    failure = UpstreamFailure(uri, error)
    failure.__cause__ = error
    return failure


def _run_callback(callback: Callable[[Any], None], arg: Any) -> None:
    try:
        callback(arg)
    except Exception:
        logger.exception("Navigation callback %r failed", callback)
