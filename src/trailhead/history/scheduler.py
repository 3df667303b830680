"""Low-priority callback queue for location propagation.

Upstream location changes are not delivered synchronously. They are
queued here and run after the current synchronous turn, so a burst of
navigations cannot starve interactive work.

The queue is a single anyio memory object stream, which keeps callbacks
strictly FIFO no matter who drains it:

- ``flush()`` drains synchronously (tests, sync integrations)
- ``run()`` drains as a task, checkpointing between callbacks
"""

import logging
import math
from collections.abc import Callable

import anyio
import anyio.lowlevel

logger = logging.getLogger("trailhead.history")

type Callback = Callable[[], None]


class IdleScheduler:
    """FIFO queue of deferred callbacks.

    Usage::

        scheduler = IdleScheduler()
        scheduler.defer(lambda: print("later"))
        scheduler.flush()  # prints "later"

        # or, inside an event loop
        async with anyio.create_task_group() as tg:
            tg.start_soon(scheduler.run)
    """

    __slots__ = ("_checkpoint", "_receive", "_send")

    def __init__(self, *, checkpoint: bool = True) -> None:
        self._checkpoint = checkpoint
        self._send, self._receive = anyio.create_memory_object_stream[Callback](math.inf)

    @property
    def pending(self) -> int:
        """Number of callbacks waiting to run."""
        return self._receive.statistics().current_buffer_used

    def defer(self, callback: Callback) -> None:
        """Queue *callback* to run after everything already queued."""
        self._send.send_nowait(callback)

    def flush(self) -> int:
        """Run every queued callback now, in order. Returns how many ran.

        Callbacks queued while flushing run in the same flush.
        """
        ran = 0
        while True:
            try:
                callback = self._receive.receive_nowait()
            except (anyio.WouldBlock, anyio.EndOfStream):
                return ran
            self._call(callback)
            ran += 1

    async def run(self) -> None:
        """Drain the queue forever. Start it in a task group; cancel to stop."""
        async for callback in self._receive:
            self._call(callback)
            if self._checkpoint:
                await anyio.lowlevel.checkpoint()

    def close(self) -> None:
        """Stop accepting callbacks. ``run()`` returns once the queue is empty."""
        self._send.close()

    @staticmethod
    def _call(callback: Callback) -> None:
        try:
            callback()
        except Exception:
            logger.exception("Deferred callback %r failed", callback)
