"""The Location Store contract.

The coordinator depends only on this shape, never on a concrete history
backend. ``trailhead.testing.MemoryLocationStore`` is an in-memory
implementation used by the test-suite.

No base class required. The coordinator checks the shape, not the lineage.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

from trailhead.history.location import Location

type Listener = Callable[[Location], None]
type Unsubscribe = Callable[[], None]


@runtime_checkable
class LocationStore(Protocol):
    """Protocol for an underlying push/replace/listen history primitive.

    ``navigate()`` returns an awaitable that settles once the store
    considers the transition complete. Stores that wait for their
    consumers to commit the new location expose ``transition_complete()``;
    the coordinator calls it after every committed change.
    """

    @property
    def location(self) -> Location: ...

    def listen(self, listener: Listener) -> Unsubscribe: ...

    def navigate(self, uri: str, *, state: Any = None, replace: bool = False) -> Awaitable[None]: ...


def acknowledge_transition(store: LocationStore) -> None:
    """Tell *store* its last transition was committed, if it wants to know."""
    hook = getattr(store, "transition_complete", None)
    if hook is not None:
        hook()
