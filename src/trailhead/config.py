"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(not_found="Nothing here", deferred_updates=False)
    """

    # Routing
    basepath: str = "/"
    not_found: str = "Not Found"

    # History propagation
    deferred_updates: bool = True  # Route upstream changes through the idle queue
    idle_checkpoint: bool = True  # Yield to the event loop between deferred callbacks

    # Logging
    log_navigation: bool = False  # Log every navigate() call at INFO
