"""Handler argument resolution.

Route handlers are plain callables with whatever signature suits them.
Arguments are resolved by parameter name, in priority order:

1. Path parameters — ``/users/:id`` supplies ``id``
2. ``params`` — the full params dict
3. ``uri``, ``location``, ``navigate``, ``match`` — the route context

Path parameters may not reuse a context name; ``validate_pattern``
rejects such patterns. A handler with ``**kwargs`` receives everything;
the splat capture is only reachable through ``params["*"]`` (or its
name, for ``rest*``).
"""

import inspect
from collections.abc import Callable
from typing import Any

from trailhead.routing.segments import SPLAT_KEY


def build_context(
    params: dict[str, str],
    *,
    uri: str,
    location: Any,
    navigate: Callable[..., Any],
    match: Any,
) -> dict[str, Any]:
    """Assemble every value a handler may ask for."""
    available: dict[str, Any] = {k: v for k, v in params.items() if k != SPLAT_KEY}
    available.update(
        params=params,
        uri=uri,
        location=location,
        navigate=navigate,
        match=match,
    )
    return available


def resolve_kwargs(handler: Callable[..., Any], available: dict[str, Any]) -> dict[str, Any]:
    """Pick the keyword arguments *handler* accepts from *available*.

    Parameters with no available value are left to their defaults.
    """
    try:
        sig = inspect.signature(handler)
    except (TypeError, ValueError):
        # Builtins and some C callables have no introspectable signature
        return dict(available)

    params = sig.parameters.values()
    if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params):
        return dict(available)

    kwargs: dict[str, Any] = {}
    for name, param in sig.parameters.items():
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.POSITIONAL_ONLY):
            continue
        if name in available:
            kwargs[name] = available[name]
    return kwargs


def invoke(handler: Callable[..., Any], available: dict[str, Any]) -> Any:
    """Call *handler* with the arguments its signature asks for."""
    return handler(**resolve_kwargs(handler, available))
