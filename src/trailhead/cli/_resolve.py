"""Route table import resolution — resolves ``"module:attribute"`` strings.

Shared by ``trailhead routes`` and ``trailhead match``. The attribute may
be a ``{pattern: handler}`` mapping, a ``Router``, or a factory returning
either.
"""

import importlib
from collections.abc import Callable, Mapping
from typing import Any

from trailhead.routing.router import Router


def resolve_routes(import_string: str) -> dict[str, Callable[..., Any]]:
    """Resolve an import string to a ``{pattern: handler}`` mapping.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"routes"`` (e.g. ``"myapp"`` resolves to
    ``myapp.routes``).

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a mapping or Router.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "routes"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    # Support factory functions - call them if they're not already a table
    if callable(obj) and not isinstance(obj, (Router, Mapping)):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, Router):
        return obj.mapping
    if isinstance(obj, Mapping):
        return dict(obj)

    msg = f"{import_string!r} resolved to {type(obj).__name__}, not a route mapping or Router"
    raise TypeError(msg)
