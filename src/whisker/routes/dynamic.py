"""Dynamic route resolution — turn the user's route configuration into a list.

The configured value may be a list of routes, a callable returning one, or a
callable returning an awaitable of one.  Configuration files can only name a
callable, so ``"module:attr"`` strings are loaded from the site root first::

    # whisker.yaml
    generate:
      routes: "routes:generate"       # <root>/routes.py, async def generate()
"""

from __future__ import annotations

import importlib.util
import inspect
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from whisker._errors import ConfigError, RouteResolutionError

if TYPE_CHECKING:
    from whisker._types import DynamicRouteItem


async def resolve_dynamic_routes(value: Any) -> list[DynamicRouteItem]:
    """Resolve *value* to a concrete list of dynamic route items.

    Callables are called and awaitables awaited until a list or tuple
    emerges.  ``None`` resolves to an empty list.

    Raises:
        RouteResolutionError: If the value resolves to anything but a
            sequence of routes.

    """
    while True:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return list(value)
        if inspect.isawaitable(value):
            value = await value
        elif callable(value):
            value = value()
        else:
            msg = (
                "generate routes must be a list, a callable or an awaitable, "
                f"got {type(value).__name__}"
            )
            raise RouteResolutionError(msg)


def load_routes_callable(spec: str, root: Path) -> Any:
    """Resolve a ``module:attr`` string to a callable defined in *root*.

    Format: ``module:attr`` (e.g. ``routes:generate`` for ``<root>/routes.py``).

    Raises:
        ConfigError: If the module cannot be found or loaded, or the
            attribute is missing or not callable.

    """
    module_part, _, attr = spec.partition(":")
    if not module_part or not attr:
        msg = f"generate routes {spec!r}: expected 'module:attr'"
        raise ConfigError(msg)

    py_file = root / (module_part.replace(".", "/") + ".py")
    if not py_file.is_file():
        msg = f"generate routes {spec!r}: {py_file} not found"
        raise ConfigError(msg)

    module_name = f"whisker_routes_{module_part.replace('.', '_')}"
    spec_obj = importlib.util.spec_from_file_location(module_name, py_file)
    if spec_obj is None or spec_obj.loader is None:
        msg = f"generate routes {spec!r}: failed to load {py_file}"
        raise ConfigError(msg)

    try:
        module = importlib.util.module_from_spec(spec_obj)
        sys.modules[module_name] = module
        spec_obj.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        msg = f"generate routes {spec!r}: failed to load {py_file}: {exc}"
        raise ConfigError(msg) from exc

    callable_obj = getattr(module, attr, None)
    if not callable(callable_obj):
        msg = f"generate routes {spec!r}: {attr} not callable in {py_file}"
        raise ConfigError(msg)
    return callable_obj


def item_route(item: object) -> tuple[str, Any]:
    """Split a dynamic route item into ``(route, payload)``.

    Accepts a bare path, a mapping with ``route`` (or ``path``) and an
    optional ``payload``, or any object with ``route`` and ``payload``
    attributes such as :class:`~whisker.routes.merge.RouteSpec`.

    Raises:
        RouteResolutionError: If no route path can be found on *item*.

    """
    if isinstance(item, str):
        return item, None

    if isinstance(item, Mapping):
        route = item.get("route", item.get("path"))
        payload = item.get("payload")
    else:
        route = getattr(item, "route", None)
        payload = getattr(item, "payload", None)

    if not isinstance(route, str):
        msg = f"Dynamic route item has no route path: {item!r}"
        raise RouteResolutionError(msg)
    return route, payload
