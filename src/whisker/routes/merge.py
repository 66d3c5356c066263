"""Route merging — static paths plus dynamic items into one work list."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from whisker.routes.dynamic import item_route

if TYPE_CHECKING:
    from whisker._types import DynamicRouteItem


@dataclass(frozen=True, slots=True)
class RouteSpec:
    """One page to render.

    Attributes:
        route: URL path; identity of the spec.
        payload: Data handed to the renderer, or *None*.

    """

    route: str
    payload: Any = None


def merge_routes(
    static_paths: Iterable[str],
    dynamic_items: Iterable[DynamicRouteItem],
) -> list[RouteSpec]:
    """Merge static paths and dynamic items, deduplicated by route.

    Static paths come first with no payload.  A dynamic item for a path that
    is already present replaces its payload in place; a new path is appended.

    ``[/a, /b]`` + ``[{/b: 1}, {/c: 2}]`` -> ``[/a, /b(1), /c(2)]``

    """
    route_map: dict[str, RouteSpec] = {}

    for path in static_paths:
        route_map[path] = RouteSpec(route=path)

    for item in dynamic_items:
        route, payload = item_route(item)
        route_map[route] = RouteSpec(route=route, payload=payload)

    return list(route_map.values())
