"""Shared type definitions for whisker."""

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from whisker.routes.merge import RouteSpec

# Router history mode; "hash" generates a single index.html
type RouterMode = Literal["history", "hash"]

# Route URL path (e.g., "/", "/about", "/posts/hello")
type RoutePath = str

# JSON-serializable data passed alongside a route to the renderer
type Payload = Any

# One entry of the dynamic route configuration
type DynamicRouteItem = RoutePath | Mapping[str, Any] | RouteSpec

# Minifier: markup in, minified markup out
type MinifyFunc = Callable[[str], str]
