"""Route resolution — route tree discovery, flattening, dynamic routes, merging.

Public API::

    from whisker.routes import discover_route_tree, flatten_routes, merge_routes

    tree = discover_route_tree(Path("my-site/pages"))
    items = await resolve_dynamic_routes(config.generate_routes)
    routes = merge_routes(flatten_routes(tree), items)
"""

from whisker.routes.dynamic import load_routes_callable, resolve_dynamic_routes
from whisker.routes.flatten import flatten_routes
from whisker.routes.merge import RouteSpec, merge_routes
from whisker.routes.tree import RouteNode, discover_route_tree, match_route

__all__ = [
    "RouteNode",
    "RouteSpec",
    "discover_route_tree",
    "flatten_routes",
    "load_routes_callable",
    "match_route",
    "merge_routes",
    "resolve_dynamic_routes",
]
