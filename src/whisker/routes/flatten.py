"""Route flattening — nested route tree to an ordered list of URL paths."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from whisker.routes.tree import RouteNode


def flatten_routes(
    tree: Sequence[RouteNode],
    prefix: str = "",
    routes: list[str] | None = None,
) -> list[str]:
    """Flatten *tree* depth-first into URL paths, in declaration order.

    Parameterized (``:name``) and catch-all (``*``) nodes are skipped along
    with their children; those routes are only generated when listed by the
    dynamic route configuration.

    ``[/, /posts [ "", archive ]]`` -> ``["/", "/posts", "/posts/archive"]``

    """
    if routes is None:
        routes = []

    for node in tree:
        if ":" in node.path or "*" in node.path:
            continue
        if node.children:
            flatten_routes(node.children, prefix + node.path + "/", routes)
        elif node.path == "" and prefix.endswith("/"):
            routes.append(prefix[:-1])
        else:
            routes.append(prefix + node.path)

    return routes
