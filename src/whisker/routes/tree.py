"""Route tree — discover page templates and match URLs against them.

Scans a ``pages/`` directory for Kida templates and builds a nested route
tree using a file-path convention:

    pages/index.html           -> /
    pages/about.html           -> /about
    pages/posts/index.html     -> /posts
    pages/posts/[slug].html    -> /posts/:slug
    pages/[lang]/index.html    -> /:lang

Files and directories starting with ``_`` or ``.`` are private (layouts,
partials, ``_error.html``) and never become routes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

_PRIVATE_PREFIXES = ("_", ".")
_TEMPLATE_SUFFIX = ".html"


@dataclass(frozen=True, slots=True)
class RouteNode:
    """One node of the route tree.

    Attributes:
        path: Route segment.  Top-level nodes carry a leading ``/``, nested
            nodes are relative (``""`` for a directory index).  Parameter
            segments are written ``:name``.
        template: Template name relative to the pages directory, or *None*
            for a node that only groups children.
        children: Nested routes.

    """

    path: str
    template: str | None = None
    children: tuple[RouteNode, ...] = ()


def discover_route_tree(pages_dir: Path) -> tuple[RouteNode, ...]:
    """Scan *pages_dir* for page templates and return the route tree.

    Returns an empty tuple when *pages_dir* does not exist.

    """
    if not pages_dir.is_dir():
        return ()
    return _scan(pages_dir, pages_dir, top=True)


def _scan(directory: Path, pages_dir: Path, *, top: bool) -> tuple[RouteNode, ...]:
    nodes: list[RouteNode] = []
    entries = sorted(directory.iterdir(), key=_sort_key)

    for entry in entries:
        if entry.name.startswith(_PRIVATE_PREFIXES):
            continue

        if entry.is_dir():
            children = _scan(entry, pages_dir, top=False)
            if children:
                nodes.append(RouteNode(
                    path=_node_path(_to_segment(entry.name), top=top),
                    children=children,
                ))
        elif entry.suffix == _TEMPLATE_SUFFIX:
            segment = "" if entry.stem == "index" else _to_segment(entry.stem)
            nodes.append(RouteNode(
                path=_node_path(segment, top=top),
                template=entry.relative_to(pages_dir).as_posix(),
            ))

    return tuple(nodes)


def _sort_key(entry: Path) -> tuple[bool, str]:
    # index.html first, then everything else by name
    return (entry.name != "index" + _TEMPLATE_SUFFIX, entry.name)


def _to_segment(name: str) -> str:
    """``[slug]`` -> ``:slug``; anything else is a literal segment."""
    if name.startswith("[") and name.endswith("]") and len(name) > 2:
        return ":" + name[1:-1]
    return name


def _node_path(segment: str, *, top: bool) -> str:
    return "/" + segment if top else segment


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


def match_route(
    tree: tuple[RouteNode, ...],
    route: str,
) -> tuple[str, dict[str, str]] | None:
    """Find the template serving *route*.

    Literal segments take precedence over ``:param`` segments at every level.

    Returns:
        ``(template_name, params)`` or *None* if no template matches.

    """
    segments = [s for s in route.split("/") if s]
    return _match(tree, segments, {})


def _match(
    nodes: tuple[RouteNode, ...],
    segments: list[str],
    params: dict[str, str],
) -> tuple[str, dict[str, str]] | None:
    for node in sorted(nodes, key=lambda n: n.path.lstrip("/").startswith(":")):
        segment = node.path.lstrip("/")

        if node.children:
            if not segments:
                continue
            bound = _bind(segment, segments[0], params)
            if bound is None:
                continue
            result = _match(node.children, segments[1:], bound)
            if result is not None:
                return result
            continue

        if node.template is None:
            continue
        if segment == "":
            if not segments:
                return node.template, params
            continue
        if len(segments) == 1:
            bound = _bind(segment, segments[0], params)
            if bound is not None:
                return node.template, bound

    return None


def _bind(segment: str, value: str, params: dict[str, str]) -> dict[str, str] | None:
    if segment.startswith(":"):
        return {**params, segment[1:]: value}
    if segment == value:
        return params
    return None
