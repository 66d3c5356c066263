"""Renderer protocol and the values exchanged with it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Context passed to the renderer for one route.

    Attributes:
        payload: Data declared alongside the route, or *None*.
        generate: Always True during static generation, so templates can
            tell a generated page apart from a live render.

    """

    payload: Any = None
    generate: bool = True


@dataclass(frozen=True, slots=True)
class RenderResult:
    """Markup for one route plus any error the renderer handled itself.

    Attributes:
        html: Rendered markup (possibly an error page).
        error: In-band error reported by the renderer, or *None*.

    """

    html: str
    error: Any = None


@runtime_checkable
class Renderer(Protocol):
    """Anything that can render a route to HTML.

    ``render_route`` may raise; the generator records the exception against
    the route and moves on.
    """

    async def ready(self) -> None: ...

    async def render_route(self, route: str, context: RenderContext) -> RenderResult: ...
