"""Kida renderer — renders routes from page templates in a ``pages/`` directory.

Each route is matched against the route tree discovered from the pages
directory (see :mod:`whisker.routes.tree`) and rendered with::

    route     the URL path being rendered
    params    values bound to ``[param]`` segments
    payload   data declared for the route in the generate routes config
    generate  always True during static generation

Unknown routes render ``_error.html`` (or a minimal built-in page) and report
a 404 in-band error instead of raising.
"""

from __future__ import annotations

import asyncio
import html
from pathlib import Path
from typing import TYPE_CHECKING

from whisker._errors import ExportError
from whisker.render.base import RenderContext, RenderResult
from whisker.routes.tree import RouteNode, discover_route_tree, match_route

if TYPE_CHECKING:
    from kida import Environment

_ERROR_TEMPLATE = "_error.html"

_FALLBACK_ERROR_PAGE = (
    "<!DOCTYPE html>\n<html>\n<head><title>{status}</title></head>\n"
    "<body><h1>{status}</h1><p>{message}</p></body>\n</html>\n"
)


class KidaRenderer:
    """Renders routes through a Kida template environment.

    Args:
        pages_dir: Directory containing page templates.
        autoescape: Enable Kida HTML autoescaping.

    """

    def __init__(self, pages_dir: Path, *, autoescape: bool = True) -> None:
        self._pages_dir = pages_dir
        self._autoescape = autoescape
        self._env: Environment | None = None
        self._tree: tuple[RouteNode, ...] = ()

    @property
    def route_tree(self) -> tuple[RouteNode, ...]:
        """Route tree discovered by :meth:`ready`."""
        return self._tree

    async def ready(self) -> None:
        """Discover page templates and create the Kida environment.

        Raises:
            ExportError: If the pages directory does not exist.

        """
        if not self._pages_dir.is_dir():
            msg = f"Pages directory not found: {self._pages_dir}"
            raise ExportError(msg)

        from kida import Environment, FileSystemLoader

        self._env = Environment(
            loader=FileSystemLoader([self._pages_dir]),
            autoescape=self._autoescape,
        )
        self._tree = discover_route_tree(self._pages_dir)

    async def render_route(self, route: str, context: RenderContext) -> RenderResult:
        """Render *route*; templates run in a worker thread."""
        env = self._environment()
        matched = match_route(self._tree, route)

        if matched is None:
            error = {
                "statusCode": 404,
                "message": "This page could not be found",
                "route": route,
            }
            markup = await asyncio.to_thread(self._render_error, env, error)
            return RenderResult(html=markup, error=error)

        template_name, params = matched
        markup = await asyncio.to_thread(
            self._render_page,
            env,
            template_name,
            route=route,
            params=params,
            payload=context.payload,
            generate=context.generate,
        )
        return RenderResult(html=markup)

    def _environment(self) -> Environment:
        if self._env is None:
            msg = "KidaRenderer.render_route() called before ready()"
            raise ExportError(msg)
        return self._env

    def _render_page(self, env: Environment, template_name: str, **context: object) -> str:
        return env.get_template(template_name).render(**context)

    def _render_error(self, env: Environment, error: dict[str, object]) -> str:
        if (self._pages_dir / _ERROR_TEMPLATE).is_file():
            return env.get_template(_ERROR_TEMPLATE).render(error=error)
        return _FALLBACK_ERROR_PAGE.format(
            status=error["statusCode"],
            message=html.escape(str(error["message"])),
        )
