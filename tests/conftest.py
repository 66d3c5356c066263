"""Shared test fixtures for whisker."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from whisker.config import WhiskerConfig
from whisker.render.base import RenderContext, RenderResult
from whisker.routes.tree import RouteNode


class FakeRenderer:
    """In-memory renderer recording every call.

    Routes in *fail* raise, routes in *handled* return an in-band error,
    and routes in *slow* sleep for the given number of seconds first.
    """

    def __init__(
        self,
        *,
        tree: tuple[RouteNode, ...] = (),
        fail: tuple[str, ...] = (),
        handled: tuple[str, ...] = (),
        slow: dict[str, float] | None = None,
    ) -> None:
        self.route_tree = tree
        self.fail = fail
        self.handled = handled
        self.slow = slow or {}
        self.ready_calls = 0
        self.calls: list[tuple[str, RenderContext]] = []

    async def ready(self) -> None:
        self.ready_calls += 1

    async def render_route(self, route: str, context: RenderContext) -> RenderResult:
        self.calls.append((route, context))
        if route in self.slow:
            await asyncio.sleep(self.slow[route])
        if route in self.fail:
            msg = f"render exploded for {route}"
            raise RuntimeError(msg)
        html = f"<html><body><h1>{route}</h1></body></html>"
        if route in self.handled:
            return RenderResult(html=html, error={"statusCode": 500, "message": "bad data"})
        return RenderResult(html=html)


def make_tree(*paths: str) -> tuple[RouteNode, ...]:
    """Flat route tree of leaf nodes, one per top-level path."""
    return tuple(RouteNode(path=p, template=f"{p.strip('/') or 'index'}.html") for p in paths)


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Site root with empty build artifacts and no static directory."""
    (tmp_path / ".whisker" / "dist").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def config(site_root: Path) -> WhiskerConfig:
    return WhiskerConfig(root=site_root)


@pytest.fixture
def tmp_site(tmp_path: Path) -> Path:
    """Create a minimal Kida site for integration tests.

    Pages: ``/``, ``/about``, ``/posts`` and the ``/posts/[slug]`` template.
    """
    pages = tmp_path / "pages"
    (pages / "posts").mkdir(parents=True)
    (pages / "index.html").write_text(
        "<!DOCTYPE html>\n<html>\n<body><h1>Home {{ route }}</h1></body>\n</html>\n"
    )
    (pages / "about.html").write_text(
        "<!DOCTYPE html>\n<html>\n<body><h1>About</h1></body>\n</html>\n"
    )
    (pages / "posts" / "index.html").write_text(
        "<!DOCTYPE html>\n<html>\n<body><h1>Posts</h1></body>\n</html>\n"
    )
    (pages / "posts" / "[slug].html").write_text(
        "<!DOCTYPE html>\n<html>\n<body><h1>Post {{ route }}</h1><p>{{ payload }}</p></body>\n</html>\n"
    )
    (pages / "_layout.html").write_text("<html>{{ content }}</html>\n")

    static = tmp_path / "static"
    static.mkdir()
    (static / "robots.txt").write_text("User-agent: *\n")

    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "app.css").write_text("body { margin: 0; }\n")

    return tmp_path
