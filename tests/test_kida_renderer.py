"""Tests for whisker.render.kida — the Kida page renderer."""

from __future__ import annotations

import time
from pathlib import Path
from unittest.mock import patch

import pytest

from whisker._errors import ExportError, RenderTimeoutError
from whisker.config import WhiskerConfig
from whisker.export.generator import Generator
from whisker.render.base import RenderContext, Renderer, RenderResult
from whisker.render.kida import KidaRenderer


async def _ready_renderer(site: Path) -> KidaRenderer:
    kida_renderer = KidaRenderer(site / "pages")
    await kida_renderer.ready()
    return kida_renderer


class TestKidaRendererSetup:
    """ready() — environment creation and route discovery."""

    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        assert isinstance(KidaRenderer(tmp_path), Renderer)

    @pytest.mark.asyncio
    async def test_missing_pages_dir(self, tmp_path: Path) -> None:
        with pytest.raises(ExportError, match="Pages directory not found"):
            await KidaRenderer(tmp_path / "pages").ready()

    @pytest.mark.asyncio
    async def test_render_before_ready(self, tmp_site: Path) -> None:
        with pytest.raises(ExportError, match="before ready"):
            await KidaRenderer(tmp_site / "pages").render_route("/", RenderContext())

    @pytest.mark.asyncio
    async def test_route_tree_discovered(self, tmp_site: Path) -> None:
        kida_renderer = KidaRenderer(tmp_site / "pages")
        assert kida_renderer.route_tree == ()
        await kida_renderer.ready()
        assert [node.path for node in kida_renderer.route_tree] == ["/", "/about", "/posts"]


class TestKidaRendererRender:
    """render_route() — template lookup and rendering."""

    @pytest.mark.asyncio
    async def test_renders_route_variable(self, tmp_site: Path) -> None:
        renderer = await _ready_renderer(tmp_site)
        result = await renderer.render_route("/", RenderContext())
        assert isinstance(result, RenderResult)
        assert "<h1>Home /</h1>" in result.html
        assert result.error is None

    @pytest.mark.asyncio
    async def test_static_page(self, tmp_site: Path) -> None:
        renderer = await _ready_renderer(tmp_site)
        result = await renderer.render_route("/about", RenderContext())
        assert "<h1>About</h1>" in result.html

    @pytest.mark.asyncio
    async def test_param_page_with_payload(self, tmp_site: Path) -> None:
        renderer = await _ready_renderer(tmp_site)
        result = await renderer.render_route("/posts/hello", RenderContext(payload="First post"))
        assert "<h1>Post /posts/hello</h1>" in result.html
        assert "<p>First post</p>" in result.html

    @pytest.mark.asyncio
    async def test_unknown_route_reports_404(self, tmp_site: Path) -> None:
        renderer = await _ready_renderer(tmp_site)
        result = await renderer.render_route("/nope", RenderContext())
        assert result.error == {
            "statusCode": 404,
            "message": "This page could not be found",
            "route": "/nope",
        }
        assert "404" in result.html

    @pytest.mark.asyncio
    async def test_custom_error_template(self, tmp_site: Path) -> None:
        (tmp_site / "pages" / "_error.html").write_text("<h1>Lost</h1>")
        kida_renderer = KidaRenderer(tmp_site / "pages")
        await kida_renderer.ready()
        result = await kida_renderer.render_route("/nope", RenderContext())
        assert "<h1>Lost</h1>" in result.html
        assert result.error is not None


class TestKidaRendererTimeout:
    """Template rendering runs off the event loop, so route_timeout applies."""

    @pytest.mark.asyncio
    async def test_blocking_template_times_out(self, tmp_site: Path) -> None:
        def slow_about(env: object, template_name: str, **context: object) -> str:
            if template_name == "about.html":
                time.sleep(0.3)
            return env.get_template(template_name).render(**context)  # type: ignore[attr-defined]

        (tmp_site / ".whisker" / "dist").mkdir(parents=True)
        config = WhiskerConfig(root=tmp_site, route_timeout=0.05)
        renderer = KidaRenderer(config.pages_path)

        with patch.object(KidaRenderer, "_render_page", side_effect=slow_about):
            report = await Generator(config, renderer).generate()

        (failure,) = report.errors
        assert failure.route == "/about"
        assert isinstance(failure.error, RenderTimeoutError)
        assert (config.output_path / "index.html").is_file()
        assert not (config.output_path / "about").exists()
