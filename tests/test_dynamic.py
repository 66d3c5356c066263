"""Tests for whisker.routes.dynamic — dynamic route resolution."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from whisker._errors import ConfigError, RouteResolutionError
from whisker.routes.dynamic import load_routes_callable, resolve_dynamic_routes


class TestResolveDynamicRoutes:
    """resolve_dynamic_routes — list, callable, or awaitable."""

    @pytest.mark.asyncio
    async def test_list(self) -> None:
        assert await resolve_dynamic_routes(["/a", "/b"]) == ["/a", "/b"]

    @pytest.mark.asyncio
    async def test_tuple(self) -> None:
        assert await resolve_dynamic_routes(("/a",)) == ["/a"]

    @pytest.mark.asyncio
    async def test_none_is_empty(self) -> None:
        assert await resolve_dynamic_routes(None) == []

    @pytest.mark.asyncio
    async def test_sync_callable(self) -> None:
        assert await resolve_dynamic_routes(lambda: ["/a"]) == ["/a"]

    @pytest.mark.asyncio
    async def test_async_callable(self) -> None:
        async def routes() -> list[dict[str, object]]:
            return [{"route": "/p", "payload": 1}]

        assert await resolve_dynamic_routes(routes) == [{"route": "/p", "payload": 1}]

    @pytest.mark.asyncio
    async def test_awaitable(self) -> None:
        async def routes() -> list[str]:
            return ["/x"]

        assert await resolve_dynamic_routes(routes()) == ["/x"]

    @pytest.mark.asyncio
    async def test_callable_returning_callable(self) -> None:
        assert await resolve_dynamic_routes(lambda: lambda: ["/deep"]) == ["/deep"]

    @pytest.mark.asyncio
    async def test_invalid_value_raises(self) -> None:
        with pytest.raises(RouteResolutionError, match="int"):
            await resolve_dynamic_routes(42)

    @pytest.mark.asyncio
    async def test_callable_error_propagates(self) -> None:
        async def routes() -> list[str]:
            msg = "api down"
            raise ConnectionError(msg)

        with pytest.raises(ConnectionError, match="api down"):
            await resolve_dynamic_routes(routes)


class TestLoadRoutesCallable:
    """load_routes_callable — module:attr lookup in the site root."""

    def test_loads_function(self, tmp_path: Path) -> None:
        (tmp_path / "routes.py").write_text(
            "def generate():\n    return ['/from-file']\n"
        )
        func = load_routes_callable("routes:generate", tmp_path)
        assert func() == ["/from-file"]

    def test_missing_colon(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="module:attr"):
            load_routes_callable("routes", tmp_path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_routes_callable("nope:generate", tmp_path)

    def test_not_callable(self, tmp_path: Path) -> None:
        (tmp_path / "routes.py").write_text("generate = ['/a']\n")
        with pytest.raises(ConfigError, match="not callable"):
            load_routes_callable("routes:generate", tmp_path)

    def test_import_error_wrapped(self, tmp_path: Path) -> None:
        (tmp_path / "broken.py").write_text("raise RuntimeError('nope')\n")
        with pytest.raises(ConfigError, match="failed to load"):
            load_routes_callable("broken:generate", tmp_path)

    def test_failed_module_not_left_registered(self, tmp_path: Path) -> None:
        (tmp_path / "broken.py").write_text("raise RuntimeError('nope')\n")
        with pytest.raises(ConfigError):
            load_routes_callable("broken:generate", tmp_path)
        assert "whisker_routes_broken" not in sys.modules
