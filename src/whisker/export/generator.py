"""Generator — render every route of a site to static HTML files.

Pipeline order:
    1. Wait for the renderer to be ready
    2. Run the build step (if configured and requested)
    3. Clean the output directory
    4. Copy static files and build artifacts
    5. Resolve the dynamic route configuration
    6. Merge static and dynamic routes into one work list
    7. Render, minify, and write every route in batches
    8. Write the ``.nojekyll`` marker
    9. Report failures

A route that fails to render or minify is recorded and skipped; it never
stops the other routes.  Failures outside a single route (build, route
resolution, filesystem) abort the run.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from whisker._errors import MinifyError, RenderTimeoutError
from whisker.export.assets import copy_tree, remove_tree
from whisker.export.report import (
    ErrorCollector,
    FailureRecord,
    GenerationReport,
    describe_error,
    format_report,
)
from whisker.export.scheduler import run_batches
from whisker.export.writer import route_to_filepath, write_html
from whisker.observability.collector import GenerationCollector
from whisker.render.base import RenderContext
from whisker.routes.dynamic import load_routes_callable, resolve_dynamic_routes
from whisker.routes.flatten import flatten_routes
from whisker.routes.merge import RouteSpec, merge_routes

if TYPE_CHECKING:
    from collections.abc import Sequence

    from whisker._types import DynamicRouteItem, MinifyFunc
    from whisker.config import WhiskerConfig
    from whisker.export.assets import Builder
    from whisker.render.base import Renderer, RenderResult
    from whisker.routes.tree import RouteNode


class Generator:
    """Generates a static site from a renderer and a route configuration.

    Args:
        config: Frozen Whisker configuration.
        renderer: Renders one route at a time.
        builder: Produces the build artifacts; skipped when *None*.
        minifier: Post-processes rendered markup; skipped when *None*.
        collector: Receives progress and failure events.
        route_tree: Static route tree.  Defaults to the renderer's
            ``route_tree`` attribute, read after ``ready()``.

    """

    def __init__(
        self,
        config: WhiskerConfig,
        renderer: Renderer,
        *,
        builder: Builder | None = None,
        minifier: MinifyFunc | None = None,
        collector: GenerationCollector | None = None,
        route_tree: Sequence[RouteNode] | None = None,
    ) -> None:
        self._config = config
        self._renderer = renderer
        self._builder = builder
        self._minifier = minifier
        self._collector = collector if collector is not None else GenerationCollector()
        self._route_tree = route_tree

    @property
    def collector(self) -> GenerationCollector:
        return self._collector

    async def generate(self, do_build: bool | None = None) -> GenerationReport:
        """Run the full generation pipeline.

        Args:
            do_build: Run the build step.  Defaults to ``config.do_build``.

        Returns:
            GenerationReport with the duration and every route failure.

        Raises:
            ExportError: If build artifacts are missing or the renderer
                cannot start.
            RouteResolutionError: If the dynamic route configuration cannot
                be resolved.
            OSError: If a file cannot be written.

        """
        start = time.perf_counter()
        config = self._config
        output_dir = config.output_path
        errors = ErrorCollector()

        t0 = time.perf_counter()
        await self._renderer.ready()
        self._collector.record_step("ready", duration_ms=_since(t0))

        if do_build is None:
            do_build = config.do_build
        if self._builder is not None and do_build:
            t0 = time.perf_counter()
            await self._builder.build()
            self._collector.record_step("build", "build artifacts ready", duration_ms=_since(t0))

        t0 = time.perf_counter()
        await remove_tree(output_dir)
        self._collector.record_step("clean", f"removed {output_dir}", duration_ms=_since(t0))

        t0 = time.perf_counter()
        if config.static_path.is_dir():
            await copy_tree(config.static_path, output_dir)
        await copy_tree(config.build_path, config.artifacts_output_path)
        self._collector.record_step("copy", "static & build files copied", duration_ms=_since(t0))

        routes = await self._resolve_routes()

        t0 = time.perf_counter()
        await run_batches(
            routes,
            lambda spec: self._process_route(spec, errors),
            batch_size=config.concurrency,
            interval=config.interval,
            collector=self._collector,
        )
        self._collector.record_step(
            "render", f"{len(routes)} routes", duration_ms=_since(t0),
        )

        # Lets GitHub Pages serve directories starting with an underscore
        (output_dir / ".nojekyll").write_text("", encoding="utf-8")
        self._collector.record_step("nojekyll")

        duration = round(time.perf_counter() - start, 1)
        failures = errors.all()
        self._collector.record_finished(
            routes=len(routes),
            errors=len(failures),
            duration_s=duration,
            report=format_report(failures),
        )

        return GenerationReport(
            duration=duration,
            errors=failures,
            routes=len(routes),
            output_dir=output_dir,
        )

    # ------------------------------------------------------------------
    # Route resolution
    # ------------------------------------------------------------------

    async def _resolve_routes(self) -> list[RouteSpec]:
        """Build the work list: ``/`` in hash mode, merged routes otherwise."""
        if self._config.router_mode == "hash":
            return [RouteSpec(route="/")]

        t0 = time.perf_counter()
        try:
            dynamic = await self._resolve_dynamic()
            routes = merge_routes(flatten_routes(self._static_tree()), dynamic)
        except Exception as exc:
            self._collector.record_abort("resolve_routes", f"Could not resolve routes: {exc}")
            raise

        self._collector.record_step(
            "resolve_routes",
            f"{len(routes)} routes ({len(dynamic)} dynamic)",
            duration_ms=_since(t0),
        )
        return routes

    async def _resolve_dynamic(self) -> list[DynamicRouteItem]:
        value = self._config.generate_routes
        if isinstance(value, str):
            value = load_routes_callable(value, self._config.root)
        return await resolve_dynamic_routes(value)

    def _static_tree(self) -> Sequence[RouteNode]:
        if self._route_tree is not None:
            return self._route_tree
        return getattr(self._renderer, "route_tree", ())

    # ------------------------------------------------------------------
    # Per-route processing
    # ------------------------------------------------------------------

    async def _process_route(self, spec: RouteSpec, errors: ErrorCollector) -> None:
        """Render, minify, and write one route.

        Render and minify failures are recorded and end processing of this
        route.  Write failures propagate.

        """
        t0 = time.perf_counter()
        route = spec.route

        try:
            result = await self._render(spec)
        except Exception as exc:
            self._fail(errors, FailureRecord(kind="unhandled", route=route, error=exc))
            return

        html = result.html

        if self._minifier is not None:
            try:
                html = self._minifier(html)
            except Exception as exc:
                msg = (
                    f"HTML minification failed for route {route!r}. Make sure the "
                    f"route generates valid HTML. Failed HTML:\n {html}"
                )
                error = MinifyError(msg)
                error.__cause__ = exc
                # Replaces any handled error: one record per route
                self._fail(errors, FailureRecord(kind="unhandled", route=route, error=error))
                return

        if result.error is not None:
            self._fail(errors, FailureRecord(kind="handled", route=route, error=result.error))

        filepath = route_to_filepath(route, self._config.output_path)
        size = await asyncio.to_thread(write_html, filepath, html)
        self._collector.record_route(
            route, str(filepath), size_bytes=size, duration_ms=_since(t0),
        )

    async def _render(self, spec: RouteSpec) -> RenderResult:
        render = self._renderer.render_route(spec.route, RenderContext(payload=spec.payload))
        timeout = self._config.route_timeout
        if timeout is None:
            return await render
        try:
            return await asyncio.wait_for(render, timeout)
        except TimeoutError as exc:
            msg = f"Rendering {spec.route!r} timed out after {timeout}s"
            raise RenderTimeoutError(msg) from exc

    def _fail(self, errors: ErrorCollector, record: FailureRecord) -> None:
        errors.record(record)
        self._collector.record_failure(record.route, record.kind, describe_error(record.error))


def _since(t0: float) -> float:
    return (time.perf_counter() - t0) * 1000
