"""Whisker application — wires config, the Kida renderer, and the generator.

``generate()`` is the primary entry point: load the site's configuration,
render every route to ``<output>/<route>/index.html``, print a summary, and
return the report.
"""

import asyncio
import sys
from pathlib import Path

from whisker.config import WhiskerConfig
from whisker.config_loader import load_config
from whisker.export.assets import AssetBuilder
from whisker.export.generator import Generator
from whisker.export.report import GenerationReport
from whisker.observability import EventLog, GenerationCollector
from whisker.render.kida import KidaRenderer
from whisker.render.minify import minifier_from_config


def create_generator(config: WhiskerConfig, *, verbose: bool = False) -> Generator:
    """Create a Generator for the site described by *config*.

    Uses a :class:`KidaRenderer` over the pages directory, an
    :class:`AssetBuilder` for the assets directory, and htmlmin when
    minification is enabled.

    """
    return Generator(
        config,
        KidaRenderer(config.pages_path),
        builder=AssetBuilder(config.assets_path, config.build_path),
        minifier=minifier_from_config(config.minify),
        collector=GenerationCollector(EventLog(), verbose=verbose),
    )


async def generate_async(
    root: str | Path = ".",
    *,
    verbose: bool = False,
    **kwargs: object,
) -> GenerationReport:
    """Async variant of :func:`generate` for callers with a running loop."""
    config = load_config(Path(root), **kwargs)
    generator = create_generator(config, verbose=verbose)
    return await generator.generate()


def generate(
    root: str | Path = ".",
    *,
    verbose: bool = True,
    **kwargs: object,
) -> GenerationReport:
    """Generate the site at *root* as static HTML files.

    Args:
        root: Path to the site root directory.
        verbose: Print progress and the error report to stderr.
        **kwargs: Override WhiskerConfig fields.

    Returns:
        The GenerationReport; route failures are listed in ``errors``.

    """
    report = asyncio.run(generate_async(root, verbose=verbose, **kwargs))
    if verbose:
        _print_summary(report)
    return report


def _print_summary(report: GenerationReport) -> None:
    """Print generation summary to stderr."""
    pages = report.routes - len({record.route for record in report.errors if record.kind == "unhandled"})
    lines = [
        "",
        "─" * 41,
        f"  Generated {pages} page{'s' if pages != 1 else ''}",
    ]
    if report.errors:
        count = len(report.errors)
        lines.append(f"  {count} route error{'s' if count != 1 else ''}")
    lines.append(f"  Output: {report.output_dir}")
    lines.append(f"  Done in {report.duration}s")

    print("\n".join(lines), file=sys.stderr)
