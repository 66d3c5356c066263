"""Output mapping — where a route's page lands on disk, and writing it."""

from __future__ import annotations

from pathlib import Path


def route_to_filepath(route: str, output_dir: Path) -> Path:
    """Map *route* to its ``index.html`` under *output_dir*.

    Every route becomes a directory so it is served without an extension:
    ``/`` is ``index.html``, ``/docs/intro`` is ``docs/intro/index.html``.
    Leading and trailing slashes are ignored, so ``/about`` and ``/about/``
    share one file.
    """
    relative = route.strip("/")
    page_dir = output_dir / relative if relative else output_dir
    return page_dir / "index.html"


def write_html(filepath: Path, html: str) -> int:
    """Write *html* as UTF-8 to *filepath* and return the byte count.

    Missing directories are created and an existing page is overwritten.
    OSError is not caught here; the generator treats it as fatal.
    """
    data = html.encode("utf-8")
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_bytes(data)
    return len(data)
