"""Asset handling — the build step and copying files into the output.

The build step bundles the site's ``assets/`` directory into the build
artifacts directory (``.whisker/dist``).  The generator then copies those
artifacts under the configured public path in the output, next to the
verbatim copy of ``static/``.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Protocol, runtime_checkable

from whisker._errors import ExportError

# Files/directories skipped when bundling assets
_HIDDEN_PREFIXES = (".", "_")


@runtime_checkable
class Builder(Protocol):
    """Produces the build artifacts directory before generation starts."""

    async def build(self) -> None: ...


class AssetBuilder:
    """Bundles an assets directory into the build artifacts directory.

    Skips hidden files (names starting with ``.`` or ``_``) and anything
    under ``__pycache__``.  The artifacts directory is recreated on every
    build, so it always mirrors the assets directory.

    Args:
        assets_path: Source directory (e.g., ``site_root/assets/``).
        build_path: Artifacts directory (e.g., ``site_root/.whisker/dist/``).

    """

    def __init__(self, assets_path: Path, build_path: Path) -> None:
        self._assets_path = assets_path
        self._build_path = build_path

    async def build(self) -> None:
        await asyncio.to_thread(self._build_sync)

    def _build_sync(self) -> tuple[Path, ...]:
        if self._build_path.exists():
            shutil.rmtree(self._build_path)
        self._build_path.mkdir(parents=True, exist_ok=True)

        if not self._assets_path.is_dir():
            return ()

        copied: list[Path] = []
        for src_file in sorted(self._assets_path.rglob("*")):
            if not src_file.is_file():
                continue
            relative = src_file.relative_to(self._assets_path)
            if "__pycache__" in relative.parts:
                continue
            if any(part.startswith(_HIDDEN_PREFIXES) for part in relative.parts):
                continue

            dest_file = self._build_path / relative
            dest_file.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src_file, dest_file)
            copied.append(dest_file)

        return tuple(copied)


async def remove_tree(path: Path) -> None:
    """Remove *path* recursively; a missing directory is not an error."""
    await asyncio.to_thread(_remove_tree_sync, path)


async def copy_tree(source: Path, destination: Path) -> None:
    """Copy *source* into *destination*, merging with existing content.

    Raises:
        ExportError: If *source* is not a directory.

    """
    if not source.is_dir():
        msg = f"Cannot copy {source}: directory not found"
        raise ExportError(msg)
    await asyncio.to_thread(shutil.copytree, source, destination, dirs_exist_ok=True)


def _remove_tree_sync(path: Path) -> None:
    if path.exists():
        shutil.rmtree(path)
