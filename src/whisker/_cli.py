"""Whisker CLI — whisker generate.

Entry point for the ``whisker`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the whisker CLI."""
    parser = argparse.ArgumentParser(
        prog="whisker",
        description="Batched static-site generation from Kida page templates.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # whisker generate
    generate_parser = subparsers.add_parser(
        "generate",
        help="Render every route to static HTML files",
    )
    generate_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    generate_parser.add_argument("--output", default=None, help="Output directory")
    generate_parser.add_argument(
        "--no-build", action="store_true", help="Skip the asset build step",
    )
    generate_parser.add_argument(
        "--interval", type=float, default=None,
        help="Milliseconds between route starts within a batch",
    )
    generate_parser.add_argument(
        "--concurrency", type=int, default=None, help="Routes rendered per batch",
    )
    generate_parser.add_argument(
        "--minify", action="store_true", help="Minify generated HTML",
    )
    generate_parser.add_argument(
        "--hash", action="store_true", help="Hash router mode: generate only /",
    )
    generate_parser.add_argument(
        "--quiet", action="store_true", help="Only report errors through the exit code",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from whisker import __version__

    return __version__


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    """Config overrides for the flags that were given on the command line."""
    overrides: dict[str, object] = {}
    if args.output is not None:
        overrides["output"] = args.output
    if args.no_build:
        overrides["do_build"] = False
    if args.interval is not None:
        overrides["interval"] = args.interval
    if args.concurrency is not None:
        overrides["concurrency"] = args.concurrency
    if args.minify:
        overrides["minify"] = True
    if args.hash:
        overrides["router_mode"] = "hash"
    return overrides


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from whisker.app import generate

    if args.command == "generate":
        report = generate(args.root, verbose=not args.quiet, **_overrides(args))
        sys.exit(0 if report.ok else 1)


if __name__ == "__main__":
    main()
