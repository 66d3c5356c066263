"""Failure accounting — per-route failure records and the run report."""

from __future__ import annotations

import json
import traceback
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

type FailureKind = Literal["handled", "unhandled"]

_REPORT_HEADER = "==== Error report ==== \n"


@dataclass(frozen=True, slots=True)
class FailureRecord:
    """A single route failure.

    Attributes:
        kind: ``"handled"`` when the renderer reported the error in its
            result, ``"unhandled"`` when rendering or minification raised.
        route: URL path of the failing route.
        error: The exception (unhandled) or the renderer's error value
            (handled).

    """

    kind: FailureKind
    route: str
    error: Any


@dataclass(frozen=True, slots=True)
class GenerationReport:
    """Result of a generation run.

    Attributes:
        duration: Wall-clock seconds, rounded to one decimal.
        errors: Failure records in the order they were recorded.
        routes: Number of routes attempted.
        output_dir: Absolute path to the output directory.

    """

    duration: float
    errors: tuple[FailureRecord, ...]
    routes: int
    output_dir: Path

    @property
    def ok(self) -> bool:
        return not self.errors


class ErrorCollector:
    """Append-only, order-preserving store of failures for one run."""

    __slots__ = ("_records",)

    def __init__(self) -> None:
        self._records: list[FailureRecord] = []

    def record(self, entry: FailureRecord) -> None:
        self._records.append(entry)

    def all(self) -> tuple[FailureRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FailureRecord]:
        return iter(tuple(self._records))


def describe_error(error: Any) -> str:
    """One-line description of a failure's error, for progress output."""
    if isinstance(error, BaseException):
        return f"{type(error).__name__}: {error}"
    return _to_json(error)


def format_failure(record: FailureRecord) -> str:
    if record.kind == "unhandled":
        return f"Route: '{record.route}'\n{_format_exception(record.error)}"
    return f"Route: '{record.route}' thrown an error: \n" + _to_json(record.error)


def format_report(errors: Sequence[FailureRecord]) -> str:
    """Render all failures as one diagnostic block.

    Unhandled failures show the traceback, handled failures the renderer's
    error serialized as JSON.  Returns ``""`` when there are no failures.

    """
    if not errors:
        return ""
    return _REPORT_HEADER + "\n\n".join(format_failure(record) for record in errors)


def _format_exception(error: Any) -> str:
    if isinstance(error, BaseException):
        return "".join(traceback.format_exception(error)).rstrip("\n")
    return str(error)


def _to_json(value: Any) -> str:
    return json.dumps(value, default=str)
