"""Generation collector — the observer the generator reports through.

Records structured events in an :class:`EventLog`.  With ``verbose=True``
it also echoes progress lines and the error report to stderr, which is the
only console output a generation run produces.

"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Literal, TextIO

from whisker.observability.events import (
    BatchCompleted,
    GenerationFinished,
    RouteFailed,
    RouteWritten,
    RunAborted,
    StepCompleted,
    now_ns,
)
from whisker.observability.log import EventLog

if TYPE_CHECKING:
    from whisker.observability.events import Step


class GenerationCollector:
    """Event sink for one or more generation runs.

    Args:
        log: The EventLog to store events in.
        verbose: Echo events to *stream*.
        stream: Where verbose output goes (defaults to ``sys.stderr``).

    """

    __slots__ = ("_log", "_stream", "_verbose")

    def __init__(
        self,
        log: EventLog | None = None,
        *,
        verbose: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self._log = log if log is not None else EventLog()
        self._verbose = verbose
        self._stream = stream

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_step(self, step: Step, detail: str = "", *, duration_ms: float = 0.0) -> None:
        self._log.append(StepCompleted(
            step=step, detail=detail, duration_ms=duration_ms, timestamp_ns=now_ns(),
        ))
        if detail:
            self._echo(f"  {step}: {detail}")

    def record_route(
        self,
        route: str,
        output_path: str,
        *,
        size_bytes: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        self._log.append(RouteWritten(
            route=route,
            output_path=output_path,
            size_bytes=size_bytes,
            duration_ms=duration_ms,
            timestamp_ns=now_ns(),
        ))

    def record_failure(
        self,
        route: str,
        kind: Literal["handled", "unhandled"],
        message: str,
    ) -> None:
        self._log.append(RouteFailed(
            route=route, kind=kind, message=message, timestamp_ns=now_ns(),
        ))
        self._echo(f"  ✗ {route} ({kind}): {message}")

    def record_batch(self, index: int, size: int, *, duration_ms: float = 0.0) -> None:
        self._log.append(BatchCompleted(
            index=index, size=size, duration_ms=duration_ms, timestamp_ns=now_ns(),
        ))
        self._echo(f"  batch {index + 1}: {size} routes in {duration_ms:.0f}ms")

    def record_abort(self, step: Step, message: str) -> None:
        """Record a fatal failure that stops the run."""
        self._log.append(RunAborted(step=step, message=message, timestamp_ns=now_ns()))
        self._echo(f"  ✗ {step} failed: {message}")

    def record_finished(
        self,
        *,
        routes: int,
        errors: int,
        duration_s: float,
        report: str = "",
    ) -> None:
        """Record the end of a run and echo the error report, if any."""
        self._log.append(GenerationFinished(
            routes=routes,
            errors=errors,
            duration_s=duration_s,
            report=report,
            timestamp_ns=now_ns(),
        ))
        self._echo(f"  HTML files generated in {duration_s}s")
        if report:
            self._echo(report)

    def _echo(self, line: str) -> None:
        if self._verbose:
            print(line, file=self._stream or sys.stderr)
