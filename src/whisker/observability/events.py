"""Event model for generation runs.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

"""

import time
from dataclasses import dataclass
from typing import Literal

type Step = Literal[
    "ready", "build", "clean", "copy", "resolve_routes", "render", "nojekyll",
]


@dataclass(frozen=True, slots=True)
class StepCompleted:
    """An orchestration step finished.

    Attributes:
        step: Which step of the run completed.
        detail: Free-form description (paths copied, route counts, ...).
        duration_ms: Time taken in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    step: Step
    detail: str
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RouteWritten:
    """A route was rendered and written to disk.

    Attributes:
        route: URL path of the route.
        output_path: Filesystem path of the written file.
        size_bytes: Size of the written file.
        duration_ms: Time from render start to write completion.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    route: str
    output_path: str
    size_bytes: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RouteFailed:
    """A route failed to render or minify.

    Attributes:
        route: URL path of the route.
        kind: ``"handled"`` if the renderer reported the error itself,
            ``"unhandled"`` if an exception escaped.
        message: One-line description of the error.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    route: str
    kind: Literal["handled", "unhandled"]
    message: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class BatchCompleted:
    """Every route of one batch settled."""

    index: int
    size: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RunAborted:
    """A step failed outside any single route and the run stopped.

    Attributes:
        step: The step that failed.
        message: One-line description of the error.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    step: Step
    message: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class GenerationFinished:
    """A generation run completed.

    Attributes:
        routes: Number of routes attempted.
        errors: Number of failure records.
        duration_s: Wall-clock duration in seconds.
        report: Formatted error report, empty when there were no errors.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    routes: int
    errors: int
    duration_s: float
    report: str
    timestamp_ns: int


type GenerationEvent = (
    StepCompleted
    | RouteWritten
    | RouteFailed
    | BatchCompleted
    | RunAborted
    | GenerationFinished
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
