"""Generation observability — structured events instead of console output.

The generator never prints.  It reports progress, per-route failures, and
the final error report through a :class:`GenerationCollector`, which stores
frozen events in an :class:`EventLog` and optionally echoes them to stderr.

Quick Start:
    >>> from whisker.observability import EventLog, GenerationCollector
    >>> collector = GenerationCollector(EventLog(), verbose=True)
    >>> # Pass collector to Generator(..., collector=collector)

"""

from whisker.observability.collector import GenerationCollector
from whisker.observability.events import (
    BatchCompleted,
    GenerationEvent,
    GenerationFinished,
    RouteFailed,
    RouteWritten,
    RunAborted,
    StepCompleted,
    now_ns,
)
from whisker.observability.log import EventLog

__all__ = [
    "BatchCompleted",
    "EventLog",
    "GenerationCollector",
    "GenerationEvent",
    "GenerationFinished",
    "RouteFailed",
    "RouteWritten",
    "RunAborted",
    "StepCompleted",
    "now_ns",
]
