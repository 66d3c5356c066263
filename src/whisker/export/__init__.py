"""Export layer — batched static generation.

Renders every route through a renderer, writes ``<route>/index.html`` files,
and accounts for per-route failures without aborting the run.
"""

from whisker.export.generator import Generator
from whisker.export.report import ErrorCollector, FailureRecord, GenerationReport

__all__ = ["ErrorCollector", "FailureRecord", "GenerationReport", "Generator"]
