"""Batch scheduling — bounded, staggered concurrent processing of routes.

Routes are processed in sequential batches of ``batch_size``.  Inside a
batch every route runs concurrently, but route ``i`` waits
``i * interval`` milliseconds before starting, which caps the request rate
against the renderer without capping concurrency::

    batch 1: /a (t=0)  /b (t=interval)  /c (t=2*interval)
    batch 2: starts once every route of batch 1 has settled

"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from whisker.observability.collector import GenerationCollector

DEFAULT_BATCH_SIZE = 500


async def run_batches[T](
    items: Sequence[T],
    process: Callable[[T], Awaitable[object]],
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    interval: float = 0.0,
    collector: GenerationCollector | None = None,
) -> int:
    """Process every item exactly once, one batch at a time.

    Args:
        items: Work list, processed in order.
        process: Coroutine function handling one item.  It is expected to
            contain its own failures; anything it raises cancels the rest of
            the batch and aborts the run.
        batch_size: Maximum number of items in flight at once.
        interval: Stagger between item starts within a batch, in
            milliseconds.
        collector: Receives a ``BatchCompleted`` event per batch.

    Returns:
        Number of batches run.

    Raises:
        ValueError: If *batch_size* is less than 1 or *interval* negative.

    """
    if batch_size < 1:
        msg = f"batch_size must be at least 1, got {batch_size}"
        raise ValueError(msg)
    if interval < 0:
        msg = f"interval must not be negative, got {interval}"
        raise ValueError(msg)

    batches = 0
    for start in range(0, len(items), batch_size):
        batch = items[start:start + batch_size]
        t0 = time.perf_counter()

        # The first failure cancels the rest of the batch before it propagates
        try:
            async with asyncio.TaskGroup() as group:
                for index, item in enumerate(batch):
                    group.create_task(_staggered(process, item, index * interval))
        except ExceptionGroup as exc_group:
            raise exc_group.exceptions[0] from None

        if collector is not None:
            collector.record_batch(
                batches, len(batch), duration_ms=(time.perf_counter() - t0) * 1000,
            )
        batches += 1

    return batches


async def _staggered[T](
    process: Callable[[T], Awaitable[object]],
    item: T,
    delay_ms: float,
) -> None:
    if delay_ms > 0:
        await asyncio.sleep(delay_ms / 1000)
    await process(item)
