"""Bounded-concurrency batch execution."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split items into consecutive chunks of at most ``size`` elements."""
    if size < 1:
        raise ValueError("Batch size must be at least 1")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


class BatchExecutor:
    """Runs work items batch by batch, each batch fully concurrent.

    Workers return values; results are aggregated in item order after every
    batch has been joined, so workers never share mutable state.
    """

    def __init__(self, batch_size: int = 50, pause_seconds: float = 0.1) -> None:
        """Initialize the executor.

        Args:
            batch_size: Maximum number of concurrent workers per batch.
            pause_seconds: Pause between consecutive batches.
        """
        if batch_size < 1:
            raise ValueError("Batch size must be at least 1")
        self.batch_size = batch_size
        self.pause_seconds = pause_seconds

    async def run(
        self,
        items: Sequence[T],
        worker: Callable[[T], Awaitable[R]],
        should_continue: Callable[[], bool] | None = None,
        on_batch_done: Callable[[int, int], None] | None = None,
    ) -> list[R]:
        """Run ``worker`` over all items.

        Args:
            items: Work items.
            worker: Coroutine function applied to each item.
            should_continue: Checked before each batch after the first; a
                False result stops processing.
            on_batch_done: Called with (processed, total) after each batch.

        Returns:
            Results of the processed items in item order.
        """
        batches = chunked(items, self.batch_size)
        total = len(items)
        results: list[R] = []

        for index, batch in enumerate(batches):
            if index > 0 and should_continue is not None and not should_continue():
                logger.info(f"Batch processing cancelled after {len(results)}/{total} items")
                break

            batch_results = await asyncio.gather(*(worker(item) for item in batch))
            results.extend(batch_results)

            processed = min((index + 1) * self.batch_size, total)
            if on_batch_done is not None:
                on_batch_done(processed, total)

            if index < len(batches) - 1 and self.pause_seconds > 0:
                await asyncio.sleep(self.pause_seconds)

        return results
