"""
Queue adapter for producer/writer decoupling.

A producer thread pushes batches (lists of records) into a bounded queue.Queue; the
writer pulls a flat record iterator from iter_queue(). Back-pressure is the queue's: a
producer blocks in put() while the writer is slower. The producer ends the stream by
putting the sentinel.
"""

from __future__ import annotations

import queue
from collections.abc import Iterable, Iterator
from typing import Any

from tagstream.core.schema import TimeTag


def iter_queue(
    q: queue.Queue[Iterable[TimeTag] | Any],
    sentinel: Any = None,
    *,
    timeout: float | None = None,
) -> Iterator[TimeTag]:
    """
    Yield records from batches taken off a queue until the sentinel arrives.

    Args:
        q: Queue of record batches.
        sentinel: Object marking the end of the stream (compared by identity).
        timeout: Seconds to wait for each batch; None blocks indefinitely.

    Raises:
        queue.Empty: If timeout elapses before the next batch arrives.
    """
    while True:
        batch = q.get(timeout=timeout)
        try:
            if batch is sentinel:
                return
            yield from batch
        finally:
            q.task_done()
