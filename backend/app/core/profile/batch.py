# File: backend/app/core/profile/batch.py
# Version: v0.1.0
"""
Ordered parallel map for the per-window phases of a profile run.

- Threads, chunked to keep per-task overhead small.
- Results always come back in input order, so output does not depend on
  the worker count.
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


@dataclass(slots=True)
class BatchOptions:
    """Controls parallelism and chunking."""
    workers: int = 1           # 1 → inline; 0 (or less) → auto = min(32, os.cpu_count() or 1)
    chunk_size: int = 64


def resolve_workers(workers: Optional[int]) -> int:
    if workers is None:
        return 1
    if workers > 0:
        return workers
    return max(1, min(32, os.cpu_count() or 1))


def _chunks(seq: Sequence[T], n: int) -> Iterable[Sequence[T]]:
    if n <= 0:
        n = len(seq) or 1
    for i in range(0, len(seq), n):
        yield seq[i : i + n]


def map_ordered(
    fn: Callable[[T], R],
    items: Iterable[T],
    *,
    options: Optional[BatchOptions] = None,
) -> List[R]:
    """Apply `fn` to every item, preserving order."""
    opts = options or BatchOptions()
    seq = list(items)
    workers = resolve_workers(opts.workers)
    if workers <= 1 or len(seq) <= 1:
        return [fn(x) for x in seq]

    def _run(chunk: Sequence[T]) -> List[R]:
        return [fn(x) for x in chunk]

    out: List[R] = []
    with ThreadPoolExecutor(max_workers=workers) as exe:
        # Executor.map yields in submission order
        for part in exe.map(_run, list(_chunks(seq, opts.chunk_size))):
            out.extend(part)
    return out
