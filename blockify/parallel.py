# blockify/parallel.py
from __future__ import annotations

"""
Thread-pool map used by both run phases.

Each item runs to completion on one worker. Results come back to the calling
thread in input order; the first task exception is re-raised there.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, TypeVar

from .utils import default_workers

T = TypeVar("T")
R = TypeVar("R")

THREAD_PREFIX = "blockify"


def _run_named(fn: Callable[[str, T], R], item: T) -> R:
    return fn(threading.current_thread().name, item)


def parallel_map(
    items: Sequence[T],
    workers: Optional[int],
    fn: Callable[[str, T], R],
) -> List[R]:
    """
    Run fn(thread_name, item) for every item on a thread pool.

    Args:
      items: work items
      workers: pool size; None picks default_workers(). Never more threads than items.
      fn: per-item callable receiving the worker's thread name and the item
    Returns:
      results in the same order as items, after every task has finished
    """
    if not items:
        return []
    n_workers = default_workers() if workers is None else max(1, int(workers))
    n_workers = min(n_workers, len(items))
    with ThreadPoolExecutor(
        max_workers=n_workers, thread_name_prefix=THREAD_PREFIX
    ) as ex:
        futures = [ex.submit(_run_named, fn, item) for item in items]
        return [f.result() for f in futures]


__all__ = ["parallel_map", "THREAD_PREFIX"]
