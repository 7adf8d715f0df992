"""Helpers for splitting work over thread pools."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from concurrent.futures import Executor
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


def default_parallelism() -> int:
    """Worker count leaving one core to the coordinating thread."""
    return max(1, (os.cpu_count() or 1) - 1)


def row_threshold(size: int, parallelism: int) -> int:
    """Maximum rows per matrix work item for *size* languages."""
    return max(1, min(5, size // (parallelism * 2)))


def split_range(start: int, end: int, threshold: int) -> list[tuple[int, int]]:
    """Halve ``[start, end)`` recursively until each piece has at most *threshold* rows.

    Pieces are returned in ascending order, are disjoint and cover the range.
    """
    if end - start <= threshold:
        return [(start, end)] if end > start else []
    mid = start + (end - start) // 2
    return split_range(start, mid, threshold) + split_range(mid, end, threshold)


def chunk_evenly(items: Sequence[T], parts: int) -> list[Sequence[T]]:
    """Cut *items* into at most *parts* contiguous slices of near-equal size."""
    if not items:
        return []
    parts = max(1, min(parts, len(items)))
    step, extra = divmod(len(items), parts)
    slices: list[Sequence[T]] = []
    pos = 0
    for i in range(parts):
        size = step + (1 if i < extra else 0)
        slices.append(items[pos:pos + size])
        pos += size
    return slices


def ordered_map(
    func: Callable[[T], R],
    items: Sequence[T],
    executor: Executor | None,
) -> list[R]:
    """Apply *func* to every item, on *executor* when given, keeping input order.

    Results are collected in submission order so any reduction over them is
    independent of thread scheduling.
    """
    if executor is None or len(items) <= 1:
        return [func(item) for item in items]
    futures = [executor.submit(func, item) for item in items]
    return [f.result() for f in futures]
