"""Utility helpers for string normalization, paths and task fan-out."""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Awaitable, Callable, Hashable, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")
H = TypeVar("H", bound=Hashable)

NAMESPACE_PATTERN = re.compile(r"^.+:")
SEPARATOR_PATTERN = re.compile(r"[:/\s&]+")


def wiki_slug(identifier: str) -> str:
    """Generate a filesystem-friendly slug from a wiki page identifier."""
    name = NAMESPACE_PATTERN.sub("", identifier)
    return SEPARATOR_PATTERN.sub("_", name).lower()


def unique_in_order(values: Iterable[H]) -> List[H]:
    """Drop repeated values, keeping the first occurrence of each."""
    seen = set()
    result: List[H] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


def site_path(site_root: Path, relative: str) -> Path:
    """Resolve an output-relative path such as ``/cover/a.png`` under ``site_root``."""
    return site_root / relative.lstrip("/")


async def gather_in_batches(
    factories: Sequence[Callable[[], Awaitable[T]]],
    batch_size: Optional[int] = None,
) -> List[T]:
    """Run coroutine factories in consecutive groups of ``batch_size``.

    Every job in a group runs concurrently and the next group only starts once
    the whole group has finished. ``None`` runs everything as a single group.
    The first failure propagates and later groups are never started.
    """
    if batch_size is not None and batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    size = batch_size or max(len(factories), 1)
    results: List[T] = []
    for start in range(0, len(factories), size):
        batch = factories[start : start + size]
        results.extend(await asyncio.gather(*(factory() for factory in batch)))
    return results
