"""Generate random integer files and k-way merge sorted integer files."""

from __future__ import annotations

import heapq
import os
import random
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Union

from .sorting import read_numbers, write_numbers

__all__ = ["RAND_MAX", "generate_files", "kway_merge", "merge_files"]

RAND_MAX = 2**31 - 1

PathLike = Union[str, "os.PathLike[str]"]


def generate_files(
    directory: PathLike,
    count: int = 10,
    numbers_per_file: int = 16384,
    seed: Optional[int] = None,
) -> list[Path]:
    """Write ``count`` files named ``file<i>.dat`` of random non-negative ints.

    Values lie in ``[0, RAND_MAX]``. Returns the written paths in order.
    """
    rng = random.Random(seed)
    base = Path(directory)
    paths: list[Path] = []
    for index in range(count):
        path = base / f"file{index}.dat"
        write_numbers(
            (rng.randint(0, RAND_MAX) for _ in range(numbers_per_file)), path
        )
        paths.append(path)
    return paths


def kway_merge(sources: Iterable[Iterable[int]]) -> Iterator[int]:
    """Lazily merge any number of sorted integer sequences."""
    yield from heapq.merge(*sources)


def merge_files(paths: Sequence[PathLike], output: PathLike) -> int:
    """Merge sorted integer files into ``output``; return the number written."""
    merged = list(kway_merge(read_numbers(path) for path in paths))
    write_numbers(merged, output)
    return len(merged)