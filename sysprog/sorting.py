"""Integer files, cooperative merge sort and merging of sorted sequences."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import reduce
from typing import Iterable, Iterator, Optional, Sequence, Union

__all__ = [
    "SourceFile",
    "merge",
    "merge_sort",
    "read_numbers",
    "write_numbers",
    "load_files",
    "next_unsorted",
    "merge_all",
]

PathLike = Union[str, "os.PathLike[str]"]


def merge(left: Sequence[int], right: Sequence[int]) -> list[int]:
    """Merge two sorted sequences into a new sorted list.

    On equal values the element of ``right`` is taken first.
    """
    result: list[int] = []
    i = j = 0
    while i < len(left) and j < len(right):
        if left[i] < right[j]:
            result.append(left[i])
            i += 1
        else:
            result.append(right[j])
            j += 1
    result.extend(left[i:])
    result.extend(right[j:])
    return result


def merge_sort(values: list[int]) -> Iterator[None]:
    """Sort ``values`` in place, yielding at every point where work may pause.

    The list is sorted once the generator is exhausted. It pauses after the
    left half of each split is sorted and after each merge.
    """
    if len(values) <= 1:
        return
    middle = len(values) // 2
    left, right = values[:middle], values[middle:]
    yield from merge_sort(left)
    yield
    yield from merge_sort(right)
    values[:] = merge(left, right)
    yield


def read_numbers(path: PathLike) -> list[int]:
    """Read whitespace-separated integers, stopping at the first non-integer."""
    numbers: list[int] = []
    with open(path, encoding="ascii", errors="replace") as stream:
        for token in stream.read().split():
            try:
                numbers.append(int(token))
            except ValueError:
                break
    return numbers


def write_numbers(values: Iterable[int], path: PathLike) -> None:
    """Write integers to ``path``, each followed by a single space."""
    with open(path, "w", encoding="ascii") as stream:
        stream.writelines(f"{value} " for value in values)


@dataclass
class SourceFile:
    """The numbers of one input file and whether sorting has been claimed."""

    name: str
    values: list[int] = field(default_factory=list)
    is_sorted: bool = False

    def sort(self) -> Iterator[None]:
        """Claim this file and return a generator that sorts it in place.

        The file is marked as sorted immediately, so other workers skip it.
        """
        self.is_sorted = True
        return merge_sort(self.values)


def load_files(paths: Iterable[PathLike]) -> list[SourceFile]:
    """Read every path; the most recently read file comes first."""
    files: list[SourceFile] = []
    for path in paths:
        files.insert(0, SourceFile(os.fspath(path), read_numbers(path)))
    return files


def next_unsorted(files: Iterable[SourceFile]) -> Optional[SourceFile]:
    """Return the first file not yet claimed for sorting, or None."""
    return next((f for f in files if not f.is_sorted), None)


def merge_all(files: Iterable[SourceFile]) -> list[int]:
    """Merge the (sorted) numbers of all files into one sorted list."""
    return reduce(lambda acc, f: merge(acc, f.values), files, [])