"""Sort integer files with cooperative workers, then merge them.

Each worker takes the next unsorted file and sorts it, handing control to
the other workers whenever its time quota has been used up.
"""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass
from itertools import chain
from typing import Iterable, Iterator, Optional, Sequence

from .coro import Scheduler
from .sorting import SourceFile, load_files, merge_all, next_unsorted

__all__ = ["WorkerStats", "sort_worker", "run", "main"]


def _now_us() -> int:
    return time.monotonic_ns() // 1000


@dataclass
class WorkerStats:
    """Time spent working (microseconds) and switches made by one worker."""

    worktime: int = 0
    switch_count: int = 0


def sort_worker(
    name: str, files: Sequence[SourceFile], quota: int, stats: WorkerStats
) -> Iterator[None]:
    """Sort unclaimed files, yielding whenever ``quota`` microseconds pass.

    Fills ``stats`` as it goes and returns 0 when no unsorted file is left.
    """
    start = _now_us()
    print(f"Started coroutine {name}")
    while (source := next_unsorted(files)) is not None:
        for _ in chain(source.sort(), [None]):
            elapsed = _now_us() - start
            if elapsed >= quota:
                stats.worktime += elapsed
                stats.switch_count += 1
                yield
                start = _now_us()
    stats.worktime += _now_us() - start
    print(f"{name}: switch count {stats.switch_count}")
    print(f"{name}: worktime: {stats.worktime}µs")
    return 0


def run(paths: Iterable[str], coroutine_count: int, latency: int) -> list[int]:
    """Sort every file with ``coroutine_count`` workers and merge the results.

    ``latency`` is the target latency in microseconds; each worker gets an
    equal share of it as its quota. Returns all numbers in sorted order.
    """
    if latency <= 0:
        raise ValueError("T (latency) must be greater than 0")
    if coroutine_count <= 0:
        raise ValueError("N (coroutines) must be greater than 0")
    started = _now_us()
    files = load_files(paths)
    quota = latency // coroutine_count
    print(f"Latency: T={latency}µs")
    print(f"Coroutines: N={coroutine_count}")
    print(f"Quota: T/N={quota}µs")
    print()

    scheduler = Scheduler()
    for index in range(coroutine_count):
        scheduler.spawn(sort_worker, f"coro_{index}", files, quota, WorkerStats())
    for coro in scheduler:
        print(f"Finished {coro.status}")

    result = merge_all(files)
    print(f"\nTime elapsed: {_now_us() - started}µs")
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        description="Sort integer files with cooperative coroutines."
    )
    parser.add_argument("-n", dest="coroutines", type=int, default=0,
                        help="number of coroutines")
    parser.add_argument("-t", dest="latency", type=int, default=0,
                        help="target latency in microseconds")
    parser.add_argument("files", nargs="*")
    args = parser.parse_args(argv)
    try:
        run(args.files, args.coroutines, args.latency)
    except ValueError as err:
        print(err)
        return 1
    except OSError as err:
        print(f"ERROR: couldn't open {err.filename} to read array")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())