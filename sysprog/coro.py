"""Cooperative coroutine scheduler built on generators.

A coroutine is a generator function; each bare ``yield`` inside it hands
control to the next coroutine. The scheduler runs coroutines in rounds,
newest first, and hands back finished coroutines one at a time.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Iterator, Optional

__all__ = ["Coroutine", "Scheduler"]


class Coroutine:
    """One scheduled unit of work and its bookkeeping."""

    def __init__(self, func: Callable[..., Any], args: tuple = ()) -> None:
        self.func = func
        self.args = args
        self.status: Any = None
        self.switch_count = 0
        self.is_finished = False
        self._gen: Optional[Iterator[Any]] = None
        self._started = False

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", repr(self.func))
        return (
            f"Coroutine({name}, finished={self.is_finished}, "
            f"switches={self.switch_count})"
        )

    def _finish(self, value: Any) -> None:
        self.status = value
        self.is_finished = True

    def _step(self) -> bool:
        """Run until the next switch; return True once the coroutine is done."""
        if not self._started:
            self._started = True
            result = self.func(*self.args)
            if not inspect.isgenerator(result):
                self._finish(result)
                return True
            self._gen = result
        try:
            next(self._gen)
        except StopIteration as stop:
            self._finish(stop.value)
            return True
        self.switch_count += 1
        return False


class Scheduler:
    """Runs coroutines cooperatively and collects the finished ones."""

    def __init__(self) -> None:
        self._coros: list[Coroutine] = []
        self.current: Optional[Coroutine] = None

    def __len__(self) -> int:
        return len(self._coros)

    def spawn(self, func: Callable[..., Any], *args: Any) -> Coroutine:
        """Add a coroutine; it does not start until the scheduler waits."""
        coro = Coroutine(func, args)
        self._coros.insert(0, coro)
        return coro

    def wait(self) -> Optional[Coroutine]:
        """Run coroutines until one finishes and return it.

        Returns None when there are no coroutines left. An exception raised
        by a coroutine removes it and propagates to the caller.
        """
        while self._coros:
            for coro in self._coros:
                if coro.is_finished:
                    self._coros.remove(coro)
                    return coro
            for coro in list(self._coros):
                self.current = coro
                try:
                    done = coro._step()
                except BaseException:
                    coro.is_finished = True
                    self._coros.remove(coro)
                    self.current = None
                    raise
                if done:
                    break
            self.current = None
        return None

    def __iter__(self) -> Iterator[Coroutine]:
        """Yield coroutines as they finish until none are left."""
        while (coro := self.wait()) is not None:
            yield coro