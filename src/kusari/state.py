"""Settled / Pending — the two states a chain's current value can be in.

``Settled`` holds a known value. ``Pending`` holds a computation that has not
finished yet. Both are awaitable, so code that consumes a chain can always
``await`` without checking which one it has.

CRITICAL DESIGN DECISIONS:
  1. A Pending computation runs at most once. The coroutine is wrapped in a
     single asyncio Task that every awaiter shares, so reading a chain twice
     or branching two continuations off it never re-runs a step.
  2. No event loop is needed to build a chain. If a loop is running the task
     is scheduled right away; otherwise it is created on the first await.
  3. Once the task exists the factory is dropped. A finished Pending keeps no
     reference to the computation that produced it.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Generator
from typing import Any

from kusari._types import CoroutineFactory


class Settled:
    """A value that is already known.

    Attributes:
        value: The value itself. Never awaitable.
    """

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __await__(self) -> Generator[Any, None, Any]:
        return self.value
        yield  # pragma: no cover - makes this a generator without suspending

    def __repr__(self) -> str:
        return f"Settled({self.value!r})"


class Pending:
    """A value that will be known once ``factory()`` has completed.

    Args:
        factory: Zero-argument callable returning the coroutine to run.
        eager: Schedule the coroutine immediately if an event loop is running.
    """

    __slots__ = ("_factory", "_task")

    def __init__(self, factory: CoroutineFactory, *, eager: bool = True) -> None:
        self._factory: CoroutineFactory | None = factory
        self._task: asyncio.Future[Any] | None = None
        if eager and _loop_is_running():
            self.schedule()

    def schedule(self) -> asyncio.Future[Any]:
        """Start the computation (once) and return the shared task."""

        if self._task is None:
            self._task = asyncio.ensure_future(self._factory())  # type: ignore[misc]
            self._factory = None
        return self._task

    @property
    def scheduled(self) -> bool:
        return self._task is not None

    def done(self) -> bool:
        return self._task is not None and self._task.done()

    def __await__(self) -> Generator[Any, None, Any]:
        return self.schedule().__await__()

    def __repr__(self) -> str:
        if self._task is None:
            return "Pending(<not scheduled>)"
        if not self._task.done():
            return "Pending(<running>)"
        if self._task.cancelled():
            return "Pending(<cancelled>)"
        if self._task.exception() is not None:
            return f"Pending(<failed: {self._task.exception()!r}>)"
        return f"Pending(<done: {self._task.result()!r}>)"


State = Settled | Pending


async def unwrap(value: Any) -> Any:
    """Await ``value`` until what remains is not awaitable.

    Flattens awaitables of awaitables, including chains returned by steps.
    """

    while inspect.isawaitable(value):
        value = await value
    return value


def _loop_is_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True
