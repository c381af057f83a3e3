"""Internal type aliases and sentinels used across the engine."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

# Steps can have any signature and may return a plain value or an awaitable.
StepFn = Callable[..., Any]
CoroutineFactory = Callable[[], Awaitable[Any]]


class _Unbound:
    """Marker for "no receiver was bound". ``None`` is a valid receiver."""

    def __repr__(self) -> str:
        return "UNBOUND"


UNBOUND: Any = _Unbound()
