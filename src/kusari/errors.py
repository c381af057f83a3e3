"""Engine-specific exceptions. Minimal set — step exceptions pass through unmodified."""

from __future__ import annotations

from typing import Any


class KusariError(Exception):
    """Base exception for all Kusari errors."""

    pass


class NotCallableError(KusariError, TypeError):
    """Raised when step application receives something that cannot be called.

    This is a misuse error: it is raised immediately, even when the chain
    is pending.

    Attributes:
        target: The object that was passed instead of a callable.
    """

    def __init__(self, target: Any) -> None:
        self.target = target
        super().__init__(
            f"Chain step requires a callable, got {type(target).__name__}: {target!r}"
        )
