"""Tracer protocol and built-in tracers.

Tracers are opt-in. A chain with no tracer attached runs silently.
Custom tracers implement the Tracer protocol — no base class inheritance required.

Hooks are synchronous. They also fire for chains that never touch an event loop.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Tracer(Protocol):
    """Protocol for chain tracers.

    ``on_step_end`` fires once the step's result has fully settled, so for
    an asynchronous step it fires after the awaited value is known.
    """

    def on_step_start(self, step_name: str, input_data: Any) -> None: ...
    def on_step_end(self, step_name: str, result: Any) -> None: ...
    def on_step_error(self, step_name: str, error: BaseException) -> None: ...


class NullTracer:
    """Default tracer that does nothing. Zero overhead."""

    def on_step_start(self, step_name: str, input_data: Any) -> None:
        pass

    def on_step_end(self, step_name: str, result: Any) -> None:
        pass

    def on_step_error(self, step_name: str, error: BaseException) -> None:
        pass


class StdoutTracer:
    """Simple tracer that prints to stderr. Useful for development.

    Usage:
        c = chain(3, config=ChainConfig(tracer=StdoutTracer(verbose=True)))
    """

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def on_step_start(self, step_name: str, input_data: Any) -> None:
        print(f"  → {step_name}", file=sys.stderr, end="")
        if self.verbose:
            print(f" (input: {_truncate(input_data)})", file=sys.stderr, end="")
        print(file=sys.stderr)

    def on_step_end(self, step_name: str, result: Any) -> None:
        print(f"  ✓ {step_name}", file=sys.stderr, end="")
        if self.verbose:
            print(f" (result: {_truncate(result)})", file=sys.stderr, end="")
        print(file=sys.stderr)

    def on_step_error(self, step_name: str, error: BaseException) -> None:
        print(f"  ✗ {step_name} FAILED: {error}", file=sys.stderr)


class LoggingTracer:
    """Tracer that reports step events through the ``logging`` module.

    Step starts and ends are logged at ``level``; failures are always logged
    at WARNING. The chain re-raises every failure, so nothing is logged as
    an error here.

    Args:
        logger: Logger to use. Defaults to the ``kusari.trace`` logger.
        level: Level for start/end records. Defaults to DEBUG.
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.DEBUG) -> None:
        self.logger = logger or logging.getLogger("kusari.trace")
        self.level = level

    def on_step_start(self, step_name: str, input_data: Any) -> None:
        self.logger.log(self.level, "Step %s started (input: %s)", step_name, _truncate(input_data))

    def on_step_end(self, step_name: str, result: Any) -> None:
        self.logger.log(self.level, "Step %s finished (result: %s)", step_name, _truncate(result))

    def on_step_error(self, step_name: str, error: BaseException) -> None:
        self.logger.warning("Step %s failed: %r", step_name, error)


def _truncate(obj: Any, max_len: int = 80) -> str:
    s = repr(obj)
    return s[:max_len] + "..." if len(s) > max_len else s
