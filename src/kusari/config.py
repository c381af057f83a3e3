"""Chain configuration.

Configuration is attached once, at the entry point, and every controller
derived from that chain carries the same config object.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from kusari.tracer import NullTracer, Tracer


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for chain execution.

    Attributes:
        tracer: Receives step start/end/error events. Default: NullTracer (silent).
        eager: If True, pending steps are scheduled on the running event loop as
               soon as they are chained. If False (or when no loop is running),
               they are scheduled the first time the chain is awaited. Default True.
    """

    tracer: Tracer = field(default_factory=NullTracer)
    eager: bool = True


# Predefined configs for convenience
DEFAULT = ChainConfig()
LAZY = ChainConfig(eager=False)
