"""Kusari — deferred function composition that doesn't care about async.

Build a chain once; await it only if something in it was asynchronous.
"""

from kusari.chain import Chain, Forwarded, chain
from kusari.config import DEFAULT, LAZY, ChainConfig
from kusari.errors import KusariError, NotCallableError
from kusari.placeholder import Slot, slot
from kusari.state import Pending, Settled
from kusari.tracer import LoggingTracer, NullTracer, StdoutTracer, Tracer

__version__ = "0.1.0"

__all__ = [
    "chain",
    "Chain",
    "Forwarded",
    "slot",
    "Slot",
    "Settled",
    "Pending",
    "ChainConfig",
    "DEFAULT",
    "LAZY",
    "Tracer",
    "NullTracer",
    "StdoutTracer",
    "LoggingTracer",
    "KusariError",
    "NotCallableError",
]
