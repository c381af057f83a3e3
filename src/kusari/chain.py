"""Chain — the deferred function-composition engine.

A Chain holds the current value of a computation and lets callers keep
applying steps to it. Each step's output becomes the next step's input:

    chain(1)(add, 1)(double)(square)(divide, slot, 8)(add, 1)()   # -> 3

If any step returns an awaitable, the chain switches to the pending state and
every later step runs after that awaitable settles. The caller writes the
same chain either way; only the final read-out has to be awaited.

CRITICAL DESIGN DECISIONS:
  1. Controllers are immutable snapshots. Applying a step returns a new Chain
     and never changes the one it was applied to, so branching is safe.
  2. Pending is terminal. Once a step produced an awaitable, every derived
     Chain is pending, even if later steps are plain functions.
  3. Step exceptions are NEVER wrapped. Whatever a step raises is what the
     caller sees, synchronously while settled, on await once pending.
  4. Reserved names (pipe, bind, then, catch, value, is_pending, config) are
     real attributes and always win. Any other public name is forwarded to
     the current value.
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Generator
from typing import Any

from kusari._types import UNBOUND, StepFn
from kusari.config import DEFAULT, ChainConfig
from kusari.errors import NotCallableError
from kusari.placeholder import get_member, has_slots, resolve_args, slot
from kusari.state import Pending, Settled, State, unwrap
from kusari.tracer import NullTracer, Tracer

logger = logging.getLogger(__name__)

_UNTRACED = NullTracer()


class Chain:
    """The continuation surface of a chain.

    Usage:
        c = chain(5)
        c = c(add, 1)               # add(1, 5): the value goes last by default
        c = c.pipe(divide, slot, 2) # divide(6, 2): slot marks the position
        c.value                     # 3.0

        # Any other attribute is forwarded to the current value:
        chain(" hi ").strip().upper().value   # "HI"

    Attributes:
        value: Current value if settled; otherwise this chain (await it).
        is_pending: True once any step has produced an awaitable.
        config: The ChainConfig shared by every controller of this chain.
    """

    # __getitem__ must not make chains look iterable.
    __iter__ = None  # type: ignore[assignment]

    def __init__(
        self,
        state: State,
        *,
        receiver: Any = UNBOUND,
        config: ChainConfig = DEFAULT,
    ) -> None:
        self._state = state
        self._receiver = receiver
        self._config = config

    # --- Read-out ---

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """``c()`` reads the value out; ``c(fn, *args)`` applies a step."""

        if not args and not kwargs:
            return self.value
        return self.pipe(*args, **kwargs)

    @property
    def value(self) -> Any:
        if isinstance(self._state, Settled):
            return self._state.value
        return self

    @property
    def is_pending(self) -> bool:
        return isinstance(self._state, Pending)

    @property
    def config(self) -> ChainConfig:
        return self._config

    def __await__(self) -> Generator[Any, None, Any]:
        return self._state.__await__()

    # --- Step application ---

    def pipe(self, fn: StepFn, /, *args: Any, **kwargs: Any) -> Chain:
        """Apply ``fn`` to the current value and return the resulting chain.

        If no argument is a placeholder, the current value is appended as the
        last positional argument. Otherwise each placeholder is replaced by
        the value (or the path into it that the placeholder names).

        Raises:
            NotCallableError: If ``fn`` is not callable (raised immediately,
                even on a pending chain).
        """

        if not callable(fn):
            raise NotCallableError(fn)

        receiver = self._receiver
        explicit = has_slots(args, kwargs)

        def invoke(value: Any) -> Any:
            if explicit:
                call_args, call_kwargs = resolve_args(args, kwargs, value)
            else:
                call_args, call_kwargs = args + (value,), dict(kwargs)
            return call_with_receiver(fn, call_args, call_kwargs, receiver)

        return self._step(_step_name(fn), invoke)

    def __rshift__(self, fn: StepFn) -> Chain:
        """``c >> fn`` is ``c.pipe(fn)``."""
        return self.pipe(fn)

    def __getitem__(self, key: Any) -> Chain:
        return self._step(f"[{key!r}]", lambda value: value[key])

    def bind(self, receiver: Any) -> Chain:
        """Use ``receiver`` as the receiver of the next step only.

        A bound method is re-bound to ``receiver``; any other callable gets
        ``receiver`` as its first positional argument.
        """

        return Chain(self._state, receiver=receiver, config=self._config)

    # --- Promise-shaped continuations ---

    def then(
        self,
        on_fulfilled: Callable[[Any], Any] | None = None,
        on_rejected: Callable[[Exception], Any] | None = None,
    ) -> Chain:
        """Continue with callbacks, like an awaitable's completion handlers.

        Always returns a pending chain, even when this one is settled: the
        callbacks run when the result is awaited (or on the running loop),
        never inline. An exception raised by ``on_fulfilled`` is not passed
        to ``on_rejected``.
        """

        for callback in (on_fulfilled, on_rejected):
            if callback is not None and not callable(callback):
                raise NotCallableError(callback)

        state = self._state

        async def settle() -> Any:
            try:
                value = await state
            except Exception as exc:
                if on_rejected is None:
                    raise
                return await unwrap(on_rejected(exc))
            if on_fulfilled is None:
                return value
            return await unwrap(on_fulfilled(value))

        return self._derive(Pending(settle, eager=self._config.eager))

    def catch(self, on_rejected: Callable[[Exception], Any]) -> Chain:
        """Recover from a failure anywhere earlier in the chain."""
        return self.then(None, on_rejected)

    # --- Forwarding ---

    def __getattr__(self, name: str) -> Forwarded:
        # Private and dunder names are never forwarded.
        if name.startswith("_"):
            raise AttributeError(name)
        # The read itself is not a traced step; calling it is.
        read = self._step(f".{name}", lambda value: get_member(value, name), eager=False, traced=False)
        return Forwarded(read._state, owner=self, name=name)

    # --- Internals ---

    def _derive(self, state: State) -> Chain:
        return Chain(state, config=self._config)

    def _step(
        self,
        name: str,
        invoke: Callable[[Any], Any],
        *,
        eager: bool | None = None,
        traced: bool = True,
    ) -> Chain:
        """Run ``invoke`` on the current value and wrap the outcome in a new Chain."""

        tracer = self._config.tracer if traced else _UNTRACED
        if eager is None:
            eager = self._config.eager

        if isinstance(self._state, Settled):
            value = self._state.value
            tracer.on_step_start(name, value)
            try:
                result = invoke(value)
            except Exception as e:
                tracer.on_step_error(name, e)
                raise

            if not inspect.isawaitable(result):
                tracer.on_step_end(name, result)
                return self._derive(Settled(result))

            logger.debug("Chain entered pending state at step %s", name)
            return self._derive(Pending(functools.partial(_finish, name, result, tracer), eager=eager))

        previous = self._state

        async def run() -> Any:
            value = await previous
            tracer.on_step_start(name, value)
            try:
                result = invoke(value)
            except Exception as e:
                tracer.on_step_error(name, e)
                raise
            return await _finish(name, result, tracer)

        return self._derive(Pending(run, eager=eager))

    def __repr__(self) -> str:
        return f"Chain({self._state!r})"


class Forwarded(Chain):
    """Attribute ``name`` of another chain's value.

    As a chain it continues with the attribute's value. Calling it calls the
    attribute as a method on the owning value:

        chain(obj).total            # continues with obj.total
        chain(obj).scale(2, slot)   # continues with obj.scale(2, obj)

    Placeholders in the call arguments resolve against the owning value and
    no implicit argument is appended. A zero-argument call on an attribute
    that is not callable reads it out, like ``c()`` on any chain:

        chain(Point(1, 2)).x()      # 1
    """

    def __init__(self, state: State, *, owner: Chain, name: str) -> None:
        super().__init__(state, config=owner._config)
        self._owner_state = owner._state
        self._owner_receiver = owner._receiver
        self._name = name

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        name = self._name
        receiver = self._owner_receiver
        read = self._state
        read_out = not args and not kwargs

        if read_out and isinstance(read, Settled) and not callable(read.value):
            return read.value

        def invoke(value: Any) -> Any:
            method = read.value if isinstance(read, Settled) else get_member(value, name)
            if not callable(method):
                if read_out:
                    return method
                raise NotCallableError(method)
            call_args, call_kwargs = resolve_args(args, kwargs, value)
            return call_with_receiver(method, call_args, call_kwargs, receiver)

        owner = Chain(self._owner_state, config=self._config)
        return owner._step(f".{name}()", invoke)


async def _finish(name: str, result: Any, tracer: Tracer) -> Any:
    try:
        value = await unwrap(result)
    except Exception as e:
        tracer.on_step_error(name, e)
        raise
    tracer.on_step_end(name, value)
    return value


def call_with_receiver(
    fn: StepFn,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    receiver: Any = UNBOUND,
) -> Any:
    """Call ``fn``, using ``receiver`` as its receiver when one was bound."""

    if receiver is UNBOUND:
        return fn(*args, **kwargs)

    func = getattr(fn, "__func__", None)
    if func is not None:
        return func(receiver, *args, **kwargs)

    owner = getattr(fn, "__self__", None)
    if inspect.isbuiltin(fn) and owner is not None and not inspect.ismodule(owner):
        return getattr(type(owner), fn.__name__)(receiver, *args, **kwargs)

    return fn(receiver, *args, **kwargs)


def _step_name(fn: StepFn) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)


def chain(value: Any, /, *, config: ChainConfig = DEFAULT) -> Chain:
    """Start a chain at ``value``.

    An awaitable start value puts the chain straight into the pending state;
    it is awaited (and flattened) before the first step runs.

    Args:
        value: The start value.
        config: Tracer and scheduling options, shared by every derived chain.

    ``chain.slot`` is the shared placeholder (same object as ``kusari.slot``).
    """

    if inspect.isawaitable(value):
        logger.debug("Chain started in pending state")
        return Chain(Pending(functools.partial(unwrap, value), eager=config.eager), config=config)
    return Chain(Settled(value), config=config)


chain.slot = slot  # type: ignore[attr-defined]
