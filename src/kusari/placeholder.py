"""Placeholders — mark where the in-flight value goes in a step's arguments.

    chain(16)(divide, slot, 8)          # divide(16, 8)
    chain(3)(pow, slot, slot)           # pow(3, 3)
    chain(resp)(print, slot.result)     # print(resp.result)

``slot`` is a single shared, immutable object. Attribute and item access on
it builds a new ``Slot`` describing a path into the value; nothing is read
until the step actually runs.

``Slot`` deliberately has no public methods, so any name can be used as a
path segment. Resolution lives in the module-level functions below.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any, NamedTuple


class Segment(NamedTuple):
    """One step of a placeholder path."""

    key: Any
    is_item: bool = False

    def __repr__(self) -> str:
        return f"[{self.key!r}]" if self.is_item else f".{self.key}"


class Slot:
    """A placeholder for the in-flight value, optionally followed by a path."""

    __slots__ = ("_path",)
    __iter__ = None  # type: ignore[assignment]

    def __init__(self, path: tuple[Segment, ...] = ()) -> None:
        object.__setattr__(self, "_path", path)

    def __getattr__(self, name: str) -> Slot:
        # Keep dunder lookups (copy, pickle, introspection) out of the path.
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return Slot(self._path + (Segment(name),))

    def __getitem__(self, key: Any) -> Slot:
        return Slot(self._path + (Segment(key, is_item=True),))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Slot is immutable")

    def __copy__(self) -> Slot:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Slot:
        return self

    def __repr__(self) -> str:
        return "slot" + "".join(repr(s) for s in self._path)


slot = Slot()


def slot_path(placeholder: Slot) -> tuple[Segment, ...]:
    """The segments recorded on ``placeholder``."""

    return placeholder._path


def get_member(obj: Any, name: str) -> Any:
    """Read ``name`` off ``obj``: attribute first, then mapping key.

    Raises:
        AttributeError: If ``obj`` has neither.
    """

    try:
        return getattr(obj, name)
    except AttributeError:
        if isinstance(obj, Mapping) and name in obj:
            return obj[name]
        raise


def resolve_slot(placeholder: Slot, value: Any) -> Any:
    """Apply the path of ``placeholder`` to ``value``. Missing members yield None.

    Only a member that does not exist counts as missing. An error raised by
    an existing property or ``__getitem__`` propagates.
    """

    for segment in placeholder._path:
        if segment.is_item:
            if not hasattr(type(value), "__getitem__"):
                return None
            try:
                value = value[segment.key]
            except (KeyError, IndexError):
                return None
        else:
            try:
                value = get_member(value, segment.key)
            except AttributeError:
                if _has_static_member(value, segment.key):
                    raise
                return None
    return value


def _has_static_member(obj: Any, name: str) -> bool:
    try:
        inspect.getattr_static(obj, name)
    except AttributeError:
        return False
    return True


def has_slots(args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> bool:
    """Whether any argument is a placeholder."""

    return any(isinstance(a, Slot) for a in args) or any(
        isinstance(v, Slot) for v in kwargs.values()
    )


def resolve_args(
    args: tuple[Any, ...],
    kwargs: Mapping[str, Any],
    value: Any,
) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """Replace every placeholder in ``args``/``kwargs`` with ``value`` (or a path into it).

    Each occurrence is resolved independently. Non-placeholder arguments
    pass through untouched.
    """

    def sub(arg: Any) -> Any:
        return resolve_slot(arg, value) if isinstance(arg, Slot) else arg

    return tuple(sub(a) for a in args), {k: sub(v) for k, v in kwargs.items()}
