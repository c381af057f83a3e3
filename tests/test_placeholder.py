from __future__ import annotations

import copy

import pytest

from kusari import chain, slot
from kusari.placeholder import (
    Segment,
    Slot,
    get_member,
    has_slots,
    resolve_args,
    resolve_slot,
    slot_path,
)
from tests.conftest import Point


def test_slot_is_shared() -> None:
    assert chain.slot is slot
    assert slot_path(slot) == ()


def test_path_is_recorded_in_order() -> None:
    path = slot_path(slot.result.info["name"])
    assert path == (Segment("result"), Segment("info"), Segment("name", is_item=True))


def test_building_a_path_does_not_change_slot() -> None:
    _ = slot.result
    assert slot_path(slot) == ()


def test_slot_is_immutable() -> None:
    with pytest.raises(AttributeError):
        slot.result = 1  # type: ignore[misc]


def test_dunder_names_are_not_path_segments() -> None:
    assert not hasattr(slot, "__wrapped__")


def test_copies_are_the_same_object() -> None:
    placeholder = slot.result
    assert copy.copy(placeholder) is placeholder
    assert copy.deepcopy([placeholder])[0] is placeholder


def test_slot_repr() -> None:
    assert repr(slot) == "slot"
    assert repr(slot.a[0]) == "slot.a[0]"


def test_resolve_bare_slot() -> None:
    value = object()
    assert resolve_slot(slot, value) is value


def test_resolve_path_on_mapping() -> None:
    assert resolve_slot(slot.result, {"result": 6, "info": "x"}) == 6


def test_resolve_path_on_attributes_and_items() -> None:
    data = {"points": [Point(1, 2), Point(3, 4)]}
    assert resolve_slot(slot["points"][1].y, data) == 4


def test_resolve_missing_segment_yields_none() -> None:
    assert resolve_slot(slot.missing, {"result": 6}) is None
    assert resolve_slot(slot.x.missing.deeper, Point(1, 2)) is None
    assert resolve_slot(slot[5], [1, 2]) is None
    assert resolve_slot(slot["k"], 42) is None


def test_method_names_are_plain_segments() -> None:
    assert resolve_slot(slot.resolve, {"resolve": 1}) == 1
    assert resolve_slot(slot.path, {"path": "/tmp"}) == "/tmp"


def test_get_member_prefers_attributes() -> None:
    assert callable(get_member({"keys": 1}, "keys"))
    assert get_member({"result": 6}, "result") == 6
    assert get_member(Point(1, 2), "y") == 2


def test_get_member_missing_raises() -> None:
    with pytest.raises(AttributeError):
        get_member({"result": 6}, "other")
    with pytest.raises(AttributeError):
        get_member(1, "nope")


def test_resolve_args_keeps_position() -> None:
    args, kwargs = resolve_args((slot, 8), {}, 16)
    assert args == (16, 8)
    assert kwargs == {}


def test_resolve_args_repeats_value() -> None:
    args, _ = resolve_args((slot, slot), {}, 3)
    assert args == (3, 3)


def test_resolve_args_passes_literals_through() -> None:
    marker = object()
    args, kwargs = resolve_args((marker, "s", slot.result), {"k": slot, "lit": 1}, {"result": 6})
    assert args[0] is marker
    assert args[1:] == ("s", 6)
    assert kwargs == {"k": {"result": 6}, "lit": 1}


def test_equal_values_are_not_placeholders() -> None:
    # Only Slot instances count, never values that merely compare equal.
    assert not has_slots((0, None, "slot"), {"x": 1})
    assert has_slots((1,), {"x": slot})
    assert has_slots((slot.a,), {})
    assert isinstance(slot.a, Slot)


class Broken:
    @property
    def total(self) -> int:
        raise TypeError("bug inside getter")

    @property
    def count(self) -> int:
        raise AttributeError("bug inside getter")


class Shelf:
    def __getitem__(self, key: str) -> str:
        raise RuntimeError(f"cannot fetch {key}")


def test_errors_inside_existing_members_propagate() -> None:
    with pytest.raises(TypeError, match="bug inside getter"):
        resolve_slot(slot.total, Broken())
    with pytest.raises(AttributeError, match="bug inside getter"):
        resolve_slot(slot.count, Broken())
    with pytest.raises(RuntimeError):
        resolve_slot(slot["book"], Shelf())


def test_getter_errors_propagate_through_steps() -> None:
    with pytest.raises(TypeError, match="bug inside getter"):
        chain(Broken())(lambda t: t, slot.total)


def test_wrong_index_type_is_not_missing() -> None:
    with pytest.raises(TypeError):
        resolve_slot(slot["a"], [1, 2])
