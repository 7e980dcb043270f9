from __future__ import annotations

from scrimgrid.config import Config
from scrimgrid.grid import DayOfWeek, TimezoneOffset
from scrimgrid.slots import (
    SlotState,
    count_selected,
    has_any_slot,
    is_available,
    normalize_time_slots,
    set_slot,
    slot_state,
    slots_to_display,
    slots_to_reference,
    toggle_slot,
)

UTC2 = TimezoneOffset.UTC_PLUS_2


def test_only_literal_true_counts():
    slots = {"monday": {18: True, 19: False, 20: "true", 21: 1, 22: None}}
    assert is_available(slots, DayOfWeek.MONDAY, 18)
    for h in (19, 20, 21, 22, 23):
        assert not is_available(slots, "monday", h)


def test_string_hour_keys_are_read():
    slots = {"tuesday": {"19": True}}
    assert is_available(slots, DayOfWeek.TUESDAY, 19)


def test_malformed_shapes_read_as_unavailable():
    for junk in (None, "x", 3, [], {"monday": "all"}, {"monday": [18]}):
        assert not is_available(junk, "monday", 18)


def test_slot_state_distinguishes_no_response():
    slots = {"monday": {18: True, 19: False}}
    assert slot_state(slots, "monday", 18) is SlotState.AVAILABLE
    assert slot_state(slots, "monday", 19) is SlotState.UNAVAILABLE
    assert slot_state(slots, "monday", 20) is SlotState.NO_RESPONSE
    assert slot_state(slots, "sunday", 18) is SlotState.NO_RESPONSE


def test_has_any_slot():
    assert has_any_slot({"monday": {18: True}})
    assert not has_any_slot({"monday": {18: False}})
    assert not has_any_slot({})
    assert not has_any_slot("monday")


def test_normalize_time_slots_cleans_input():
    raw = {
        "Monday": {"18": True, "x": True, "19": "yes"},
        "funday": {"18": True},
        "tuesday": "nope",
    }
    assert normalize_time_slots(raw) == {"monday": {18: True}}
    assert normalize_time_slots(None) is None
    assert normalize_time_slots([1, 2]) is None


def test_set_slot_converts_display_hour_and_copies():
    original = {"monday": {18: True}}
    out = set_slot(original, "monday", 20, True, UTC2, Config())
    assert out == {"monday": {18: True, 19: True}}
    assert original == {"monday": {18: True}}


def test_toggle_slot_flips_through_timezone():
    C = Config()
    once = toggle_slot({}, "friday", 0, UTC2, C)
    assert once == {"friday": {23: True}}
    twice = toggle_slot(once, "friday", 0, UTC2, C)
    assert twice == {"friday": {23: False}}


def test_toggle_slot_accepts_any_day_spelling():
    C = Config()
    slots = {"monday": {18: True}}
    assert toggle_slot(slots, "Monday", 18, config=C) == {"monday": {18: False}}
    assert toggle_slot(slots, " MONDAY ", 18, config=C) == {"monday": {18: False}}
    assert toggle_slot(slots, DayOfWeek.MONDAY, 18, config=C) == {
        "monday": {18: False}
    }


def test_whole_map_shift_round_trips():
    display = {"monday": {18: True, 0: True}, "sunday": {23: False}}
    stored = slots_to_reference(display, UTC2)
    assert stored == {"monday": {17: True, 23: True}, "sunday": {22: False}}
    assert slots_to_display(stored, UTC2) == display


def test_count_selected_only_counts_canonical_cells():
    C = Config()
    slots = {"monday": {18: True, 3: True}, "tuesday": {15: True, 16: False}}
    assert count_selected(slots, C) == 2
