from __future__ import annotations

from enum import Enum

from scrimgrid.config import (
    Config,
    DaySelection,
    HourSelection,
    cfg,
    days_matching,
    hours_matching,
)
from scrimgrid.grid import DayOfWeek
from scrimgrid.slots import PresetSlots


class Preset(str, Enum):
    SELECT_ALL = "select-all"
    CLEAR_ALL = "clear-all"
    EVENINGS_ONLY = "evenings-only"
    WEEKDAYS_ONLY = "weekdays-only"
    WEEKENDS_ONLY = "weekends-only"


def build_slots(
    days: DaySelection = None,
    hours: HourSelection = None,
    config: Config | None = None,
) -> PresetSlots:
    """
    Dense slots: a cell is True iff its day is selected and its hour is
    selected. Every canonical cell is written, selected or not.
    """
    C = config or cfg
    day_ok = days_matching(days, C)
    hour_ok = hours_matching(hours, C)
    slots = PresetSlots()
    for d in C.DAYS:
        slots[d.value] = {h: bool(day_ok(d) and hour_ok(h)) for h in C.HOURS}
    return slots


def build_preset(preset: Preset | str, config: Config | None = None) -> PresetSlots:
    C = config or cfg
    p = Preset(preset)
    if p is Preset.SELECT_ALL:
        return build_slots(config=C)
    if p is Preset.CLEAR_ALL:
        return build_slots(days=(), config=C)
    if p is Preset.EVENINGS_ONLY:
        return build_slots(hours=C.evening_hours, config=C)
    if p is Preset.WEEKDAYS_ONLY:
        return build_slots(days=_is_weekday, config=C)
    return build_slots(days=_is_weekend, config=C)


def _is_weekday(d: DayOfWeek) -> bool:
    return not d.is_weekend


def _is_weekend(d: DayOfWeek) -> bool:
    return d.is_weekend
