from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional, TypeAlias

from scrimgrid.config import Config, cfg
from scrimgrid.grid import DayOfWeek, TimezoneOffset
from scrimgrid.timezone import to_display_hour, to_reference_hour

# Sparse day -> hour -> bool, as persisted. A missing day or hour means the
# player never answered for it, which is not the same as an explicit False.
RawSlots: TypeAlias = dict[str, dict[int, bool]]
TimeSlots: TypeAlias = Mapping[str, Mapping[Any, Any]]


class PresetSlots(dict):
    """
    Dense time slots produced by a quick-fill preset: every canonical day and
    every canonical hour has an explicit boolean.
    """

    def is_dense(self, config: Config | None = None) -> bool:
        C = config or cfg
        return all(
            isinstance(self.get(d.value), dict)
            and all(isinstance(self[d.value].get(h), bool) for h in C.HOURS)
            for d in C.DAYS
        )


class SlotState(str, Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    NO_RESPONSE = "no_response"


def _hour_value(day_map: Mapping[Any, Any], hour: int) -> Any:
    if hour in day_map:
        return day_map[hour]
    return day_map.get(str(hour))


def _day_map(slots: Any, day: DayOfWeek | str) -> Optional[Mapping[Any, Any]]:
    if not isinstance(slots, Mapping):
        return None
    day_map = slots.get(str(day))
    return day_map if isinstance(day_map, Mapping) else None


def is_available(slots: Any, day: DayOfWeek | str, hour: int) -> bool:
    """Strictly True only; False, absent keys and junk all read as unavailable."""
    day_map = _day_map(slots, day)
    if day_map is None:
        return False
    return _hour_value(day_map, hour) is True


def slot_state(slots: Any, day: DayOfWeek | str, hour: int) -> SlotState:
    day_map = _day_map(slots, day)
    if day_map is None:
        return SlotState.NO_RESPONSE
    value = _hour_value(day_map, hour)
    if value is True:
        return SlotState.AVAILABLE
    if value is False:
        return SlotState.UNAVAILABLE
    return SlotState.NO_RESPONSE


def has_any_slot(slots: Any) -> bool:
    """True when at least one hour anywhere is marked available."""
    if not isinstance(slots, Mapping):
        return False
    return any(
        value is True
        for day_map in slots.values()
        if isinstance(day_map, Mapping)
        for value in day_map.values()
    )


def normalize_time_slots(raw: Any) -> Optional[RawSlots]:
    """
    Clean persisted/JSON time slots: day names lower-cased, hour keys turned
    into ints, boolean values kept. Unknown days, non-integer hour keys and
    non-boolean values are dropped. Returns None if `raw` is not a mapping.
    """
    if not isinstance(raw, Mapping):
        return None
    out: RawSlots = {}
    for day_key, day_map in raw.items():
        try:
            day = DayOfWeek.parse(day_key)
        except ValueError:
            continue
        if not isinstance(day_map, Mapping):
            continue
        hours: dict[int, bool] = {}
        for hour_key, value in day_map.items():
            try:
                hour = int(hour_key)
            except (TypeError, ValueError):
                continue
            if isinstance(value, bool):
                hours[hour] = value
        out[day.value] = hours
    return out


def _copy(slots: Any) -> RawSlots:
    return normalize_time_slots(slots) or {}


def set_slot(
    slots: Any,
    day: DayOfWeek | str,
    display_hour: int,
    value: bool,
    viewer_tz: Optional[TimezoneOffset] = None,
    config: Config | None = None,
) -> RawSlots:
    """
    Return a copy of `slots` with one cell set. `display_hour` is in the
    viewer's timezone and is stored under its reference-timezone key.
    """
    C = config or cfg
    tz = viewer_tz if viewer_tz is not None else C.ORG_TIMEZONE
    hour = to_reference_hour(display_hour, tz, C.ORG_TIMEZONE)
    out = _copy(slots)
    out.setdefault(DayOfWeek.parse(day).value, {})[hour] = bool(value)
    return out


def toggle_slot(
    slots: Any,
    day: DayOfWeek | str,
    display_hour: int,
    viewer_tz: Optional[TimezoneOffset] = None,
    config: Config | None = None,
) -> RawSlots:
    """Flip one cell; an unanswered cell becomes available."""
    C = config or cfg
    tz = viewer_tz if viewer_tz is not None else C.ORG_TIMEZONE
    d = DayOfWeek.parse(day)
    hour = to_reference_hour(display_hour, tz, C.ORG_TIMEZONE)
    current = is_available(slots, d, hour)
    return set_slot(slots, d, display_hour, not current, tz, C)


def slots_to_reference(
    slots: Any, viewer_tz: TimezoneOffset, config: Config | None = None
) -> RawSlots:
    """Re-key a whole display-time map to reference-timezone hours."""
    C = config or cfg
    return _shift(slots, lambda h: to_reference_hour(h, viewer_tz, C.ORG_TIMEZONE))


def slots_to_display(
    slots: Any, viewer_tz: TimezoneOffset, config: Config | None = None
) -> RawSlots:
    C = config or cfg
    return _shift(slots, lambda h: to_display_hour(h, viewer_tz, C.ORG_TIMEZONE))


def _shift(slots: Any, convert) -> RawSlots:
    # Day keys stay put; only the hour key moves.
    return {
        day: {convert(h): v for h, v in hours.items()}
        for day, hours in _copy(slots).items()
    }


def count_selected(slots: Any, config: Config | None = None) -> int:
    """Number of canonical cells marked available."""
    C = config or cfg
    return sum(1 for d, h in C.cells() if is_available(slots, d, h))
