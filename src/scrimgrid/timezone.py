"""
Conversion between the organisation reference timezone and a viewer's
display timezone, plus the labels and week arithmetic the grid needs.

All availability is stored with reference-timezone hour keys. Conversion to
a viewer's timezone happens only when rendering, and the inverse only when a
viewer writes a cell.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from scrimgrid.config import Config, cfg
from scrimgrid.grid import HourSlot, TimezoneOffset

_HOUR_LABEL = re.compile(r"^\s*(\d{1,2}):00\s*(AM|PM)\s*$", re.IGNORECASE)


def _offset_hours(tz: TimezoneOffset | int) -> int:
    if isinstance(tz, TimezoneOffset):
        return tz.hours
    return int(tz)


def hour_offset(
    viewer_tz: TimezoneOffset | int, reference: Optional[TimezoneOffset] = None
) -> int:
    """Signed hours between the viewer's offset and the reference offset."""
    ref = reference if reference is not None else cfg.ORG_TIMEZONE
    return _offset_hours(viewer_tz) - _offset_hours(ref)


def to_display_hour(
    reference_hour: int,
    viewer_tz: TimezoneOffset | int,
    reference: Optional[TimezoneOffset] = None,
) -> int:
    return (reference_hour + hour_offset(viewer_tz, reference) + 24) % 24


def to_reference_hour(
    display_hour: int,
    viewer_tz: TimezoneOffset | int,
    reference: Optional[TimezoneOffset] = None,
) -> int:
    return (display_hour - hour_offset(viewer_tz, reference) + 24) % 24


def display_rows(
    viewer_tz: TimezoneOffset | int, config: Config | None = None
) -> list[tuple[HourSlot, int]]:
    """
    (reference_hour, display_hour) for every canonical hour, ordered by the
    reference hour. The display column may wrap past midnight.
    """
    C = config or cfg
    return [(h, to_display_hour(h, viewer_tz, C.ORG_TIMEZONE)) for h in C.HOURS]


# ---------- labels ----------


def format_hour(hour: int) -> str:
    """12 -> '12:00 PM', 0/24 -> '12:00 AM'."""
    return _twelve_hour(hour, ":00")


def format_hour_short(hour: int) -> str:
    """15 -> '3 PM'."""
    return _twelve_hour(hour, "")


def _twelve_hour(hour: int, minutes: str) -> str:
    h = hour % 24
    if h == 0:
        return f"12{minutes} AM"
    if h == 12:
        return f"12{minutes} PM"
    if h < 12:
        return f"{h}{minutes} AM"
    return f"{h - 12}{minutes} PM"


def format_hour_range(hour: int) -> str:
    """15 -> '3 PM - 4 PM'; 23 -> '11 PM - 12 AM'."""
    return f"{format_hour_short(hour)} - {format_hour_short(hour + 1)}"


def parse_hour_label(label: str) -> int:
    """'3:00 PM' -> 15. Raises ValueError on anything else."""
    match = _HOUR_LABEL.match(label)
    if not match:
        raise ValueError(f"Not an hour label: {label!r}")
    hour = int(match.group(1))
    period = match.group(2).upper()
    if not (1 <= hour <= 12):
        raise ValueError(f"Hour out of range in label: {label!r}")
    if period == "AM":
        return 0 if hour == 12 else hour
    return hour if hour == 12 else hour + 12


def convert_time_slot_label(
    label: str,
    viewer_tz: TimezoneOffset,
    reference: Optional[TimezoneOffset] = None,
) -> str:
    """
    Re-label a reference-timezone activity time ('3:00 PM') for a viewer.
    Labels that do not parse are returned unchanged.
    """
    try:
        hour = parse_hour_label(label)
    except ValueError:
        return label
    return format_hour(to_display_hour(hour, viewer_tz, reference))


# ---------- weeks ----------


def _as_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def date_for_day(week_start: date | str, day_index: int) -> str:
    """Short calendar label ('Oct 13') for day `day_index` of the week."""
    d = _as_date(week_start) + timedelta(days=day_index)
    return f"{d:%b} {d.day}"


def monday_of(moment: date | datetime | str, tz: TimezoneOffset | None = None) -> date:
    """
    Monday of the week containing `moment`, judged in `tz` (the reference
    timezone by default). Naive datetimes are taken as already in `tz`.
    """
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            zone = tz if tz is not None else cfg.ORG_TIMEZONE
            moment = moment.astimezone(timezone(timedelta(hours=zone.hours)))
        day = moment.date()
    else:
        day = _as_date(moment)
    return day - timedelta(days=day.weekday())


def week_end(week_start: date | str) -> date:
    return _as_date(week_start) + timedelta(days=6)


def week_dates(week_start: date | str) -> list[str]:
    start = _as_date(week_start)
    return [(start + timedelta(days=i)).isoformat() for i in range(7)]


def is_week_in_past(week_start: date | str, today: date) -> bool:
    return _as_date(week_start) < monday_of(today)


def is_week_accessible(
    week_start: date | str, today: date, weeks_ahead: int = 3
) -> bool:
    """Current week plus `weeks_ahead` future weeks."""
    current = monday_of(today)
    start = _as_date(week_start)
    return current <= start <= current + timedelta(weeks=weeks_ahead)
