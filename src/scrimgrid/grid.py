from __future__ import annotations

from enum import Enum
from typing import TypeAlias

HourSlot: TypeAlias = int

_DAY_LABELS = {
    "monday": "Mon",
    "tuesday": "Tue",
    "wednesday": "Wed",
    "thursday": "Thu",
    "friday": "Fri",
    "saturday": "Sat",
    "sunday": "Sun",
}


class DayOfWeek(str, Enum):
    """
    Day of the week, Monday first. Members compare and hash equal to their
    lowercase names so they can index raw `time_slots` mappings directly.
    """

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    def __str__(self) -> str:
        return self.value

    @property
    def position(self) -> int:
        """0 for Monday through 6 for Sunday."""
        return list(DayOfWeek).index(self)

    @property
    def label(self) -> str:
        return _DAY_LABELS[self.value]

    @property
    def is_weekend(self) -> bool:
        return self in (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY)

    @property
    def js_index(self) -> int:
        """Day number as stored on schedule activities (0 = Sunday)."""
        return (self.position + 1) % 7

    @classmethod
    def parse(cls, value: object) -> "DayOfWeek":
        if isinstance(value, DayOfWeek):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown day of week: {value!r}")


ALL_DAYS: tuple[DayOfWeek, ...] = tuple(DayOfWeek)


class TimezoneOffset(str, Enum):
    """Closed set of fixed UTC offsets supported by the organisation (no DST)."""

    UTC_PLUS_0 = "UTC+0"
    UTC_PLUS_1 = "UTC+1"
    UTC_PLUS_2 = "UTC+2"
    UTC_PLUS_3 = "UTC+3"

    def __str__(self) -> str:
        return self.value

    @property
    def hours(self) -> int:
        return int(self.value[len("UTC") :])

    @property
    def short(self) -> str:
        return _TZ_SHORT[self]

    @property
    def label(self) -> str:
        return f"{self.value} ({self.short})"

    @property
    def regions(self) -> str:
        return _TZ_REGIONS[self]


_TZ_SHORT = {
    TimezoneOffset.UTC_PLUS_0: "GMT",
    TimezoneOffset.UTC_PLUS_1: "CET",
    TimezoneOffset.UTC_PLUS_2: "EET",
    TimezoneOffset.UTC_PLUS_3: "MSK",
}

_TZ_REGIONS = {
    TimezoneOffset.UTC_PLUS_0: "UK, Ireland, Portugal",
    TimezoneOffset.UTC_PLUS_1: (
        "France, Germany, Spain, Italy, Belgium, Netherlands, Poland, etc."
    ),
    TimezoneOffset.UTC_PLUS_2: "Finland, Greece, Romania, Bulgaria, Ukraine",
    TimezoneOffset.UTC_PLUS_3: "Russia, Belarus",
}


def parse_timezone(value: object) -> TimezoneOffset:
    """
    Boundary check for viewer timezones. Accepts a TimezoneOffset, its string
    form ("UTC+2") or the short label ("EET"); anything else is rejected.
    """
    if isinstance(value, TimezoneOffset):
        return value
    if isinstance(value, str):
        text = value.strip().upper()
        for tz in TimezoneOffset:
            if text in (tz.value, tz.short):
                return tz
    raise ValueError(
        f"Unsupported timezone {value!r}; expected one of "
        f"{', '.join(tz.value for tz in TimezoneOffset)}."
    )
