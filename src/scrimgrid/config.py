from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable, Optional

from scrimgrid.grid import ALL_DAYS, DayOfWeek, HourSlot, TimezoneOffset

DaySelection = Iterable[DayOfWeek | str] | Callable[[DayOfWeek], bool] | None
HourSelection = Iterable[int] | range | Callable[[int], bool] | None


@dataclass
class Config:

    ### GRID ###

    # Organisation reference timezone; every stored hour key is in this zone
    ORG_TIMEZONE: TimezoneOffset = TimezoneOffset.UTC_PLUS_1
    DEFAULT_TIMEZONE: TimezoneOffset = TimezoneOffset.UTC_PLUS_1

    # Canonical week (Monday first) and active hours, 15:00 to 23:59 CET
    DAYS: tuple[DayOfWeek, ...] = ALL_DAYS
    HOURS: tuple[HourSlot, ...] = tuple(range(15, 24))

    # Quick-fill "evenings only" starts here (6 PM)
    EVENING_START: int = 18

    UNKNOWN_PLAYER_NAME: str = "Unknown Player"

    ### WRITE PATH ###

    # Players may edit the current week plus this many weeks ahead
    PLAYER_WEEKS_AHEAD: int = 3

    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_WINDOW_SEC: float = 60.0

    ### SESSION PLANNER ###

    SESSIONS_PER_WEEK: int = 3
    SESSION_HOURS: int = 2
    MIN_ATTENDEES: int = 5
    MAX_SESSIONS_PER_DAY: int = 1

    # Solver
    TIME_LIMIT_SEC: float = 10.0
    NUM_PARALLEL_WORKERS: int = 4
    LOG_SOLUTIONS_FREQUENCY_SECONDS: float = 5.0

    # RANDOM SEED (synthetic data only)
    SEED: Optional[int] = None

    # Heatmap plots are written here
    OUTPUT_DIR: str = "outputs"

    def __post_init__(self) -> None:
        self.DAYS = tuple(DayOfWeek.parse(d) for d in self.DAYS)
        self.HOURS = tuple(int(h) for h in self.HOURS)

    def validate(self):
        """
        Validate the Config object has sensible values before use.
        """
        if not self.DAYS:
            raise ValueError("DAYS must not be empty.")
        if len(set(self.DAYS)) != len(self.DAYS):
            raise ValueError("DAYS must not contain duplicates.")
        if not self.HOURS:
            raise ValueError("HOURS must not be empty.")
        if any(not (0 <= h <= 23) for h in self.HOURS):
            raise ValueError("HOURS must be within [0, 23].")
        if list(self.HOURS) != list(range(self.HOURS[0], self.HOURS[-1] + 1)):
            raise ValueError("HOURS must be a contiguous ascending range.")
        if self.EVENING_START not in self.HOURS:
            raise ValueError("EVENING_START must be one of HOURS.")
        if self.PLAYER_WEEKS_AHEAD < 0:
            raise ValueError("PLAYER_WEEKS_AHEAD must be non-negative.")
        if self.RATE_LIMIT_MAX_REQUESTS <= 0:
            raise ValueError("RATE_LIMIT_MAX_REQUESTS must be > 0.")
        if self.RATE_LIMIT_WINDOW_SEC <= 0.0:
            raise ValueError("RATE_LIMIT_WINDOW_SEC must be > 0.")
        if not (1 <= self.SESSION_HOURS <= len(self.HOURS)):
            raise ValueError("Require 1 <= SESSION_HOURS <= len(HOURS).")
        if self.SESSIONS_PER_WEEK < 0:
            raise ValueError("SESSIONS_PER_WEEK must be non-negative.")
        if self.MIN_ATTENDEES < 0:
            raise ValueError("MIN_ATTENDEES must be non-negative.")
        if self.MAX_SESSIONS_PER_DAY <= 0:
            raise ValueError("MAX_SESSIONS_PER_DAY must be > 0.")
        if self.TIME_LIMIT_SEC <= 0.0:
            raise ValueError("TIME_LIMIT_SEC must be > 0.")
        if self.NUM_PARALLEL_WORKERS <= 0:
            raise ValueError("NUM_PARALLEL_WORKERS must be > 0.")

    @property
    def evening_hours(self) -> tuple[HourSlot, ...]:
        return tuple(h for h in self.HOURS if h >= self.EVENING_START)

    def cells(self) -> list[tuple[DayOfWeek, HourSlot]]:
        """Every canonical (day, hour) pair, day-major."""
        return [(d, h) for d in self.DAYS for h in self.HOURS]


def hours_between(
    start: float, end: float, *, period: int = 24
) -> Callable[[int], bool]:
    """
    Start inclusive, end exclusive, wrapping on 'period'.
    Works with float boundaries (e.g., 22.5 to 6.0). Predicate takes int hour index.
    """
    start = float(start) % period
    end = float(end) % period
    length = (end - start) % period
    return lambda h: 0 <= h < period and ((h - start) % period) < length


def hours_matching(sel: HourSelection, C: Config) -> Callable[[int], bool]:
    """
    Normalize an hour selection to a predicate over the canonical window.
    - None => all canonical hours
    - callable => bounds-checked application
    - iterable/range => membership test
    """
    window = set(C.HOURS)
    if sel is None:
        return lambda h: h in window
    if callable(sel):
        pred = sel
        return lambda h: h in window and bool(pred(h))
    idx_set = {int(h) for h in sel}
    return lambda h: h in window and h in idx_set


def days_matching(sel: DaySelection, C: Config) -> Callable[[DayOfWeek], bool]:
    """Same as `hours_matching` for days; strings are parsed as day names."""
    window = set(C.DAYS)
    if sel is None:
        return lambda d: d in window
    if callable(sel):
        pred = sel
        return lambda d: d in window and bool(pred(d))
    day_set = {DayOfWeek.parse(d) for d in sel}
    return lambda d: d in window and d in day_set


cfg = Config()
