# scrimgrid/result_types.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import pandas as pd

from scrimgrid.aggregate import AggregateGrid
from scrimgrid.grid import DayOfWeek, HourSlot, TimezoneOffset
from scrimgrid.records import PlayerAvailabilityRecord
from scrimgrid.timezone import format_hour, format_hour_short, to_display_hour


@dataclass(frozen=True)
class PlannedSession:
    """A practice block of consecutive reference-timezone hours on one day."""

    day: DayOfWeek
    start_hour: HourSlot
    duration: int
    attendees: tuple[str, ...] = ()

    @property
    def end_hour(self) -> int:
        return self.start_hour + self.duration

    @property
    def time_slot(self) -> str:
        """Start time in the form schedule activities store it ('6:00 PM')."""
        return format_hour(self.start_hour)

    @property
    def day_of_week(self) -> int:
        return self.day.js_index

    @property
    def label(self) -> str:
        return self.display_label()

    def display_label(
        self,
        viewer_tz: Optional[TimezoneOffset] = None,
        reference: Optional[TimezoneOffset] = None,
    ) -> str:
        """'Tue 6 PM - 8 PM', with hours shifted into `viewer_tz` when given."""
        start = self.start_hour
        if viewer_tz is not None:
            start = to_display_hour(start, viewer_tz, reference)
        return (
            f"{self.day.label} {format_hour_short(start)} - "
            f"{format_hour_short(start + self.duration)}"
        )


@dataclass
class PlanResult:
    """Structured output of a planning run."""

    status_name: str
    objective_value: Optional[float]
    sessions: list[PlannedSession] = field(default_factory=list)
    df_sessions: pd.DataFrame = field(default_factory=pd.DataFrame)
    candidates_considered: int = 0
    progress_history: list[tuple[float, float, float]] | None = None
    solver_stats: str | None = None


@dataclass
class AvailabilityRun:
    """Everything one `run_availability` call produced."""

    week_start: Optional[date]
    team_id: Optional[str]
    records: list[PlayerAvailabilityRecord]
    grid: AggregateGrid
    malformed: list[PlayerAvailabilityRecord] = field(default_factory=list)
    plan: Optional[PlanResult] = None
