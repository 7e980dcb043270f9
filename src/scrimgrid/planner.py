# scrimgrid/planner.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterable

import pandas as pd
from ortools.sat.python import cp_model

from scrimgrid.aggregate import display_name_of
from scrimgrid.config import Config, cfg
from scrimgrid.grid import DayOfWeek, HourSlot
from scrimgrid.records import PlayerAvailabilityRecord
from scrimgrid.result_types import PlannedSession, PlanResult
from scrimgrid.slots import is_available

SESSION_COLUMNS = [
    "day",
    "day_of_week",
    "start_hour",
    "duration",
    "time_slot",
    "attendees",
    "players",
]


@dataclass(frozen=True)
class SessionCandidate:
    day: DayOfWeek
    start_hour: HourSlot
    duration: int
    attendees: tuple[str, ...]

    @property
    def hours(self) -> range:
        return range(self.start_hour, self.start_hour + self.duration)


def session_candidates(
    records: Iterable[PlayerAvailabilityRecord], config: Config | None = None
) -> list[SessionCandidate]:
    """
    Every block of SESSION_HOURS consecutive canonical hours on every day,
    with the players available for the whole block. Malformed records
    contribute no attendees.
    """
    C = config or cfg
    L = int(C.SESSION_HOURS)
    usable = [
        (rec, display_name_of(rec, C.UNKNOWN_PLAYER_NAME))
        for rec in records
        if isinstance(getattr(rec, "time_slots", None), Mapping)
    ]
    out: list[SessionCandidate] = []
    for d in C.DAYS:
        for i in range(len(C.HOURS) - L + 1):
            block = C.HOURS[i : i + L]
            attendees = tuple(
                name
                for rec, name in usable
                if all(is_available(rec.time_slots, d, h) for h in block)
            )
            out.append(
                SessionCandidate(
                    day=d, start_hour=block[0], duration=L, attendees=attendees
                )
            )
    return out


def setup_solver(C: Config) -> cp_model.CpSolver:
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = C.TIME_LIMIT_SEC
    solver.parameters.num_search_workers = C.NUM_PARALLEL_WORKERS
    solver.parameters.log_search_progress = False
    return solver


class SessionPlanner:
    """
    Pick the week's practice sessions from availability.

    Chooses at most SESSIONS_PER_WEEK non-overlapping blocks, at most
    MAX_SESSIONS_PER_DAY per day, each with at least MIN_ATTENDEES players
    available for all of it, maximising total attendance. Ties go to the
    earlier block in the week.
    """

    def __init__(
        self,
        records: Iterable[PlayerAvailabilityRecord],
        config: Config | None = None,
    ) -> None:
        self.cfg = config or cfg
        self.records = list(records)
        self.candidates: list[SessionCandidate] = []
        self.m: cp_model.CpModel | None = None
        self.x: dict[int, cp_model.IntVar] = {}
        self.scale = 1

    # ---------- Build ----------
    def build(self) -> None:
        C = self.cfg
        self.candidates = [
            c
            for c in session_candidates(self.records, C)
            if len(c.attendees) >= max(int(C.MIN_ATTENDEES), 1)
        ]
        m = cp_model.CpModel()
        self.x = {
            i: m.NewBoolVar(f"session[{c.day.value},{c.start_hour}]")
            for i, c in enumerate(self.candidates)
        }

        if self.x:
            m.Add(sum(self.x.values()) <= int(C.SESSIONS_PER_WEEK))

        for d in C.DAYS:
            on_day = [
                self.x[i] for i, c in enumerate(self.candidates) if c.day == d
            ]
            if on_day:
                m.Add(sum(on_day) <= int(C.MAX_SESSIONS_PER_DAY))
            for h in C.HOURS:
                covering = [
                    self.x[i]
                    for i, c in enumerate(self.candidates)
                    if c.day == d and h in c.hours
                ]
                if len(covering) > 1:
                    m.Add(sum(covering) <= 1)

        # Attendance dominates; the rank term only breaks ties, earliest first.
        n = len(self.candidates)
        self.scale = scale = (n + 1) * max(int(C.SESSIONS_PER_WEEK), 1)
        if self.x:
            m.Maximize(
                sum(
                    (len(c.attendees) * scale + (n - i)) * self.x[i]
                    for i, c in enumerate(self.candidates)
                )
            )
        self.m = m

    # ---------- Solve ----------
    def solve(self, progress_cb=None) -> PlanResult:
        if self.m is None:
            raise RuntimeError("Call build() before solve().")

        solver = setup_solver(self.cfg)
        if callable(getattr(progress_cb, "track", None)):
            progress_cb.track(list(self.x.values()), self.scale)
        status = solver.Solve(self.m, progress_cb)
        status_name = solver.StatusName(status)

        progress_history = None
        if progress_cb is not None:
            if callable(getattr(progress_cb, "solution_history", None)):
                progress_history = progress_cb.solution_history()
            else:
                progress_history = getattr(progress_cb, "history", None)

        if status_name not in ("OPTIMAL", "FEASIBLE"):
            return PlanResult(
                status_name=status_name,
                objective_value=None,
                candidates_considered=len(self.candidates),
                progress_history=progress_history,
                solver_stats=solver.ResponseStats(),
            )

        sessions = [
            PlannedSession(
                day=c.day,
                start_hour=c.start_hour,
                duration=c.duration,
                attendees=c.attendees,
            )
            for i, c in enumerate(self.candidates)
            if solver.Value(self.x[i])
        ]
        return PlanResult(
            status_name=status_name,
            objective_value=float(sum(len(s.attendees) for s in sessions)),
            sessions=sessions,
            df_sessions=sessions_to_frame(sessions),
            candidates_considered=len(self.candidates),
            progress_history=progress_history,
            solver_stats=solver.ResponseStats(),
        )


def sessions_to_frame(sessions: list[PlannedSession]) -> pd.DataFrame:
    rows = [
        {
            "day": s.day.value,
            "day_of_week": s.day_of_week,
            "start_hour": s.start_hour,
            "duration": s.duration,
            "time_slot": s.time_slot,
            "attendees": len(s.attendees),
            "players": ", ".join(s.attendees),
        }
        for s in sessions
    ]
    return pd.DataFrame(rows, columns=SESSION_COLUMNS)


def plan_sessions(
    records: Iterable[PlayerAvailabilityRecord],
    config: Config | None = None,
    progress_cb=None,
) -> PlanResult:
    planner = SessionPlanner(records, config)
    planner.build()
    return planner.solve(progress_cb=progress_cb)
