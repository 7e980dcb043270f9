from __future__ import annotations

import pytest

from scrimgrid.config import Config
from scrimgrid.grid import DayOfWeek, TimezoneOffset
from scrimgrid.planner import (
    SESSION_COLUMNS,
    SessionPlanner,
    plan_sessions,
    session_candidates,
)
from scrimgrid.result_types import PlannedSession


def make_cfg(**overrides) -> Config:
    params = dict(
        SESSIONS_PER_WEEK=2,
        SESSION_HOURS=2,
        MIN_ATTENDEES=2,
        MAX_SESSIONS_PER_DAY=1,
        TIME_LIMIT_SEC=5.0,
        NUM_PARALLEL_WORKERS=1,
    )
    params.update(overrides)
    return Config(**params)


@pytest.fixture
def records(make_record):
    return [
        make_record("A", {"monday": {18: True, 19: True, 20: True}, "thursday": {20: True, 21: True}}),
        make_record("B", {"monday": {18: True, 19: True}, "thursday": {20: True, 21: True}}),
        make_record("C", {"monday": {19: True, 20: True}, "thursday": {20: True, 21: True}}),
        make_record("D", {"thursday": {20: True, 21: True}, "saturday": {15: True, 16: True}}),
        make_record("Broken", "garbage"),
    ]


def test_candidates_cover_every_block(records):
    C = make_cfg()
    cands = session_candidates(records, C)
    assert len(cands) == 7 * 8
    thursday = next(c for c in cands if c.day is DayOfWeek.THURSDAY and c.start_hour == 20)
    assert thursday.attendees == ("A", "B", "C", "D")
    assert list(thursday.hours) == [20, 21]
    monday_19 = next(c for c in cands if c.day is DayOfWeek.MONDAY and c.start_hour == 19)
    assert monday_19.attendees == ("A", "C")


def test_plan_picks_highest_attendance_respecting_day_cap(records):
    res = plan_sessions(records, make_cfg())
    assert res.status_name == "OPTIMAL"
    assert [(s.day, s.start_hour) for s in res.sessions] == [
        (DayOfWeek.MONDAY, 18),
        (DayOfWeek.THURSDAY, 20),
    ]
    assert res.objective_value == 6.0
    assert res.candidates_considered == 3
    assert list(res.df_sessions.columns) == SESSION_COLUMNS
    row = res.df_sessions.iloc[1]
    assert row["time_slot"] == "8:00 PM"
    assert row["day_of_week"] == 4
    assert row["attendees"] == 4


def test_weekly_cap_limits_sessions(records):
    res = plan_sessions(records, make_cfg(SESSIONS_PER_WEEK=1))
    assert [(s.day, s.start_hour) for s in res.sessions] == [(DayOfWeek.THURSDAY, 20)]


def test_sessions_never_overlap_within_a_day(make_record):
    everyone = {"monday": {h: True for h in range(15, 24)}}
    recs = [make_record(n, everyone) for n in ("A", "B")]
    res = plan_sessions(recs, make_cfg(MAX_SESSIONS_PER_DAY=3, SESSIONS_PER_WEEK=3))
    assert len(res.sessions) == 3
    hours = [h for s in res.sessions for h in range(s.start_hour, s.end_hour)]
    assert len(hours) == len(set(hours))


def test_no_viable_blocks_gives_empty_plan(records):
    res = plan_sessions(records, make_cfg(MIN_ATTENDEES=10))
    assert res.status_name in ("OPTIMAL", "FEASIBLE")
    assert res.sessions == []
    assert res.objective_value == 0.0
    assert res.df_sessions.empty


def test_solve_requires_build(records):
    with pytest.raises(RuntimeError):
        SessionPlanner(records, make_cfg()).solve()


def test_planned_session_labels(records):
    res = plan_sessions(records, make_cfg())
    monday = res.sessions[0]
    assert monday.label == "Mon 6 PM - 8 PM"
    assert monday.day_of_week == 1
    assert monday.attendees == ("A", "B")


def test_planned_session_display_label_follows_viewer_timezone():
    late = PlannedSession(DayOfWeek.TUESDAY, 22, 2, ("A",))
    assert late.label == "Tue 10 PM - 12 AM"
    assert late.display_label(TimezoneOffset.UTC_PLUS_2) == "Tue 11 PM - 1 AM"
    assert (
        late.display_label(TimezoneOffset.UTC_PLUS_2, TimezoneOffset.UTC_PLUS_0)
        == "Tue 12 AM - 2 AM"
    )
