# tests/scrimgrid/test_progress.py
import re
from unittest.mock import patch

import pytest
from ortools.sat.python import cp_model

from scrimgrid.planner import SessionPlanner
from scrimgrid.progress import MinimalProgress


@pytest.fixture
def solver():
    """CpSolver with a short time limit so the test runs fast."""
    s = cp_model.CpSolver()
    s.parameters.max_time_in_seconds = 0.2
    s.parameters.log_search_progress = False
    return s


@pytest.fixture
def callback():
    """
    MinimalProgress that logs on the first solution.
    Set log_every_sec=0 so the first solution triggers a print immediately.
    """
    return MinimalProgress(time_limit_sec=0.2, log_every_sec=0.0)


@pytest.fixture
def mock_print():
    """Patch print in the progress module to capture output."""
    with patch("scrimgrid.progress.print") as m:
        yield m


def build_tiny_model():
    m = cp_model.CpModel()
    x = m.NewIntVar(0, 50, "x")
    y = m.NewIntVar(0, 50, "y")
    m.Maximize(x + y)
    return m


def test_minimal_progress_prints_and_records(solver, callback, mock_print):
    status = solver.Solve(build_tiny_model(), callback)
    assert status in (cp_model.OPTIMAL, cp_model.FEASIBLE)

    assert mock_print.call_count >= 1
    args, _ = mock_print.call_args
    line = args[0] if args else ""
    assert "sols=" in line
    assert "attendance=" in line
    assert "ceiling" in line
    assert "sessions=0" in line
    assert re.match(r"^\[\s*\d+(\.\d+)?s\]\s", line)

    history = callback.solution_history()
    assert len(history) == callback.sols >= 1
    assert history[-1][1] == 100.0


def test_planner_reports_attendance_not_raw_objective(make_record, mock_print):
    recs = [make_record(n, {"friday": {20: True, 21: True}}) for n in "ABCDE"]
    planner = SessionPlanner(recs)
    planner.build()
    res = planner.solve(progress_cb=MinimalProgress(1.0, 0.0))

    assert len(res.sessions) == 1
    assert res.progress_history
    assert res.progress_history[-1][1] == 5.0
    last_line = mock_print.call_args[0][0]
    assert "attendance=5" in last_line
    assert "sessions=1" in last_line


def test_planner_solves_with_callback_on_empty_model(make_record, mock_print):
    planner = SessionPlanner([make_record("A", {"monday": {18: True}})])
    planner.build()
    res = planner.solve(progress_cb=MinimalProgress(1.0, 0.0))
    assert planner.candidates == []
    assert res.status_name == "OPTIMAL"
    assert res.sessions == []
    assert res.objective_value == 0.0
