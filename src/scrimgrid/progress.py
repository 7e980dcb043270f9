from typing import Sequence

from ortools.sat.python import cp_model


class MinimalProgress(cp_model.CpSolverSolutionCallback):
    """
    Logs each improving session plan as total attendance and session count.

    The planner's objective packs a tie-break rank under the attendance, so
    `track()` tells the callback how to unpack it and which booleans are the
    chosen sessions. Untracked, the raw objective is reported as attendance.
    """

    def __init__(self, time_limit_sec: float, log_every_sec: float = 5.0):
        super().__init__()
        self.time_limit = (
            float(time_limit_sec) if time_limit_sec and time_limit_sec > 0 else None
        )
        self.log_every = float(log_every_sec)
        self.last_time = -1.0
        self.sols = 0
        self.attendance_scale = 1
        self.session_vars: list[cp_model.IntVar] = []
        self.history: list[tuple[float, float, float]] = []

    def track(
        self, session_vars: Sequence[cp_model.IntVar], attendance_scale: int = 1
    ) -> None:
        self.session_vars = list(session_vars)
        self.attendance_scale = max(int(attendance_scale), 1)

    def _attendance(self, objective: float) -> int:
        return int(round(objective)) // self.attendance_scale

    def OnSolutionCallback(self):
        self.sols += 1
        now = self.WallTime()
        attendance = self._attendance(self.ObjectiveValue())
        ceiling = self._attendance(self.BestObjectiveBound())
        self.history.append((now, float(attendance), float(ceiling)))

        if self.last_time < 0 or (now - self.last_time) >= self.log_every:
            sessions = sum(self.Value(v) for v in self.session_vars)
            if self.time_limit:
                pct_field = f"{min(100.0, 100.0 * now / self.time_limit):6.2f}%"
            else:
                pct_field = "  n/a "
            print(
                f"[{now:5.1f}s] pct of time limit={pct_field} "
                f"| attendance={attendance:<4d} (ceiling {ceiling}) "
                f"| sessions={sessions} | sols={self.sols:<5d}",
                flush=True,
            )
            self.last_time = now

    def solution_history(self) -> list[tuple[float, float, float]]:
        """Return collected (wall_time, attendance, attendance_ceiling) tuples."""
        return list(self.history)
