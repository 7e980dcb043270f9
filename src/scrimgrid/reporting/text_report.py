from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.backends.backend_pdf import PdfPages

from scrimgrid.aggregate import AggregateGrid, aggregate_frame
from scrimgrid.config import Config, cfg
from scrimgrid.grid import TimezoneOffset
from scrimgrid.records import PlayerAvailabilityRecord
from scrimgrid.result_types import PlanResult
from scrimgrid.timezone import convert_time_slot_label, week_end

from .metrics import best_slots, compute_response_metrics, hourly_average


class ReportDocument:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.lines: list[str] = []
        self.figures: list[plt.Figure] = []

    def add_text(self, text: str) -> None:
        self.lines.append(text)

    def add_figure(self, fig: plt.Figure) -> None:
        self.figures.append(fig)

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with PdfPages(self.path) as pdf:
            if self.lines:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.01,
                    0.99,
                    "\n".join(self.lines),
                    ha="left",
                    va="top",
                    fontsize=8,
                    family="monospace",
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            elif not self.figures:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.5,
                    0.5,
                    "Report contains no data.",
                    ha="center",
                    va="center",
                    fontsize=12,
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            for fig in self.figures:
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)


_ACTIVE_REPORT: Optional[ReportDocument] = None


def set_active_report(doc: Optional[ReportDocument]) -> None:
    global _ACTIVE_REPORT
    _ACTIVE_REPORT = doc


def get_active_report() -> Optional[ReportDocument]:
    return _ACTIVE_REPORT


def _log_print(*args, **kwargs) -> None:
    from io import StringIO

    buf = StringIO()
    kwargs_copy = kwargs.copy()
    kwargs_copy["file"] = buf
    print(*args, **kwargs_copy)
    print(*args, **kwargs)
    if _ACTIVE_REPORT is not None:
        _ACTIVE_REPORT.add_text(buf.getvalue().rstrip("\n"))


def _fmt_pct(num: int, den: int) -> str:
    return f"{100.0 * num / den:.1f}%" if den else "n/a"


def render_text_report(
    grid: AggregateGrid,
    records: Sequence[PlayerAvailabilityRecord],
    config: Config | None = None,
    *,
    week_start: date | str | None = None,
    team_id: str | None = None,
    viewer_tz: Optional[TimezoneOffset] = None,
    top: int = 5,
    plan: Optional[PlanResult] = None,
) -> None:
    C = config or cfg
    tz = viewer_tz if viewer_tz is not None else C.ORG_TIMEZONE

    title = "Team availability"
    if team_id:
        title += f" for team {team_id}"
    if week_start is not None:
        title += f", week {week_start} to {week_end(week_start)}"
    _log_print(title)
    _log_print(f"Times shown in {tz.label}")

    metrics = compute_response_metrics(records, C, grid)
    if metrics.total_records == 0:
        _log_print("\nNo availability submitted for this week.")
        return

    n_cells = len(C.DAYS) * len(C.HOURS)
    _log_print(
        f"\nResponses: records={metrics.total_records} | "
        f"with availability={metrics.responded_players} | "
        f"malformed={metrics.malformed_records}"
    )
    usable = metrics.total_records - metrics.malformed_records
    cell_total = usable * n_cells
    _log_print(
        f"Cells: available={metrics.available_cells:,} "
        f"({_fmt_pct(metrics.available_cells, cell_total)}) | "
        f"unavailable={metrics.unavailable_cells:,} | "
        f"no response={metrics.no_response_cells:,}"
    )
    if metrics.malformed_records:
        _log_print(
            f"⚠️ {metrics.malformed_records} record(s) had unreadable time slots "
            "and were left out of the grid."
        )

    df = aggregate_frame(grid, C)
    df.columns = [d.label for d in C.DAYS]
    _log_print("\nAvailable players per hour (reference time):")
    _log_print(df.to_string())

    avg = hourly_average(grid, C)
    if not avg.empty:
        busiest = int(avg.idxmax())
        _log_print(
            f"\nBusiest hour on average: {busiest}:00 "
            f"({avg.loc[busiest]:.1f} players)"
        )

    slots = best_slots(grid, top=top, viewer_tz=tz, config=C)
    if not slots:
        _log_print("\nBest slots: nobody marked any slot available.")
    else:
        _log_print(f"\nBest slots (top {len(slots)}):")
        for s in slots:
            _log_print(f"  {s.label:<22} {s.count:>3}  {', '.join(s.player_names)}")

    if plan is not None:
        _print_plan(plan, tz, C)


def _print_plan(plan: PlanResult, tz: TimezoneOffset, config: Config) -> None:
    ref = config.ORG_TIMEZONE
    _log_print(f"\nSession planner status: {plan.status_name}")
    if plan.objective_value is None:
        _log_print(
            f"No session plan found ({plan.candidates_considered} candidate blocks "
            "met the attendance minimum)."
        )
        return
    _log_print(
        f"Planned {len(plan.sessions)} session(s), "
        f"total attendance {plan.objective_value:,.0f}"
    )
    df: pd.DataFrame = plan.df_sessions.copy()
    if not df.empty:
        df["time_slot"] = [
            convert_time_slot_label(t, tz, ref) for t in df["time_slot"]
        ]
        _log_print(df.drop(columns=["players"]).to_string(index=False))
        for s in plan.sessions:
            _log_print(f"  {s.display_label(tz, ref)}: {', '.join(s.attendees)}")
