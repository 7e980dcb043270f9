from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from scrimgrid.aggregate import AggregateGrid
from scrimgrid.config import Config, cfg
from scrimgrid.grid import TimezoneOffset
from scrimgrid.records import PlayerAvailabilityRecord
from scrimgrid.reporting.plots import show_availability_heatmap, show_solution_progress
from scrimgrid.reporting.text_report import (
    ReportDocument,
    render_text_report,
    set_active_report,
)
from scrimgrid.result_types import PlanResult


class Reporter:
    """High-level orchestrator: prints the week summary, draws plots, writes the PDF."""

    def __init__(
        self,
        cfg_obj: Config | None = None,
        viewer_tz: Optional[TimezoneOffset] = None,
        top: int = 5,
        enable_plots: bool = True,
    ) -> None:
        self.cfg = cfg_obj or cfg
        self.viewer_tz = viewer_tz
        self.top = top
        self.enable_plots = enable_plots

    def render_text_report(
        self,
        grid: AggregateGrid,
        records: Sequence[PlayerAvailabilityRecord],
        *,
        week_start: date | str | None = None,
        team_id: str | None = None,
        plan: PlanResult | None = None,
    ) -> None:
        """Public entry point for callers that want text reporting only."""
        render_text_report(
            grid,
            records,
            self.cfg,
            week_start=week_start,
            team_id=team_id,
            viewer_tz=self.viewer_tz,
            top=self.top,
            plan=plan,
        )

    def report(
        self,
        grid: AggregateGrid,
        records: Sequence[PlayerAvailabilityRecord],
        *,
        week_start: date | str | None = None,
        team_id: str | None = None,
        plan: PlanResult | None = None,
    ) -> Path:
        """Render the text report (and optional plots) into outputs/report.pdf."""
        path = Path(self.cfg.OUTPUT_DIR) / "report.pdf"
        report_doc = ReportDocument(path)
        set_active_report(report_doc)
        try:
            self.render_text_report(
                grid, records, week_start=week_start, team_id=team_id, plan=plan
            )
            if not self.enable_plots:
                return path
            show_availability_heatmap(
                grid, viewer_tz=self.viewer_tz, week_start=week_start, config=self.cfg
            )
            if plan is not None and plan.progress_history:
                show_solution_progress(plan.progress_history, self.cfg.OUTPUT_DIR)
        finally:
            set_active_report(None)
            report_doc.write()
        return path
