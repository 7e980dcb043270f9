from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path
from typing import Callable, Optional, Sequence

from ortools.sat.python import cp_model

from scrimgrid.aggregate import aggregate, aggregate_frame, cells_to_frame
from scrimgrid.config import Config, cfg
from scrimgrid.generate.records import RecordGenConfig, create_records
from scrimgrid.grid import TimezoneOffset, parse_timezone
from scrimgrid.planner import plan_sessions
from scrimgrid.progress import MinimalProgress
from scrimgrid.records import PlayerAvailabilityRecord, records_from_json
from scrimgrid.reporting import Reporter
from scrimgrid.result_types import AvailabilityRun
from scrimgrid.timezone import monday_of

RecordBuilder = Callable[[Config, date, Optional[str]], list[PlayerAvailabilityRecord]]


def default_record_builder(
    config: Config, week_start: date, team_id: Optional[str]
) -> list[PlayerAvailabilityRecord]:
    """Build synthetic records using the project's helper."""
    seed = config.SEED if config.SEED is not None else 42
    return create_records(RecordGenConfig(seed=seed), week_start, team_id, config)


def _select_week(
    records: Sequence[PlayerAvailabilityRecord],
    week_start: Optional[date],
    team_id: Optional[str],
) -> list[PlayerAvailabilityRecord]:
    out = []
    for rec in records:
        if week_start is not None and rec.week_start != week_start:
            continue
        if team_id is not None and rec.team_id != team_id:
            continue
        out.append(rec)
    return out


def run_availability(
    config: Config | None = None,
    records: Sequence[PlayerAvailabilityRecord] | None = None,
    record_builder: RecordBuilder | None = None,
    week_start: date | str | None = None,
    team_id: str | None = None,
    viewer_tz: TimezoneOffset | None = None,
    reporter: Reporter | None = None,
    enable_reporting: bool = True,
    plan: bool = False,
    progress_cb: cp_model.CpSolverSolutionCallback | None = None,
    validate_config: bool = True,
    export_csv: bool = True,
) -> AvailabilityRun:
    """
    Aggregate one week of team availability and optionally plan sessions.

    Parameters
    ----------
    config:
        The configuration for the run. Defaults to `scrimgrid.config.cfg` when omitted.
    records:
        Pre-loaded records. Only those matching `week_start` and `team_id`
        (when given) are used. When omitted then `record_builder` (or the
        synthetic builder) produces them.
    week_start:
        Any date in the week; it is normalised to that week's Monday. Defaults
        to the current week when records are generated.
    viewer_tz:
        Timezone the report is labelled in. Defaults to `config.DEFAULT_TIMEZONE`.
    reporter:
        Custom reporter instance. Set `enable_reporting=False` to skip output.
    plan:
        Also choose practice sessions with the CP-SAT planner.
    progress_cb:
        Optional `cp_model.CpSolverSolutionCallback`. Defaults to `MinimalProgress`.

    Returns
    -------
    AvailabilityRun
        The records used, the aggregate grid, any malformed records and the plan.
    """
    cfg_obj = config or cfg
    if validate_config:
        cfg_obj.validate()

    week = monday_of(week_start) if week_start is not None else None
    if records is None:
        builder = record_builder or default_record_builder
        week = week or monday_of(date.today(), cfg_obj.ORG_TIMEZONE)
        records = builder(cfg_obj, week, team_id)
    selected = _select_week(records, week, team_id)
    if week is None and selected:
        weeks = {rec.week_start for rec in selected}
        if len(weeks) > 1:
            raise ValueError(
                f"Records span {len(weeks)} weeks; pass week_start to pick one."
            )
        week = next(iter(weeks))

    malformed: list[PlayerAvailabilityRecord] = []
    grid = aggregate(selected, cfg_obj, on_malformed=malformed.append)
    if malformed:
        names = ", ".join(
            rec.player.display_name(cfg_obj.UNKNOWN_PLAYER_NAME) for rec in malformed
        )
        print(
            f"⚠️ Skipped {len(malformed)} record(s) with unreadable time slots: "
            f"{names}"
        )

    plan_result = None
    if plan:
        progress = progress_cb or MinimalProgress(
            cfg_obj.TIME_LIMIT_SEC, cfg_obj.LOG_SOLUTIONS_FREQUENCY_SECONDS
        )
        plan_result = plan_sessions(selected, cfg_obj, progress_cb=progress)

    tz = viewer_tz if viewer_tz is not None else cfg_obj.DEFAULT_TIMEZONE
    active_reporter = reporter if enable_reporting else None
    if active_reporter is None and enable_reporting:
        active_reporter = Reporter(cfg_obj, viewer_tz=tz)
    if active_reporter is not None:
        active_reporter.report(
            grid, selected, week_start=week, team_id=team_id, plan=plan_result
        )

    run = AvailabilityRun(
        week_start=week,
        team_id=team_id,
        records=selected,
        grid=grid,
        malformed=malformed,
        plan=plan_result,
    )
    if export_csv:
        _export_csv(run, cfg_obj)
    return run


def _export_csv(run: AvailabilityRun, config: Config) -> None:
    out_dir = Path(config.OUTPUT_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)
    aggregate_frame(run.grid, config).to_csv(out_dir / "availability_counts.csv")
    cells_to_frame(run.grid).to_csv(out_dir / "availability_cells.csv", index=False)
    if run.plan is not None and not run.plan.df_sessions.empty:
        run.plan.df_sessions.to_csv(out_dir / "planned_sessions.csv", index=False)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Summarise a team's weekly availability."
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="JSON file of availability records (default: synthetic data).",
    )
    parser.add_argument(
        "--week",
        type=date.fromisoformat,
        default=None,
        help="Any date in the week to summarise, YYYY-MM-DD.",
    )
    parser.add_argument("--team", default=None, help="Only records for this team id.")
    parser.add_argument(
        "--timezone",
        type=parse_timezone,
        default=None,
        help="Viewer timezone, e.g. UTC+2 or EET (default: config DEFAULT_TIMEZONE).",
    )
    parser.add_argument(
        "--plan", action="store_true", help="Also plan practice sessions."
    )
    parser.add_argument(
        "--no-plots", action="store_true", help="Skip the heatmap and progress plots."
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> AvailabilityRun:
    """CLI entry point."""
    args = parse_args(argv)
    tz = args.timezone or cfg.DEFAULT_TIMEZONE
    records = records_from_json(args.input) if args.input is not None else None
    return run_availability(
        config=cfg,
        records=records,
        week_start=args.week,
        team_id=args.team,
        viewer_tz=tz,
        reporter=Reporter(cfg, viewer_tz=tz, enable_plots=not args.no_plots),
        plan=args.plan,
    )


if __name__ == "__main__":
    main()
