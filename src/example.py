"""
Module with example code for summarising team availability.

There are three ways to run the code:

1. Run the code with default options. This will generate
    synthetic availability from the config and summarise it.
2. Run the code with availability defined via code, built with the
    quick-fill presets and a viewer timezone.
3. Run the code with availability pre-defined in a JSON file, and plan
    the week's practice sessions. Typical production use.

Usage via cli:
    python3 -m src.example --option 1
"""

from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path

from scrimgrid import Config, TimezoneOffset, run_availability
from scrimgrid.main import MinimalProgress, Reporter, default_record_builder
from scrimgrid.player import Player
from scrimgrid.presets import Preset, build_preset
from scrimgrid.records import PlayerAvailabilityRecord, records_from_json
from scrimgrid.slots import set_slot, slots_to_reference

cfg = Config(
    ORG_TIMEZONE=TimezoneOffset.UTC_PLUS_1,
    DEFAULT_TIMEZONE=TimezoneOffset.UTC_PLUS_1,
    SESSIONS_PER_WEEK=3,
    SESSION_HOURS=2,
    MIN_ATTENDEES=3,
    TIME_LIMIT_SEC=10.0,
    NUM_PARALLEL_WORKERS=4,
    LOG_SOLUTIONS_FREQUENCY_SECONDS=5.0,
)

WEEK = date(2025, 10, 13)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run availability examples.")
    parser.add_argument(
        "--option",
        type=int,
        default=3,
        choices=(1, 2, 3),
        help="Example scenario to run (default: 3).",
    )
    return parser.parse_args()


def run_option(option: int) -> None:
    print(f"Running example code with option {option}")

    # Run the code with default options. This will generate
    # synthetic availability from the config and summarise it.
    if option == 1:

        # The parameters below are defaults, with the exception of config,
        # they can be omitted i.e. the below is equivalent to:
        # run_availability(cfg, week_start=WEEK)
        run_availability(
            config=cfg,
            validate_config=True,
            record_builder=default_record_builder,
            week_start=WEEK,
            reporter=Reporter(cfg),
            enable_reporting=True,
        )

    # Run the code with availability defined via code.
    elif option == 2:

        # Alice fills in evenings only from Helsinki (UTC+2); the grid she
        # sees is shifted one hour later than the stored reference hours.
        alice_view = build_preset(Preset.EVENINGS_ONLY, cfg)
        alice = PlayerAvailabilityRecord(
            player=Player(id="p1", name="Alice"),
            week_start=WEEK,
            time_slots=slots_to_reference(alice_view, TimezoneOffset.UTC_PLUS_2, cfg),
        )

        bob_slots = build_preset(Preset.WEEKENDS_ONLY, cfg)
        bob_slots = set_slot(bob_slots, "monday", 18, True, config=cfg)
        bob = PlayerAvailabilityRecord(
            player=Player(id="p2", name="Bob"),
            week_start=WEEK,
            time_slots=bob_slots,
        )

        run_availability(
            cfg,
            records=[alice, bob],
            week_start=WEEK,
            viewer_tz=TimezoneOffset.UTC_PLUS_2,
        )

    # Run the code with availability defined via JSON. Typical production use.
    elif option == 3:

        records = records_from_json(Path("src/example_availability.json"))
        run_availability(
            cfg,
            records=records,
            week_start=WEEK,
            team_id="academy",
            plan=True,
            progress_cb=MinimalProgress(
                cfg.TIME_LIMIT_SEC, cfg.LOG_SOLUTIONS_FREQUENCY_SECONDS
            ),
        )
    else:
        raise SystemExit(f"Unknown option {option}")


def main() -> None:
    args = parse_args()
    run_option(args.option)


if __name__ == "__main__":
    main()
