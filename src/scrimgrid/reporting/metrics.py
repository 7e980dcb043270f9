from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable, Optional

import pandas as pd

from scrimgrid.aggregate import AggregateGrid, aggregate, aggregate_frame
from scrimgrid.config import Config, cfg
from scrimgrid.grid import TimezoneOffset
from scrimgrid.records import PlayerAvailabilityRecord
from scrimgrid.slots import SlotState, has_any_slot, slot_state
from scrimgrid.timezone import format_hour_range, to_display_hour

from .data_models import ResponseMetrics, SlotSummary


def cell_label(
    day_label: str, hour: int, viewer_tz: TimezoneOffset, config: Config
) -> str:
    display = to_display_hour(hour, viewer_tz, config.ORG_TIMEZONE)
    return f"{day_label} {format_hour_range(display)}"


def best_slots(
    grid: AggregateGrid,
    top: int = 5,
    min_count: int = 1,
    viewer_tz: Optional[TimezoneOffset] = None,
    config: Config | None = None,
) -> list[SlotSummary]:
    """
    Highest-count cells, busiest first. Equal counts keep grid order
    (earlier day, then earlier hour).
    """
    C = config or cfg
    tz = viewer_tz if viewer_tz is not None else C.ORG_TIMEZONE
    cells = [c for c in grid.values() if c.count >= min_count]
    if not cells or top <= 0:
        return []

    df = pd.DataFrame(
        {
            "pos": range(len(cells)),
            "count": [c.count for c in cells],
        }
    )
    order = df.sort_values(["count", "pos"], ascending=[False, True], kind="stable")
    out: list[SlotSummary] = []
    for pos in order["pos"].head(top):
        c = cells[int(pos)]
        out.append(
            SlotSummary(
                day=c.day.value,
                hour=c.hour,
                count=c.count,
                label=cell_label(c.day.label, c.hour, tz, C),
                player_names=c.player_names,
            )
        )
    return out


def daily_totals(grid: AggregateGrid, config: Config | None = None) -> pd.Series:
    """Available player-hours per day."""
    return aggregate_frame(grid, config).sum(axis=0)


def hourly_average(grid: AggregateGrid, config: Config | None = None) -> pd.Series:
    """Mean available players per hour across the week."""
    return aggregate_frame(grid, config).mean(axis=1)


def compute_response_metrics(
    records: Iterable[PlayerAvailabilityRecord],
    config: Config | None = None,
    grid: AggregateGrid | None = None,
) -> ResponseMetrics:
    C = config or cfg
    records = list(records)
    if grid is None:
        grid = aggregate(records, C)
    total = malformed = responded = 0
    counts = {state: 0 for state in SlotState}
    for rec in records:
        total += 1
        slots = getattr(rec, "time_slots", None)
        if not isinstance(slots, Mapping):
            malformed += 1
            continue
        if has_any_slot(slots):
            responded += 1
        for d, h in C.cells():
            counts[slot_state(slots, d, h)] += 1

    return ResponseMetrics(
        total_records=total,
        malformed_records=malformed,
        responded_players=responded,
        available_cells=counts[SlotState.AVAILABLE],
        unavailable_cells=counts[SlotState.UNAVAILABLE],
        no_response_cells=counts[SlotState.NO_RESPONSE],
        peak_count=max((c.count for c in grid.values()), default=0),
    )
