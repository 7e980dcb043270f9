from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, TypeAlias

import pandas as pd

from scrimgrid.config import Config, cfg
from scrimgrid.grid import DayOfWeek, HourSlot
from scrimgrid.records import PlayerAvailabilityRecord
from scrimgrid.slots import is_available

CellKey: TypeAlias = tuple[DayOfWeek, HourSlot]


@dataclass(frozen=True)
class AggregateCell:
    """Players available at one (day, hour) of the reference-timezone grid."""

    day: DayOfWeek
    hour: HourSlot
    count: int = 0
    player_names: tuple[str, ...] = ()

    @property
    def key(self) -> CellKey:
        return (self.day, self.hour)


AggregateGrid: TypeAlias = dict[CellKey, AggregateCell]


def aggregate(
    records: Iterable[PlayerAvailabilityRecord],
    config: Config | None = None,
    on_malformed: Optional[Callable[[Any], None]] = None,
) -> AggregateGrid:
    """
    Count available players per canonical cell.

    Every (day, hour) of the grid is present in the result, day-major and
    hour-minor, including cells nobody marked. A cell counts a record only if
    its value is exactly True. Names follow the input record order.

    A record whose `time_slots` is not a mapping contributes nothing and is
    passed to `on_malformed` if given. Nothing in here raises on bad data.
    """
    C = config or cfg
    counts: dict[CellKey, int] = {}
    names: dict[CellKey, list[str]] = {}
    for d in C.DAYS:
        for h in C.HOURS:
            counts[(d, h)] = 0
            names[(d, h)] = []

    for rec in records:
        slots = getattr(rec, "time_slots", None)
        if not isinstance(slots, Mapping):
            if on_malformed is not None:
                on_malformed(rec)
            continue
        player_name = display_name_of(rec, C.UNKNOWN_PLAYER_NAME)
        for d in C.DAYS:
            for h in C.HOURS:
                if is_available(slots, d, h):
                    counts[(d, h)] += 1
                    names[(d, h)].append(player_name)

    return {
        key: AggregateCell(
            day=key[0], hour=key[1], count=counts[key], player_names=tuple(names[key])
        )
        for key in counts
    }


def display_name_of(rec: Any, placeholder: str) -> str:
    player = getattr(rec, "player", None)
    name = getattr(player, "name", None)
    if isinstance(name, str) and name.strip():
        return name
    return placeholder


def aggregate_frame(grid: AggregateGrid, config: Config | None = None) -> pd.DataFrame:
    """Counts as a DataFrame: one row per canonical hour, one column per day."""
    C = config or cfg
    data = {
        d.value: [grid[(d, h)].count if (d, h) in grid else 0 for h in C.HOURS]
        for d in C.DAYS
    }
    return pd.DataFrame(data, index=pd.Index(C.HOURS, name="hour"))


def cells_to_frame(grid: AggregateGrid) -> pd.DataFrame:
    """Long format: one row per cell with count and comma-joined names."""
    rows = [
        {
            "day": cell.day.value,
            "hour": cell.hour,
            "count": cell.count,
            "players": ", ".join(cell.player_names),
        }
        for cell in grid.values()
    ]
    return pd.DataFrame(rows, columns=["day", "hour", "count", "players"])
