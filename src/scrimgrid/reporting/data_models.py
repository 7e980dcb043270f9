from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HeatmapColor:
    """A colour bucket of the availability scale."""

    name: str  # palette family, e.g. "orange"
    hex: str


@dataclass(frozen=True)
class SlotSummary:
    """One ranked cell of the aggregate grid."""

    day: str
    hour: int
    count: int
    label: str  # "Tue 6 PM - 7 PM" in the viewer's timezone
    player_names: tuple[str, ...]


@dataclass(frozen=True)
class ResponseMetrics:
    """Who answered, and how, for one week's records."""

    total_records: int
    malformed_records: int
    responded_players: int  # at least one available cell
    available_cells: int
    unavailable_cells: int  # explicit False
    no_response_cells: int  # key absent
    peak_count: int
