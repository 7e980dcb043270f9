# synthetic availability generation
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

import numpy as np
import pandas as pd

from scrimgrid.config import Config, cfg
from scrimgrid.generate.names import PLAYER_TAGS
from scrimgrid.player import Player
from scrimgrid.records import PlayerAvailabilityRecord, records_to_frame
from scrimgrid.timezone import monday_of


@dataclass(slots=True)
class RecordGenConfig:
    """
    Configuration for generation of synthetic weekly availability.
    """

    n: int = 10

    # Per-cell probability of being available, before/after EVENING_START
    afternoon_rate: float = 0.25
    evening_rate: float = 0.65
    weekend_bonus: float = 0.10

    # Per-cell probability that the key is left out (no response)
    no_response_rate: float = 0.05

    # Players who submitted nothing usable at all
    malformed_pct: float = 0.0

    # RNG seed
    seed: Optional[int] = 7

    def validate(self) -> None:
        if self.n <= 0:
            raise ValueError("n must be > 0.")
        if self.n > len(PLAYER_TAGS):
            raise ValueError(
                f"Not enough PLAYER_TAGS ({len(PLAYER_TAGS)}) for n={self.n}."
            )
        for name in (
            "afternoon_rate",
            "evening_rate",
            "weekend_bonus",
            "no_response_rate",
            "malformed_pct",
        ):
            x = getattr(self, name)
            if not (0.0 <= x <= 1.0):
                raise ValueError(f"{name} must be in [0,1].")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError("seed must be an int or None.")


def _rng(seed: Optional[int]) -> np.random.Generator:
    return np.random.default_rng(seed) if seed is not None else np.random.default_rng()


def create_players(gen: RecordGenConfig, team_id: str | None = None) -> list[Player]:
    gen.validate()
    return [
        Player(id=f"p{i:03d}", name=PLAYER_TAGS[i], team_id=team_id)
        for i in range(gen.n)
    ]


def create_records(
    gen: RecordGenConfig,
    week_start: date | str,
    team_id: str | None = None,
    config: Config | None = None,
) -> list[PlayerAvailabilityRecord]:
    """
    One record per synthetic player for the given week. Cells use reference
    hour keys; a cell is True, False, or missing (no response).
    """
    C = config or cfg
    g = _rng(gen.seed)
    players = create_players(gen, team_id)
    monday = monday_of(week_start)

    out: list[PlayerAvailabilityRecord] = []
    for p in players:
        if g.random() < gen.malformed_pct:
            out.append(
                PlayerAvailabilityRecord(
                    player=p, week_start=monday, time_slots=None, team_id=team_id
                )
            )
            continue
        slots: dict[str, dict[int, bool]] = {}
        for d in C.DAYS:
            day_map: dict[int, bool] = {}
            for h in C.HOURS:
                if g.random() < gen.no_response_rate:
                    continue
                rate = gen.evening_rate if h >= C.EVENING_START else gen.afternoon_rate
                if d.is_weekend:
                    rate = min(1.0, rate + gen.weekend_bonus)
                day_map[h] = bool(g.random() < rate)
            slots[d.value] = day_map
        out.append(
            PlayerAvailabilityRecord(
                player=p, week_start=monday, time_slots=slots, team_id=team_id
            )
        )
    return out


def records_summary(records: list[PlayerAvailabilityRecord]) -> dict:
    n = len(records)
    usable = [r for r in records if isinstance(r.time_slots, dict)]
    marked = sum(
        sum(1 for v in day.values() if v is True)
        for r in usable
        for day in r.time_slots.values()
    )
    return {
        "N": n,
        "usable": len(usable),
        "available_cells": marked,
        "malformed_pct": (n - len(usable)) / n if n else 0.0,
    }


def synthetic_frame(
    gen: RecordGenConfig,
    week_start: date | str,
    team_id: str | None = None,
    config: Config | None = None,
) -> pd.DataFrame:
    return records_to_frame(create_records(gen, week_start, team_id, config))
