# tests/conftest.py
from __future__ import annotations

import os
import random
from datetime import date
from pathlib import Path

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg", force=True)

from scrimgrid.config import Config
from scrimgrid.player import Player
from scrimgrid.records import PlayerAvailabilityRecord


# -----------------------------
# Global, deterministic seeding
# -----------------------------
@pytest.fixture(autouse=True, scope="session")
def _seed_everything() -> None:
    """
    Make tests deterministic across runs. If you need a different seed in a test,
    override locally.
    """
    seed = int(os.environ.get("PYTEST_SEED", "1234"))
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    np.random.seed(seed)


# -----------------------------
# Path helpers
# -----------------------------
@pytest.fixture(scope="session")
def project_root() -> Path:
    """Repository root (where pyproject.toml lives)."""
    return Path(__file__).resolve().parents[1]


@pytest.fixture
def in_tmp_dir(tmp_path, monkeypatch) -> Path:
    """Run the test from an empty directory so outputs/ lands in tmp."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


# -----------------------------
# Domain helpers
# -----------------------------
WEEK = date(2025, 10, 13)


@pytest.fixture
def week() -> date:
    return WEEK


@pytest.fixture
def cfg() -> Config:
    return Config()


@pytest.fixture
def make_record():
    """Factory for records; the player id defaults to the lower-cased name."""

    def _make(name, time_slots, player_id=None, week_start=WEEK, team_id=None):
        return PlayerAvailabilityRecord(
            player=Player(id=player_id or (name or "anon").lower(), name=name),
            week_start=week_start,
            time_slots=time_slots,
            team_id=team_id,
        )

    return _make
