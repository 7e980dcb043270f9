from __future__ import annotations

from types import SimpleNamespace

import pandas as pd

from scrimgrid.aggregate import AggregateCell, aggregate, aggregate_frame, cells_to_frame
from scrimgrid.config import Config
from scrimgrid.grid import DayOfWeek
from scrimgrid.player import Player
from scrimgrid.presets import Preset, build_preset

TUE = DayOfWeek.TUESDAY


def test_empty_input_gives_all_63_zero_cells(cfg):
    grid = aggregate([], cfg)
    assert len(grid) == 63
    assert all(c.count == 0 and c.player_names == () for c in grid.values())
    assert list(grid) == cfg.cells()


def test_cells_carry_their_key():
    cell = aggregate([])[(DayOfWeek.MONDAY, 15)]
    assert cell == AggregateCell(DayOfWeek.MONDAY, 15)
    assert cell.key == (DayOfWeek.MONDAY, 15)


def test_alice_and_bob(cfg, make_record):
    records = [
        make_record("Alice", {"tuesday": {18: True, 19: True}}),
        make_record("Bob", {"tuesday": {19: True}}),
    ]
    grid = aggregate(records, cfg)
    assert grid[(TUE, 18)].count == 1
    assert grid[(TUE, 18)].player_names == ("Alice",)
    assert grid[(TUE, 19)].count == 2
    assert grid[(TUE, 19)].player_names == ("Alice", "Bob")
    others = [c for k, c in grid.items() if k not in {(TUE, 18), (TUE, 19)}]
    assert len(others) == 61
    assert all(c.count == 0 and c.player_names == () for c in others)


def test_is_deterministic(cfg, make_record):
    records = [
        make_record("Alice", {"monday": {15: True}, "sunday": {"23": True}}),
        make_record("Bob", {"monday": {15: True}}),
    ]
    assert aggregate(records, cfg) == aggregate(records, cfg)


def test_names_follow_input_order(cfg, make_record):
    a = make_record("Alice", {"monday": {15: True}})
    b = make_record("Bob", {"monday": {15: True}})
    assert aggregate([b, a], cfg)[(DayOfWeek.MONDAY, 15)].player_names == ("Bob", "Alice")


def test_one_more_record_adds_exactly_one(cfg, make_record):
    base = [
        make_record("Alice", {"wednesday": {20: True, 21: True}}),
        make_record("Bob", {"thursday": {16: True}}),
    ]
    before = aggregate(base, cfg)
    after = aggregate(base + [make_record("Kestrel", {"wednesday": {21: True}})], cfg)
    x = (DayOfWeek.WEDNESDAY, 21)
    assert after[x].count == before[x].count + 1
    for key in before:
        if key != x:
            assert after[key] == before[key]


def test_strict_true_semantics(cfg, make_record):
    records = [
        make_record("False", {"monday": {15: False}}),
        make_record("Absent", {"monday": {16: True}}),
        make_record("NoDay", {"tuesday": {15: True}}),
        make_record("Truthy", {"monday": {15: 1, "15": "true"}}),
    ]
    assert aggregate(records, cfg)[(DayOfWeek.MONDAY, 15)].count == 0


def test_out_of_window_hours_and_unknown_days_are_ignored(cfg, make_record):
    rec = make_record("Alice", {"monday": {3: True, 14: True, 15: True}, "funday": {15: True}})
    grid = aggregate([rec], cfg)
    assert len(grid) == 63
    assert sum(c.count for c in grid.values()) == 1


def test_malformed_records_are_skipped_and_reported(cfg, make_record):
    seen = []
    records = [
        make_record("Null", None),
        make_record("Garbage", "garbage"),
        make_record("List", [1, 2, 3]),
        SimpleNamespace(player=None),
        make_record("Alice", {"friday": {22: True}}),
    ]
    grid = aggregate(records, cfg, on_malformed=seen.append)
    assert len(seen) == 4
    assert sum(c.count for c in grid.values()) == 1
    assert grid[(DayOfWeek.FRIDAY, 22)].player_names == ("Alice",)


def test_missing_name_uses_placeholder(make_record):
    C = Config(UNKNOWN_PLAYER_NAME="???")
    rec = make_record(None, {"monday": {18: True}}, player_id="p9")
    blank = make_record("Alice", {"monday": {18: True}})
    blank.player = Player(id="p10", name="   ")
    grid = aggregate([rec, blank], C)
    assert grid[(DayOfWeek.MONDAY, 18)].player_names == ("???", "???")


def test_custom_window():
    C = Config(DAYS=("saturday", "sunday"), HOURS=range(20, 23), EVENING_START=20)
    grid = aggregate([], C)
    assert len(grid) == 6
    assert (DayOfWeek.MONDAY, 20) not in grid


def test_frames(cfg, make_record):
    grid = aggregate([make_record("Alice", {"tuesday": {18: True}})], cfg)
    df = aggregate_frame(grid, cfg)
    assert df.shape == (9, 7)
    assert df.index.name == "hour"
    assert df.loc[18, "tuesday"] == 1
    assert int(df.to_numpy().sum()) == 1

    long = cells_to_frame(grid)
    assert len(long) == 63
    row = long[(long["day"] == "tuesday") & (long["hour"] == 18)].iloc[0]
    assert row["players"] == "Alice"
    assert isinstance(long, pd.DataFrame)


def test_dense_preset_and_sparse_slots_aggregate_together(cfg, make_record):
    evenings = build_preset(Preset.EVENINGS_ONLY, cfg)
    records = [
        make_record("Alice", evenings),
        make_record(
            "Bob", {"wednesday": {15: True, 19: True}, "saturday": {"22": True}}
        ),
    ]
    grid = aggregate(records, cfg)

    both = {(DayOfWeek.WEDNESDAY, 19), (DayOfWeek.SATURDAY, 22)}
    for (day, hour), cell in grid.items():
        if (day, hour) in both:
            assert cell.count == 2
            assert cell.player_names == ("Alice", "Bob")
        elif hour >= 18:
            assert cell.count == 1
            assert cell.player_names == ("Alice",)
        elif (day, hour) == (DayOfWeek.WEDNESDAY, 15):
            assert cell.player_names == ("Bob",)
        else:
            assert cell.count == 0
    assert sum(c.count for c in grid.values()) == 7 * 6 + 3
