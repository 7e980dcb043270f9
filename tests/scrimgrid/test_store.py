from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from scrimgrid.player import Player
from scrimgrid.records import PlayerAvailabilityRecord
from scrimgrid.store import InMemoryRecordStore

WEEK = date(2025, 10, 13)


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 10, 13, 12, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


def rec(pid, slots, week=WEEK, team="t1"):
    return PlayerAvailabilityRecord(
        player=Player(id=pid, name=pid.upper()),
        week_start=week,
        time_slots=slots,
        team_id=team,
    )


def test_upsert_creates_then_overwrites():
    store = InMemoryRecordStore(clock=FakeClock())
    first = store.upsert(rec("a", {"monday": {18: True}}))
    assert first.id is not None
    assert first.updated_at is None

    second = store.upsert(rec("a", {"monday": {19: True}}))
    assert len(store) == 1
    assert second.id == first.id
    assert second.time_slots == {"monday": {19: True}}
    assert second.updated_at == second.submitted_at
    assert second.submitted_at > first.submitted_at


def test_fetch_filters_and_keeps_insertion_order():
    store = InMemoryRecordStore()
    store.upsert(rec("b", {}))
    store.upsert(rec("a", {}))
    store.upsert(rec("c", {}, team="t2"))
    store.upsert(rec("a", {}, week=WEEK + timedelta(weeks=1)))
    store.upsert(rec("b", {"monday": {18: True}}))

    week_t1 = store.fetch(week_start=WEEK, team_id="t1")
    assert [r.player.id for r in week_t1] == ["b", "a"]
    assert len(store.fetch(player_id="a")) == 2
    assert len(store.fetch()) == 4


def test_get_and_delete():
    store = InMemoryRecordStore()
    saved = store.upsert(rec("a", {}))
    assert store.get(saved.id) == saved
    assert store.delete(saved.id)
    assert not store.delete(saved.id)
    assert store.get(saved.id) is None


def test_find_matches_the_exact_key_only():
    store = InMemoryRecordStore()
    saved = store.upsert(rec("a", {"monday": {18: True}}, team="t1"))
    assert store.find("a", "t1", WEEK) == saved
    assert store.find("a", None, WEEK) is None
    assert store.find(None, "t1", WEEK) is None
    assert store.find("a", "t1", WEEK + timedelta(weeks=1)) is None

    teamless = store.upsert(rec("a", {}, team=None))
    assert store.find("a", None, WEEK) == teamless
