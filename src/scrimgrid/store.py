from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Callable, Optional, Protocol

from scrimgrid.records import PlayerAvailabilityRecord


class RecordStore(Protocol):
    """Minimal persistence interface the service needs."""

    def upsert(self, record: PlayerAvailabilityRecord) -> PlayerAvailabilityRecord: ...
    def fetch(
        self,
        week_start: Optional[date] = None,
        team_id: Optional[str] = None,
        player_id: Optional[str] = None,
    ) -> list[PlayerAvailabilityRecord]: ...
    def get(self, record_id: str) -> Optional[PlayerAvailabilityRecord]: ...
    def find(
        self, player_id: Optional[str], team_id: Optional[str], week_start: date
    ) -> Optional[PlayerAvailabilityRecord]: ...
    def delete(self, record_id: str) -> bool: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryRecordStore:
    """
    Dict-backed store keyed by (player, team, week). Saving the same key again
    overwrites the previous record in place (last write wins) and keeps its id
    and creation position.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._by_key: dict[tuple, PlayerAvailabilityRecord] = {}

    def upsert(self, record: PlayerAvailabilityRecord) -> PlayerAvailabilityRecord:
        now = self._clock()
        existing = self._by_key.get(record.key)
        if existing is not None:
            saved = replace(
                record,
                id=existing.id,
                submitted_at=now,
                updated_at=now,
            )
        else:
            saved = replace(
                record,
                id=record.id or str(uuid.uuid4()),
                submitted_at=now,
                updated_at=None,
            )
        self._by_key[record.key] = saved
        return saved

    def fetch(
        self,
        week_start: Optional[date] = None,
        team_id: Optional[str] = None,
        player_id: Optional[str] = None,
    ) -> list[PlayerAvailabilityRecord]:
        """Records matching every given filter, in first-insertion order."""
        out: list[PlayerAvailabilityRecord] = []
        for rec in self._by_key.values():
            if week_start is not None and rec.week_start != week_start:
                continue
            if team_id is not None and rec.team_id != team_id:
                continue
            if player_id is not None and rec.player.id != player_id:
                continue
            out.append(rec)
        return out

    def find(
        self, player_id: Optional[str], team_id: Optional[str], week_start: date
    ) -> Optional[PlayerAvailabilityRecord]:
        """Exact-key lookup; unlike `fetch`, `None` matches only `None`."""
        team = str(team_id) if team_id is not None else None
        return self._by_key.get((player_id, team, week_start))

    def get(self, record_id: str) -> Optional[PlayerAvailabilityRecord]:
        return next((r for r in self._by_key.values() if r.id == record_id), None)

    def delete(self, record_id: str) -> bool:
        for key, rec in self._by_key.items():
            if rec.id == record_id:
                del self._by_key[key]
                return True
        return False

    def __len__(self) -> int:
        return len(self._by_key)
