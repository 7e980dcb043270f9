from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from scrimgrid.player import Player, Role


@dataclass(slots=True)
class PlayerAvailabilityRecord:
    """
    One player's availability for one week. `time_slots` is kept exactly as
    it came from storage; it may be sparse, use string hour keys, or be
    malformed altogether. The aggregator copes with all of those.
    """

    player: Player
    week_start: date
    time_slots: Any = field(default_factory=dict)
    team_id: Optional[str] = None
    id: Optional[str] = None
    notes: str = ""
    submitted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.week_start = _to_date(self.week_start, "week_start")
        if self.team_id is not None:
            self.team_id = str(self.team_id)

    @property
    def player_id(self) -> Optional[str]:
        return self.player.id

    @property
    def player_name(self) -> Optional[str]:
        return self.player.name

    @property
    def key(self) -> tuple[Optional[str], Optional[str], date]:
        """Upsert key: one record per player, team and week."""
        return (self.player.id, self.team_id, self.week_start)


def _to_date(value: Any, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as exc:
            raise ValueError(f"Invalid date string '{value}' for {field_name}") from exc
    raise TypeError(f"{field_name} must be an ISO date string or date object.")


def _to_datetime(value: Any) -> Optional[datetime]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _first(row: Mapping[str, Any], *keys: str) -> Any:
    return next((row[k] for k in keys if row.get(k) not in (None, "")), None)


def record_from_row(row: Mapping[str, Any]) -> PlayerAvailabilityRecord:
    """
    Build a record from a stored row. Accepts the joined API shape
    (`player: {id, username, ...}`) as well as flat `player_id`/`player_name`
    columns.
    """
    if not isinstance(row, Mapping):
        raise TypeError("Each availability entry must be an object/dict.")

    joined = row.get("player")
    joined = joined if isinstance(joined, Mapping) else {}

    player_id = _first(row, "player_id") or _first(joined, "id")
    name = _first(joined, "username", "in_game_name", "name") or _first(
        row, "player_name", "username", "name"
    )
    role = _first(joined, "role") or _first(row, "role") or Role.PLAYER.value

    week_raw = _first(row, "week_start", "week")
    if week_raw is None:
        raise ValueError("Availability entry is missing 'week_start'.")

    return PlayerAvailabilityRecord(
        player=Player(id=player_id, name=name, role=Role(role)),
        week_start=_to_date(week_raw, "week_start"),
        time_slots=row.get("time_slots"),
        team_id=_first(row, "team_id", "tryout_week_id"),
        id=_first(row, "id"),
        notes=str(row.get("notes") or ""),
        submitted_at=_to_datetime(row.get("submitted_at")),
        updated_at=_to_datetime(row.get("updated_at")),
    )


def record_to_row(record: PlayerAvailabilityRecord) -> dict[str, Any]:
    """Inverse of `record_from_row`, in the joined API shape."""
    return {
        "id": record.id,
        "player_id": record.player.id,
        "team_id": record.team_id,
        "week_start": record.week_start.isoformat(),
        "time_slots": record.time_slots,
        "notes": record.notes,
        "submitted_at": (
            record.submitted_at.isoformat() if record.submitted_at else None
        ),
        "updated_at": record.updated_at.isoformat() if record.updated_at else None,
        "player": {
            "id": record.player.id,
            "username": record.player.name,
            "role": record.player.role.value,
        },
    }


def records_from_json(path: str | Path) -> list[PlayerAvailabilityRecord]:
    """
    Load availability records from a JSON file on disk.

    Files may contain either a list of rows or an object with a top-level
    `availabilities`/`records` array (the shape the availability API returns).
    """
    file_path = Path(path).expanduser()

    if file_path.suffix.lower() != ".json":
        raise ValueError("records_from_json expects a path to a .json file.")
    if not file_path.exists():
        raise FileNotFoundError(f"Availability JSON file not found: {file_path}")

    try:
        data = json.loads(file_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}") from exc

    if isinstance(data, Mapping):
        entries = data.get("availabilities")
        if entries is None:
            entries = data.get("records")
        if entries is None:
            raise ValueError(
                "JSON file must contain a list or an 'availabilities'/'records' key."
            )
    elif isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        entries = data
    else:
        raise TypeError("JSON file must contain a list of availability objects.")

    if isinstance(entries, (str, bytes, bytearray)) or not isinstance(
        entries, Sequence
    ):
        raise TypeError("JSON file must contain a list of availability objects.")

    return [record_from_row(raw) for raw in entries]


def records_from_frame(df: pd.DataFrame) -> list[PlayerAvailabilityRecord]:
    """
    Build records from a DataFrame, one row per record. Column names are
    matched case-insensitively; `time_slots` cells may hold dicts or JSON text.
    """
    if df.empty:
        return []

    out: list[PlayerAvailabilityRecord] = []
    for raw in df.to_dict(orient="records"):
        row = {str(k).lower(): v for k, v in raw.items()}
        row = {k: (None if _is_missing(v) else v) for k, v in row.items()}
        slots = row.get("time_slots")
        if isinstance(slots, str):
            try:
                row["time_slots"] = json.loads(slots)
            except json.JSONDecodeError:
                pass  # left as the raw string; treated as malformed downstream
        out.append(record_from_row(row))
    return out


def records_to_frame(records: Sequence[PlayerAvailabilityRecord]) -> pd.DataFrame:
    rows = [
        {
            "id": r.id,
            "player_id": r.player.id,
            "player_name": r.player.name,
            "team_id": r.team_id,
            "week_start": r.week_start,
            "time_slots": r.time_slots,
            "notes": r.notes,
        }
        for r in records
    ]
    return pd.DataFrame(
        rows,
        columns=[
            "id",
            "player_id",
            "player_name",
            "team_id",
            "week_start",
            "time_slots",
            "notes",
        ],
    )


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (Mapping, list, tuple, str)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
