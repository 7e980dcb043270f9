from __future__ import annotations

from datetime import date
from typing import Any, Callable, Optional

from scrimgrid.aggregate import AggregateGrid, aggregate
from scrimgrid.config import Config, cfg
from scrimgrid.errors import (
    EmptySubmissionError,
    RateLimitExceeded,
    WeekNotAccessibleError,
)
from scrimgrid.grid import DayOfWeek, TimezoneOffset
from scrimgrid.player import Player
from scrimgrid.ratelimit import RateLimiter
from scrimgrid.records import PlayerAvailabilityRecord
from scrimgrid.slots import (
    has_any_slot,
    normalize_time_slots,
    slots_to_reference,
    toggle_slot,
)
from scrimgrid.store import RecordStore
from scrimgrid.timezone import is_week_accessible, is_week_in_past, monday_of


class AvailabilityService:
    """
    Write path and heatmap read path around a RecordStore.

    Everything written goes through here so that stored hour keys are always
    reference-timezone hours, whatever timezone the player entered them in.
    """

    def __init__(
        self,
        store: RecordStore,
        config: Config | None = None,
        rate_limiter: RateLimiter | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.store = store
        self.cfg = config or cfg
        self.rate_limiter = rate_limiter
        self._today = today

    # ---------- writes ----------

    def submit(
        self,
        player: Player,
        team_id: Optional[str],
        week_start: date | str,
        time_slots: Any,
        notes: str = "",
        viewer_tz: Optional[TimezoneOffset] = None,
    ) -> PlayerAvailabilityRecord:
        """
        Save a player's full week. `time_slots` hour keys are display hours in
        `viewer_tz` (reference hours when omitted).
        """
        self._check_rate(player)
        week = self._check_week(player, week_start)

        if viewer_tz is not None and viewer_tz != self.cfg.ORG_TIMEZONE:
            slots = slots_to_reference(time_slots, viewer_tz, self.cfg)
        else:
            slots = normalize_time_slots(time_slots) or {}

        if not has_any_slot(slots):
            raise EmptySubmissionError()

        return self.store.upsert(
            PlayerAvailabilityRecord(
                player=player,
                week_start=week,
                time_slots=slots,
                team_id=team_id,
                notes=notes,
            )
        )

    def toggle(
        self,
        player: Player,
        team_id: Optional[str],
        week_start: date | str,
        day: DayOfWeek | str,
        display_hour: int,
        viewer_tz: Optional[TimezoneOffset] = None,
    ) -> PlayerAvailabilityRecord:
        """
        Flip a single cell. Unlike `submit`, an all-false week is allowed
        here since the grid is saved on every click.
        """
        self._check_rate(player)
        week = self._check_week(player, week_start)

        existing = self.store.find(player.id, team_id, week)
        current = existing.time_slots if existing is not None else {}
        notes = existing.notes if existing is not None else ""
        slots = toggle_slot(current, day, display_hour, viewer_tz, self.cfg)

        return self.store.upsert(
            PlayerAvailabilityRecord(
                player=player,
                week_start=week,
                time_slots=slots,
                team_id=team_id,
                notes=notes,
            )
        )

    # ---------- reads ----------

    def records_for_week(
        self, week_start: date | str, team_id: Optional[str] = None
    ) -> list[PlayerAvailabilityRecord]:
        return self.store.fetch(week_start=monday_of(week_start), team_id=team_id)

    def heatmap(
        self,
        week_start: date | str,
        team_id: Optional[str] = None,
        on_malformed: Optional[Callable[[Any], None]] = None,
    ) -> AggregateGrid:
        return aggregate(
            self.records_for_week(week_start, team_id),
            self.cfg,
            on_malformed=on_malformed,
        )

    # ---------- helpers ----------

    def _check_rate(self, player: Player) -> None:
        if self.rate_limiter is None:
            return
        identifier = player.id or "anonymous"
        decision = self.rate_limiter.check(identifier)
        if not decision.allowed:
            raise RateLimitExceeded(identifier, decision.reset_in)

    def _check_week(self, player: Player, week_start: date | str) -> date:
        week = monday_of(week_start)
        if player.is_staff:
            return week
        today = self._today()
        if is_week_in_past(week, today):
            raise WeekNotAccessibleError(
                f"Week of {week.isoformat()} is in the past "
                "and can no longer be edited."
            )
        if not is_week_accessible(week, today, self.cfg.PLAYER_WEEKS_AHEAD):
            raise WeekNotAccessibleError(
                f"Week of {week.isoformat()} is more than "
                f"{self.cfg.PLAYER_WEEKS_AHEAD} weeks ahead."
            )
        return week
