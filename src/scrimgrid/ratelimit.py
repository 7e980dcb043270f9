from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from scrimgrid.config import Config


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    reset_in: float  # seconds until the current window closes


@dataclass
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    """
    Fixed-window request counter keyed by identifier.

    Each identifier gets `max_requests` calls per `window_sec`; the window
    starts on the first call after the previous one expired. State lives on
    the instance, so callers own its lifetime and tests can inject a clock.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_sec: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests <= 0:
            raise ValueError("max_requests must be > 0.")
        if window_sec <= 0:
            raise ValueError("window_sec must be > 0.")
        self.max_requests = max_requests
        self.window_sec = float(window_sec)
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    @classmethod
    def from_config(cls, C: "Config", **kwargs) -> "RateLimiter":
        return cls(C.RATE_LIMIT_MAX_REQUESTS, C.RATE_LIMIT_WINDOW_SEC, **kwargs)

    def check(self, identifier: str) -> RateLimitDecision:
        now = self._clock()
        win = self._windows.get(identifier)

        if win is None or now > win.reset_at:
            self._windows[identifier] = _Window(count=1, reset_at=now + self.window_sec)
            return RateLimitDecision(True, self.max_requests - 1, self.window_sec)

        if win.count >= self.max_requests:
            return RateLimitDecision(False, 0, win.reset_at - now)

        win.count += 1
        return RateLimitDecision(
            True, self.max_requests - win.count, win.reset_at - now
        )

    def cleanup(self) -> int:
        """Drop expired windows; returns how many were removed."""
        now = self._clock()
        expired = [k for k, w in self._windows.items() if now > w.reset_at]
        for k in expired:
            del self._windows[k]
        return len(expired)

    def __len__(self) -> int:
        return len(self._windows)
