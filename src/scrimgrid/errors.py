from __future__ import annotations


class AvailabilityError(ValueError):
    """Base class for rejected availability writes."""


class EmptySubmissionError(AvailabilityError):
    def __init__(self) -> None:
        super().__init__("Please select at least one time slot when you are available")


class WeekNotAccessibleError(AvailabilityError):
    pass


class RateLimitExceeded(AvailabilityError):
    def __init__(self, identifier: str, reset_in: float) -> None:
        super().__init__(
            f"Too many requests for {identifier!r}; retry in {reset_in:.1f}s."
        )
        self.identifier = identifier
        self.reset_in = reset_in
