from .aggregate import AggregateCell, aggregate
from .config import Config, cfg
from .grid import DayOfWeek, TimezoneOffset
from .main import run_availability
from .presets import Preset, build_preset
from .records import PlayerAvailabilityRecord

__all__ = [
    "AggregateCell",
    "Config",
    "DayOfWeek",
    "PlayerAvailabilityRecord",
    "Preset",
    "TimezoneOffset",
    "aggregate",
    "build_preset",
    "cfg",
    "run_availability",
]
