from __future__ import annotations

from .data_models import HeatmapColor, ResponseMetrics, SlotSummary
from .heatmap import HEATMAP_SCALE, heatmap_color, tooltip_text
from .metrics import best_slots, compute_response_metrics, daily_totals, hourly_average
from .reporter import Reporter

__all__ = [
    "Reporter",
    "HEATMAP_SCALE",
    "HeatmapColor",
    "ResponseMetrics",
    "SlotSummary",
    "best_slots",
    "compute_response_metrics",
    "daily_totals",
    "heatmap_color",
    "hourly_average",
    "tooltip_text",
]
