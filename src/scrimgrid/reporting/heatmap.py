from __future__ import annotations

from scrimgrid.aggregate import AggregateCell

from .data_models import HeatmapColor

# Index = available player count; the last entry covers everything above.
HEATMAP_SCALE: tuple[HeatmapColor, ...] = (
    HeatmapColor("gray", "#1f2937"),
    HeatmapColor("red", "#ef4444"),
    HeatmapColor("orange", "#f97316"),
    HeatmapColor("amber", "#f59e0b"),
    HeatmapColor("yellow", "#eab308"),
    HeatmapColor("lime", "#84cc16"),
    HeatmapColor("green", "#22c55e"),
    HeatmapColor("emerald", "#10b981"),
    HeatmapColor("teal", "#14b8a6"),
    HeatmapColor("cyan", "#06b6d4"),
    HeatmapColor("sky", "#0ea5e9"),
    HeatmapColor("blue", "#2563eb"),
)


def heatmap_color(count: int) -> HeatmapColor:
    if count <= 0:
        return HEATMAP_SCALE[0]
    return HEATMAP_SCALE[min(count, len(HEATMAP_SCALE) - 1)]


def tooltip_text(cell: AggregateCell) -> str:
    """Hover text for a cell; empty when nobody is available."""
    if cell.count <= 0:
        return ""
    noun = "player available" if cell.count == 1 else "players available"
    lines = [f"{cell.count} {noun}:"]
    lines.extend(f"• {name}" for name in cell.player_names)
    return "\n".join(lines)
