from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import ListedColormap

from scrimgrid.aggregate import AggregateGrid
from scrimgrid.config import Config, cfg
from scrimgrid.grid import TimezoneOffset
from scrimgrid.timezone import date_for_day, display_rows, format_hour_range

from .heatmap import HEATMAP_SCALE, heatmap_color
from .text_report import get_active_report


def _save_and_show(fig: plt.Figure, filename: str, out_dir: str = "outputs") -> None:
    """Persist the plot under `out_dir` and show it."""
    path = Path(out_dir)
    path.mkdir(parents=True, exist_ok=True)
    fig.savefig(path / filename, dpi=fig.dpi, bbox_inches="tight")
    plt.show()


def _attach(fig: plt.Figure) -> None:
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)


def show_availability_heatmap(
    grid: AggregateGrid,
    viewer_tz: Optional[TimezoneOffset] = None,
    week_start: date | str | None = None,
    config: Config | None = None,
    enable_plot: bool = True,
) -> Optional[plt.Figure]:
    """
    Render the week grid coloured by available-player count.

    Rows follow the reference hour order and are labelled in the viewer's
    timezone, so a late row may read as an early-morning hour.
    """
    if not enable_plot:
        return None
    C = config or cfg
    tz = viewer_tz if viewer_tz is not None else C.ORG_TIMEZONE
    rows = display_rows(tz, C)

    counts = np.zeros((len(rows), len(C.DAYS)), dtype=int)
    for r, (ref_hour, _) in enumerate(rows):
        for c, d in enumerate(C.DAYS):
            cell = grid.get((d, ref_hour))
            counts[r, c] = cell.count if cell is not None else 0
    buckets = np.minimum(np.maximum(counts, 0), len(HEATMAP_SCALE) - 1)

    cmap = ListedColormap([color.hex for color in HEATMAP_SCALE])
    fig, ax = plt.subplots(figsize=(7.5, 0.45 * len(rows) + 1.5), dpi=150)
    ax.imshow(
        buckets,
        cmap=cmap,
        vmin=-0.5,
        vmax=len(HEATMAP_SCALE) - 0.5,
        aspect="auto",
    )
    for r in range(counts.shape[0]):
        for c in range(counts.shape[1]):
            n = int(counts[r, c])
            if n > 0:
                light = heatmap_color(n).name in ("yellow", "lime")
                ax.text(
                    c,
                    r,
                    str(n),
                    ha="center",
                    va="center",
                    fontsize=8,
                    color="black" if light else "white",
                )

    x_labels = [
        f"{d.label}\n{date_for_day(week_start, d.position)}" if week_start else d.label
        for d in C.DAYS
    ]
    ax.set_xticks(range(len(C.DAYS)), x_labels)
    ax.set_yticks(range(len(rows)), [format_hour_range(disp) for _, disp in rows])
    ax.tick_params(axis="both", length=0, labelsize=8)
    ax.xaxis.tick_top()
    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.set_title(f"Team availability ({tz.label})", pad=12)
    fig.tight_layout()
    _save_and_show(fig, "availability_heatmap.png", C.OUTPUT_DIR)
    _attach(fig)
    return fig


def show_solution_progress(
    history: Sequence[tuple[float, float, float]], out_dir: str = "outputs"
) -> None:
    """
    Plot plan attendance and its solver ceiling per solution, with elapsed time.

    history entries are (wall_time_sec, attendance, attendance_ceiling).
    """
    if not history:
        return
    solution_idx = list(range(1, len(history) + 1))
    times = [pt[0] for pt in history]
    best_vals = [pt[1] for pt in history]
    bound_vals = [pt[2] for pt in history]

    fig, ax = plt.subplots(figsize=(7.5, 4), dpi=150)
    ax.set_title("Session plan attendance history", pad=35)
    score_color = "tab:blue"
    bound_color = "tab:red"
    time_color = "tab:green"

    ax.plot(
        solution_idx, best_vals, label="Attendance", color=score_color, linewidth=1.5
    )
    ax.plot(
        solution_idx,
        bound_vals,
        label="Ceiling",
        color=bound_color,
        linestyle="--",
        linewidth=1.25,
    )
    ax.set_xlabel("Solution # (in discovery order)")
    ax.set_ylabel(f"Planned attendance. Max={max(best_vals):.0f}", color=score_color)
    ax.tick_params(axis="y", colors=score_color)
    ax.set_xlim(*_expand_limits(solution_idx, axis_padding=0.01))
    ax.set_ylim(*_expand_limits(best_vals + bound_vals))
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)

    ax_time = ax.twinx()
    ax_time.plot(
        solution_idx,
        times,
        label="Elapsed time",
        color=time_color,
        linewidth=1.5,
        alpha=0.7,
    )
    ax_time.set_ylabel(
        f"Elapsed time (seconds). Max={max(times):.1f}s", color=time_color
    )
    ax_time.tick_params(axis="y", colors=time_color)
    ax_time.set_ylim(*_expand_limits(times))
    ax_time.spines["top"].set_visible(False)
    ax_time.spines["left"].set_visible(False)
    ax.xaxis.set_major_locator(plt.MaxNLocator(integer=True))

    lines, labels = ax.get_legend_handles_labels()
    lines2, labels2 = ax_time.get_legend_handles_labels()
    ax.legend(
        lines + lines2,
        labels + labels2,
        loc="upper center",
        bbox_to_anchor=(0.5, 1.15),
        ncol=3,
        borderaxespad=0.3,
    )
    ax.grid(alpha=0.3)
    fig.tight_layout(rect=(0, 0, 1, 0.92))
    _save_and_show(fig, "solution_progress.png", out_dir)
    _attach(fig)


def _expand_limits(
    values: Sequence[float], axis_padding: float = 0.05
) -> tuple[float, float]:
    lo = min(values)
    hi = max(values)
    if lo == hi:
        delta = max(abs(lo), 1.0) * max(axis_padding, 0.05)
        return lo - delta, hi + delta
    pad = (hi - lo) * axis_padding
    return lo - pad, hi + pad
