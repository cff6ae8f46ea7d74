"""SVG line chart of the enthalpy history, plus the axis geometry shared with the GUI."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Sequence
from xml.sax.saxutils import escape

from ..history.history import HistoryEntry

CHART_SIZE = (900, 360)
PLOT_MARGINS = (70, 30, 30, 50)  # left, top, right, bottom
MAX_X_LABELS = 10

LINE_COLOR = "#007bff"
FILL_COLOR = "rgba(0, 123, 255, 0.1)"
AXIS_COLOR = "#2d3a4a"
GRID_COLOR = "#dce1eb"


def nice_ticks(lower: float, upper: float, count: int = 5) -> list[float]:
    """Return evenly spaced, rounded tick values covering ``[lower, upper]``."""

    if upper < lower:
        lower, upper = upper, lower
    span = upper - lower
    if span == 0:
        pad = abs(upper) * 0.05 or 1.0
        lower, upper = lower - pad, upper + pad
        span = upper - lower
    raw_step = span / max(count, 1)
    magnitude = 10 ** math.floor(math.log10(raw_step))
    step = magnitude * 10
    for multiple in (1, 2, 2.5, 5, 10):
        if raw_step <= multiple * magnitude:
            step = multiple * magnitude
            break
    start = math.floor(lower / step) * step
    stop = math.ceil(upper / step) * step
    ticks = []
    value = start
    while value <= stop + step * 1e-9:
        ticks.append(round(value, 10))
        value += step
    return ticks


def plot_points(
    values: Sequence[float],
    box: tuple[float, float, float, float],
    y_range: tuple[float, float],
) -> list[tuple[float, float]]:
    """Map *values* onto pixel coordinates inside ``box = (left, top, right, bottom)``."""

    left, top, right, bottom = box
    y_min, y_max = y_range
    y_span = (y_max - y_min) or 1.0
    count = len(values)
    points = []
    for index, value in enumerate(values):
        if count == 1:
            x = (left + right) / 2
        else:
            x = left + (right - left) * index / (count - 1)
        y = bottom - (bottom - top) * (value - y_min) / y_span
        points.append((x, y))
    return points


def label_stride(count: int, max_labels: int = MAX_X_LABELS) -> int:
    return max(1, math.ceil(count / max_labels))


def _text(x: float, y: float, text: str, *, anchor: str = "middle", size: int = 12, color: str = AXIS_COLOR) -> str:
    return (
        f'<text x="{x:.1f}" y="{y:.1f}" text-anchor="{anchor}" '
        f'style="font-size:{size}px;font-family:Arial;fill:{color}">{escape(text)}</text>\n'
    )


def render_history_svg(entries: Sequence[HistoryEntry], size: tuple[int, int] = CHART_SIZE) -> str:
    width, height = size
    left_margin, top_margin, right_margin, bottom_margin = PLOT_MARGINS
    box = (left_margin, top_margin, width - right_margin, height - bottom_margin)

    parts = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}">\n']
    if not entries:
        parts.append(_text(width / 2, height / 2, "No data", size=16))
        parts.append("</svg>")
        return "".join(parts)

    values = [entry.enthalpy for entry in entries]
    ticks = nice_ticks(min(values), max(values))
    y_range = (ticks[0], ticks[-1])

    for tick in ticks:
        _, y = plot_points([tick], box, y_range)[0]
        parts.append(
            f'<line x1="{box[0]}" y1="{y:.1f}" x2="{box[2]}" y2="{y:.1f}" '
            f'style="stroke:{GRID_COLOR};stroke-width:1" />\n'
        )
        parts.append(_text(box[0] - 8, y + 4, f"{tick:g}", anchor="end"))

    parts.append(
        f'<line x1="{box[0]}" y1="{box[1]}" x2="{box[0]}" y2="{box[3]}" style="stroke:{AXIS_COLOR};stroke-width:1" />\n'
        f'<line x1="{box[0]}" y1="{box[3]}" x2="{box[2]}" y2="{box[3]}" style="stroke:{AXIS_COLOR};stroke-width:1" />\n'
    )

    points = plot_points(values, box, y_range)
    polyline = " ".join(f"{x:.1f},{y:.1f}" for x, y in points)
    area = f"{points[0][0]:.1f},{box[3]} {polyline} {points[-1][0]:.1f},{box[3]}"
    parts.append(f'<polygon points="{area}" style="fill:{FILL_COLOR};stroke:none" />\n')
    parts.append(f'<polyline points="{polyline}" style="fill:none;stroke:{LINE_COLOR};stroke-width:2" />\n')

    stride = label_stride(len(entries))
    for index, ((x, y), entry) in enumerate(zip(points, entries)):
        parts.append(
            f'<circle cx="{x:.1f}" cy="{y:.1f}" r="5" style="fill:{LINE_COLOR}">'
            f"<title>{escape(f'{entry.label}: {entry.enthalpy:.2f} kJ/kg')}</title></circle>\n"
        )
        if index % stride == 0:
            parts.append(_text(x, box[3] + 18, entry.label, size=11))

    parts.append(_text(width / 2, height - 8, "Time"))
    parts.append(
        f'<text x="16" y="{height / 2:.1f}" text-anchor="middle" transform="rotate(-90 16 {height / 2:.1f})" '
        f'style="font-size:12px;font-family:Arial;fill:{AXIS_COLOR}">Enthalpy (kJ/kg)</text>\n'
    )
    parts.append("</svg>")
    return "".join(parts)


def export_history_chart(entries: Sequence[HistoryEntry], output_path: Path) -> Path:
    """Render the history series as an SVG line chart."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_history_svg(entries), encoding="utf-8")
    return output_path


__all__ = [
    "export_history_chart",
    "label_stride",
    "nice_ticks",
    "plot_points",
    "render_history_svg",
]
