"""Line chart of the enthalpy history drawn on a Tk canvas."""

from __future__ import annotations

from typing import Any, Callable

import tkinter as tk

from ..reporter.chart_svg import label_stride, nice_ticks, plot_points
from .events import ESTIMATE_RECORDED, HISTORY_RESET, EventBus
from .model import SessionModel
from .theme import Theme

NO_DATA_TEXT = "No data yet. Submit a temperature and pressure to start the chart."


class ChartCanvas(tk.Canvas):
    """Canvas widget that redraws the whole series on every history change."""

    def __init__(self, master: tk.Widget, *, model: SessionModel, bus: EventBus, theme: Theme) -> None:
        super().__init__(
            master,
            width=theme.metrics.canvas_width,
            height=theme.metrics.canvas_height,
            background=theme.palette.canvas_bg,
            highlightthickness=0,
        )
        self.model = model
        self.bus = bus
        self.theme = theme

        self._subscriptions: list[Callable[[], None]] = []
        self._points: list[tuple[float, float]] = []
        self._tooltip_items: list[int] = []

        self._subscriptions.append(self.bus.subscribe(ESTIMATE_RECORDED, self._on_estimate_recorded))
        self._subscriptions.append(self.bus.subscribe(HISTORY_RESET, self._on_history_reset))
        self.bind("<Motion>", self._on_motion)
        self.bind("<Leave>", lambda _e: self._hide_tooltip())
        self.bind("<Configure>", lambda _e: self.redraw())

        self.redraw()

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def _plot_box(self) -> tuple[float, float, float, float]:
        metrics = self.theme.metrics
        # winfo_* report 1 until the widget is first laid out.
        width = self.winfo_width() if self.winfo_width() > 1 else metrics.canvas_width
        height = self.winfo_height() if self.winfo_height() > 1 else metrics.canvas_height
        return (
            metrics.plot_margin_left,
            metrics.plot_margin_top,
            width - metrics.plot_margin_right,
            height - metrics.plot_margin_bottom,
        )

    def redraw(self) -> None:
        self.delete("all")
        self._tooltip_items.clear()
        self._points = []
        series = self.model.series()
        values = series["enthalpies"]
        palette = self.theme.palette
        fonts = self.theme.fonts
        left, top, right, bottom = box = self._plot_box()

        if not values:
            self.create_text(
                (left + right) / 2,
                (top + bottom) / 2,
                text=NO_DATA_TEXT,
                font=fonts.value,
                fill=palette.text_secondary,
            )
            return

        ticks = nice_ticks(min(values), max(values))
        y_range = (ticks[0], ticks[-1])
        for tick in ticks:
            _, y = plot_points([tick], box, y_range)[0]
            self.create_line(left, y, right, y, fill=palette.grid_line)
            self.create_text(left - 6, y, text=f"{tick:g}", anchor="e", font=fonts.axis, fill=palette.text_secondary)

        self.create_line(left, top, left, bottom, fill=palette.axis_line)
        self.create_line(left, bottom, right, bottom, fill=palette.axis_line)
        self.create_text(left, top - 8, text="Enthalpy (kJ/kg)", anchor="w", font=fonts.label, fill=palette.text_primary)
        self.create_text((left + right) / 2, bottom + 30, text="Time", font=fonts.label, fill=palette.text_primary)

        self._points = plot_points(values, box, y_range)
        if len(self._points) > 1:
            area = [self._points[0][0], bottom]
            for x, y in self._points:
                area.extend((x, y))
            area.extend((self._points[-1][0], bottom))
            self.create_polygon(*area, fill=palette.series_fill, outline="")
            flat = [coordinate for point in self._points for coordinate in point]
            self.create_line(*flat, fill=palette.series_line, width=self.theme.metrics.line_width, smooth=True)

        radius = self.theme.metrics.point_radius
        stride = label_stride(len(values))
        for index, ((x, y), label) in enumerate(zip(self._points, series["labels"])):
            self.create_oval(x - radius, y - radius, x + radius, y + radius, fill=palette.point_fill, outline="")
            if index % stride == 0:
                self.create_text(x, bottom + 12, text=label, font=fonts.axis, fill=palette.text_secondary)

    # ------------------------------------------------------------------
    # Tooltip
    # ------------------------------------------------------------------
    def _nearest_index(self, x: float, y: float, tolerance: float = 10.0) -> int | None:
        best: int | None = None
        best_distance = tolerance
        for index, (px, py) in enumerate(self._points):
            distance = ((px - x) ** 2 + (py - y) ** 2) ** 0.5
            if distance <= best_distance:
                best, best_distance = index, distance
        return best

    def _hide_tooltip(self) -> None:
        for item in self._tooltip_items:
            self.delete(item)
        self._tooltip_items.clear()

    def _on_motion(self, event: tk.Event) -> None:
        self._hide_tooltip()
        index = self._nearest_index(event.x, event.y)
        if index is None:
            return
        series = self.model.series()
        lines = [
            f"Time: {series['labels'][index]}",
            f"Enthalpy: {series['enthalpies'][index]:.2f} kJ/kg",
            f"Temp: {series['temperatures'][index]:g}",
            f"Press: {series['pressures'][index]:,g}",
        ]
        palette = self.theme.palette
        x, y = self._points[index]
        text_id = self.create_text(x + 12, y - 12, text="\n".join(lines), anchor="sw", font=self.theme.fonts.tooltip, fill=palette.text_primary)
        bbox = self.bbox(text_id)
        if bbox:
            rect_id = self.create_rectangle(
                bbox[0] - 4, bbox[1] - 4, bbox[2] + 4, bbox[3] + 4, fill=palette.tooltip_bg, outline=palette.tooltip_border
            )
            self.tag_raise(text_id, rect_id)
            self._tooltip_items.append(rect_id)
        self._tooltip_items.append(text_id)

    # ------------------------------------------------------------------
    # Bus handlers / theme
    # ------------------------------------------------------------------
    def _on_estimate_recorded(self, **_: Any) -> None:
        self.redraw()

    def _on_history_reset(self, **_: Any) -> None:
        self.redraw()

    def apply_theme(self, theme: Theme) -> None:
        self.theme = theme
        self.configure(background=theme.palette.canvas_bg)
        self.redraw()

    def destroy(self) -> None:  # pragma: no cover - Tkinter shutdown path
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()
        super().destroy()


__all__ = ["ChartCanvas", "NO_DATA_TEXT"]
