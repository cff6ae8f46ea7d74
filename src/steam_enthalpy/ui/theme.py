"""Light and dark theme tokens for the estimator window and chart."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


FontDef = Tuple[str, int] | Tuple[str, int, str]


@dataclass(frozen=True)
class ThemePalette:
    window_bg: str
    canvas_bg: str
    grid_line: str
    axis_line: str
    series_line: str
    series_fill: str
    point_fill: str
    text_primary: str
    text_secondary: str
    value_text: str
    tooltip_bg: str
    tooltip_border: str
    success_bg: str
    warning_bg: str
    error_bg: str
    error_text: str


@dataclass(frozen=True)
class ThemeMetrics:
    canvas_width: int
    canvas_height: int
    plot_margin_left: int
    plot_margin_top: int
    plot_margin_right: int
    plot_margin_bottom: int
    line_width: int
    point_radius: int


@dataclass(frozen=True)
class ThemeFonts:
    title: FontDef
    label: FontDef
    value: FontDef
    axis: FontDef
    tooltip: FontDef
    status: FontDef

    def as_dict(self) -> Dict[str, FontDef]:
        return {
            "title": self.title,
            "label": self.label,
            "value": self.value,
            "axis": self.axis,
            "tooltip": self.tooltip,
            "status": self.status,
        }


@dataclass(frozen=True)
class Theme:
    name: str
    palette: ThemePalette
    fonts: ThemeFonts
    metrics: ThemeMetrics


_FONTS = ThemeFonts(
    title=("Segoe UI", 14, "bold"),
    label=("Segoe UI", 9, "bold"),
    value=("Segoe UI", 10),
    axis=("Segoe UI", 8),
    tooltip=("Segoe UI", 9),
    status=("Segoe UI", 9),
)

_METRICS = ThemeMetrics(
    canvas_width=720,
    canvas_height=360,
    plot_margin_left=64,
    plot_margin_top=20,
    plot_margin_right=20,
    plot_margin_bottom=44,
    line_width=2,
    point_radius=4,
)


LIGHT_THEME = Theme(
    name="light",
    palette=ThemePalette(
        window_bg="#f4f6fb",
        canvas_bg="#ffffff",
        grid_line="#dce1eb",
        axis_line="#1d3557",
        series_line="#007bff",
        series_fill="#e5f1ff",
        point_fill="#007bff",
        text_primary="#1d3557",
        text_secondary="#415a77",
        value_text="#0b3954",
        tooltip_bg="#edf2fb",
        tooltip_border="#8d99ae",
        success_bg="#d4edda",
        warning_bg="#fff3cd",
        error_bg="#f8d7da",
        error_text="#d1495b",
    ),
    fonts=_FONTS,
    metrics=_METRICS,
)


DARK_THEME = Theme(
    name="dark",
    palette=ThemePalette(
        window_bg="#1b1b1b",
        canvas_bg="#101010",
        grid_line="#3a3a3a",
        axis_line="#d7d7d7",
        series_line="#4da3ff",
        series_fill="#13263d",
        point_fill="#4da3ff",
        text_primary="#f5f5f5",
        text_secondary="#d7d7d7",
        value_text="#f1c40f",
        tooltip_bg="#232323",
        tooltip_border="#f1f1f1",
        success_bg="#1e4620",
        warning_bg="#4d3a00",
        error_bg="#661a18",
        error_text="#ff5f57",
    ),
    fonts=_FONTS,
    metrics=_METRICS,
)


def get_theme(dark: bool = False) -> Theme:
    """Return the light or dark theme."""

    return DARK_THEME if dark else LIGHT_THEME


def toggle_theme(current: Theme) -> Theme:
    return LIGHT_THEME if current.name == "dark" else DARK_THEME


__all__ = ["Theme", "ThemePalette", "ThemeMetrics", "ThemeFonts", "get_theme", "toggle_theme"]
