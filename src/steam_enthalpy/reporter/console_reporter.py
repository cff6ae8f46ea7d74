"""Console presentation helpers for estimates and history."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Sequence, TextIO

from ..estimator.estimator import Estimate, Method
from ..history.history import HistoryEntry, HistoryStats

UNITS = {
    "steam": ("°C", "kg/cm²G"),
    "air": ("K", "Pa"),
}


def _format_block(title: str, lines: list[str]) -> str:
    divider = "=" * len(title)
    return "\n".join([title, divider, *lines])


def _format_optional(value: float | None, decimals: int = 2) -> str:
    return "—" if value is None else f"{value:.{decimals}f}"


def format_estimate(estimate: Estimate) -> list[str]:
    """Return display lines describing one estimate."""

    t_unit, p_unit = UNITS.get(estimate.medium, ("", ""))
    lines = [
        f"Enthalpy: {estimate.enthalpy:.2f} kJ/kg",
        f"Temperature: {estimate.temperature:g} {t_unit}",
        f"Pressure used: {estimate.pressure_used:g} {p_unit}",
        f"Method: {estimate.method.value}",
    ]
    if estimate.used_nearest_pressure:
        lines.insert(3, f"Pressure requested: {estimate.pressure_requested:g} {p_unit}")
    if estimate.method is Method.INTERPOLATED and estimate.bracket is not None:
        bracket = estimate.bracket
        lines.append(
            f"Bracket: {bracket.t1:g}–{bracket.t2:g} {t_unit} / {bracket.h1:.1f}–{bracket.h2:.1f} kJ/kg"
        )
    return lines


def render_estimate(
    estimate: Estimate,
    *,
    notices: Sequence[str] = (),
    reference: Mapping[str, float] | None = None,
    stream: TextIO | None = None,
) -> None:
    """Print a structured console view of one estimate."""

    lines = format_estimate(estimate)
    if reference:
        lines.append(
            f"IAPWS-IF97: {reference['reference_kJ_per_kg']:.2f} kJ/kg "
            f"(deviation {reference['deviation_kJ_per_kg']:+.2f} kJ/kg, {reference['deviation_pct']:+.2f} %)"
        )
    lines.extend(notices)
    print(_format_block("Estimate", lines), file=stream)


def render_history(entries: Sequence[HistoryEntry], stats: HistoryStats, stream: TextIO | None = None) -> None:
    """Print the statistics panel and the recorded series."""

    stat_lines = [
        f"Current: {_format_optional(stats.latest)} kJ/kg",
        f"Average: {_format_optional(stats.average)} kJ/kg",
        f"Data points: {stats.count}",
    ]
    print(_format_block("Statistics", stat_lines), file=stream)
    if not entries:
        return
    entry_lines = [
        f"#{entry.sequence:<4} {entry.label}  T={entry.temperature:g}  P={entry.pressure:g}  "
        f"h={entry.enthalpy:.2f} kJ/kg ({entry.estimate.method.value})"
        for entry in entries
    ]
    print(file=stream)
    print(_format_block("History", entry_lines), file=stream)


def history_payload(entries: Sequence[HistoryEntry], stats: HistoryStats) -> dict[str, Any]:
    return {
        "stats": stats.as_dict(),
        "entries": [entry.as_dict() for entry in entries],
    }


def export_history_json(entries: Sequence[HistoryEntry], stats: HistoryStats, output_path: Path) -> Path:
    """Write the history snapshot and its statistics to a JSON file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(history_payload(entries, stats), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    return output_path


__all__ = [
    "export_history_json",
    "format_estimate",
    "history_payload",
    "render_estimate",
    "render_history",
]
