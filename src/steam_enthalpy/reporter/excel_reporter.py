"""Excel export of the estimate history."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from ..history.history import HistoryEntry, HistoryStats

HISTORY_COLUMNS: tuple[str, ...] = (
    "#",
    "Time",
    "Temperature",
    "Pressure requested",
    "Pressure used",
    "Enthalpy (kJ/kg)",
    "Method",
    "T1",
    "T2",
    "h1",
    "h2",
)


def _write_history_sheet(workbook: Workbook, entries: Sequence[HistoryEntry]) -> None:
    sheet = workbook.active
    sheet.title = "History"
    sheet.append(list(HISTORY_COLUMNS))
    for entry in entries:
        estimate = entry.estimate
        bracket = estimate.bracket
        sheet.append(
            [
                entry.sequence,
                entry.label,
                entry.temperature,
                estimate.pressure_requested,
                estimate.pressure_used,
                round(estimate.enthalpy, 4),
                estimate.method.value,
                bracket.t1 if bracket else None,
                bracket.t2 if bracket else None,
                bracket.h1 if bracket else None,
                bracket.h2 if bracket else None,
            ]
        )
    for column in range(1, len(HISTORY_COLUMNS) + 1):
        sheet.column_dimensions[get_column_letter(column)].width = 18
    sheet.freeze_panes = "A2"


def _write_summary_sheet(workbook: Workbook, stats: HistoryStats) -> None:
    sheet = workbook.create_sheet("Summary")
    rows = (
        ("Data points", stats.count),
        ("Average enthalpy (kJ/kg)", stats.average),
        ("Latest enthalpy (kJ/kg)", stats.latest),
    )
    for row_index, (label, value) in enumerate(rows, start=1):
        sheet.cell(row=row_index, column=1, value=label)
        sheet.cell(row=row_index, column=2, value=value)
    sheet.column_dimensions[get_column_letter(1)].width = 32
    sheet.column_dimensions[get_column_letter(2)].width = 22


def export_history_to_excel(entries: Sequence[HistoryEntry], stats: HistoryStats, output_path: Path) -> Path:
    """Create an Excel workbook with the history series and its statistics."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook = Workbook()
    _write_history_sheet(workbook, entries)
    _write_summary_sheet(workbook, stats)
    workbook.save(output_path)
    return output_path


__all__ = ["HISTORY_COLUMNS", "export_history_to_excel"]
