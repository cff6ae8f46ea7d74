import json

import pytest
from openpyxl import load_workbook

from steam_enthalpy.reporter.chart_svg import export_history_chart, label_stride, nice_ticks, plot_points
from steam_enthalpy.reporter.console_reporter import (
    export_history_json,
    format_estimate,
    render_estimate,
    render_history,
)
from steam_enthalpy.reporter.excel_reporter import HISTORY_COLUMNS, export_history_to_excel


@pytest.fixture
def filled(service):
    for temperature, pressure in ((225, 10), (400, 15), (600, 10)):
        service.submit(temperature, pressure)
    return service.history.snapshot(), service.current_stats()


def test_format_estimate_lists_bracket_and_requested_pressure(service):
    lines = format_estimate(service.submit(225, 12).estimate)
    assert lines[0] == "Enthalpy: 2892.30 kJ/kg"
    assert "Pressure requested: 12 kg/cm²G" in lines
    assert lines[-1].startswith("Bracket: 200–250 °C")


def test_render_estimate_includes_reference_and_notices(service, capsys):
    submission = service.submit(300, 15)
    reference = {"reference_kJ_per_kg": 3050.0, "deviation_kJ_per_kg": 8.5, "deviation_pct": 0.28}
    render_estimate(submission.estimate, notices=submission.notices, reference=reference)
    output = capsys.readouterr().out
    assert output.startswith("Estimate\n========")
    assert "deviation +8.50 kJ/kg" in output
    assert "[PRESSURE_NEAREST_USED]" in output


def test_render_history_without_data(capsys, service):
    render_history((), service.current_stats())
    output = capsys.readouterr().out
    assert "Current: — kJ/kg" in output
    assert "Data points: 0" in output
    assert "History" not in output


def test_render_history_lists_entries(capsys, filled):
    entries, stats = filled
    render_history(entries, stats)
    output = capsys.readouterr().out
    assert "Data points: 3" in output
    assert output.count("kJ/kg (") == 3


def test_export_history_json(tmp_path, filled):
    entries, stats = filled
    path = export_history_json(entries, stats, tmp_path / "nested" / "history.json")
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["stats"]["count"] == 3
    assert [entry["sequence"] for entry in payload["entries"]] == [1, 2, 3]
    assert payload["entries"][1]["pressure_used"] == 10


def test_export_history_to_excel(tmp_path, filled):
    entries, stats = filled
    path = export_history_to_excel(entries, stats, tmp_path / "history.xlsx")
    workbook = load_workbook(path)
    assert workbook.sheetnames == ["History", "Summary"]
    rows = list(workbook["History"].iter_rows(values_only=True))
    assert rows[0] == HISTORY_COLUMNS
    assert len(rows) == 4
    assert rows[1][6] == "interpolated"
    assert rows[3][7] is None
    assert workbook["Summary"]["B1"].value == 3


def test_export_chart_svg(tmp_path, filled):
    entries, _ = filled
    svg = export_history_chart(entries, tmp_path / "history.svg").read_text(encoding="utf-8")
    assert svg.startswith("<svg")
    assert svg.count("<circle") == 3
    assert "Enthalpy (kJ/kg)" in svg


def test_empty_chart_shows_placeholder(tmp_path):
    svg = export_history_chart((), tmp_path / "empty.svg").read_text(encoding="utf-8")
    assert "No data" in svg
    assert "<polyline" not in svg


def test_nice_ticks_cover_range():
    ticks = nice_ticks(2827.4, 3723.4)
    assert ticks[0] <= 2827.4 and ticks[-1] >= 3723.4
    steps = {round(b - a, 6) for a, b in zip(ticks, ticks[1:])}
    assert len(steps) == 1


def test_nice_ticks_single_value():
    ticks = nice_ticks(2892.3, 2892.3)
    assert ticks[0] < 2892.3 < ticks[-1]


def test_plot_points_maps_extremes_to_box():
    points = plot_points([0.0, 10.0], (10, 20, 110, 220), (0.0, 10.0))
    assert points == [(10.0, 220.0), (110.0, 20.0)]
    assert plot_points([5.0], (0, 0, 100, 100), (0.0, 10.0)) == [(50.0, 50.0)]


def test_label_stride():
    assert label_stride(5) == 1
    assert label_stride(50) == 5
