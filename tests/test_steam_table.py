import json

import pytest

from steam_enthalpy.errors import TableError
from steam_enthalpy.table.steam_table import (
    STEAM_TABLE_DATA,
    Curve,
    ReferenceTable,
    default_table,
    load_table,
    resolve_table,
)


def test_builtin_levels_keep_declaration_order(table):
    assert table.levels == (10.0, 20.0, 30.0, 50.0, 90.0)


def test_builtin_ten_bar_curve_matches_published_values(table):
    curve = table.curve(10)
    assert curve.temperatures == (200.0, 250.0, 300.0, 350.0, 400.0, 450.0, 500.0, 550.0, 600.0)
    assert curve.enthalpies[0] == 2827.4
    assert curve.enthalpies[1] == 2957.2
    assert curve.enthalpies[-1] == 3723.4
    assert (curve.t_min, curve.t_max) == (200.0, 600.0)


def test_every_builtin_curve_is_strictly_increasing(table):
    for curve in table:
        assert len(curve.temperatures) == len(curve.enthalpies) >= 2
        assert all(a < b for a, b in zip(curve.temperatures, curve.temperatures[1:]))


def test_default_table_is_built_once():
    assert default_table() is default_table()


def test_curve_rejects_non_monotonic_temperatures():
    with pytest.raises(TableError, match="strictly increasing"):
        Curve(10, (200, 300, 250), (1.0, 2.0, 3.0))


def test_curve_rejects_duplicate_temperatures():
    with pytest.raises(TableError, match="strictly increasing"):
        Curve(10, (200, 200), (1.0, 2.0))


def test_curve_rejects_length_mismatch():
    with pytest.raises(TableError, match="2 temperatures but 3 enthalpies"):
        Curve(10, (200, 300), (1.0, 2.0, 3.0))


def test_curve_rejects_empty_and_non_finite():
    with pytest.raises(TableError, match="at least one sample"):
        Curve(10, (), ())
    with pytest.raises(TableError, match="finite"):
        Curve(10, (200, float("nan")), (1.0, 2.0))
    with pytest.raises(TableError, match="pressure level must be finite"):
        Curve(float("nan"), (100, 200), (1.0, 2.0))
    with pytest.raises(TableError, match="pressure level must be finite"):
        ReferenceTable.from_mapping(
            {
                "inf": {"temperatures": [100, 200], "enthalpies": [1, 2]},
                "10": {"temperatures": [100, 200], "enthalpies": [3, 4]},
            }
        )


def test_single_sample_curve_is_allowed():
    curve = Curve(5, (150,), (2750.0,))
    assert curve.t_min == curve.t_max == 150.0


def test_table_rejects_empty_and_duplicate_levels():
    with pytest.raises(TableError):
        ReferenceTable(())
    with pytest.raises(TableError, match="Duplicate"):
        ReferenceTable.from_mapping(
            {
                "10": {"temperatures": [1], "enthalpies": [1]},
                "10.0": {"temperatures": [2], "enthalpies": [2]},
            }
        )


def test_from_mapping_reports_missing_keys():
    with pytest.raises(TableError, match="missing 'enthalpies'"):
        ReferenceTable.from_mapping({"10": {"temperatures": [1, 2]}})


def test_table_is_immutable(table):
    with pytest.raises(AttributeError):
        table.curves = ()
    assert isinstance(table.curve(10).temperatures, tuple)


def test_contains_and_unknown_level(table):
    assert 50 in table
    assert 15 not in table
    assert "abc" not in table
    with pytest.raises(KeyError):
        table.curve(15)


def test_as_dict_round_trips_through_json(tmp_path, table):
    path = tmp_path / "table.json"
    path.write_text(json.dumps(table.as_dict()), encoding="utf-8")
    loaded = load_table(path)
    assert loaded.levels == table.levels
    assert loaded.curve(90).enthalpies == table.curve(90).enthalpies


def test_load_table_rejects_bad_files(tmp_path):
    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{not json", encoding="utf-8")
    with pytest.raises(TableError, match="not valid JSON"):
        load_table(bad_json)
    with pytest.raises(TableError, match="Cannot read"):
        load_table(tmp_path / "missing.json")


def test_resolve_table_uses_configured_path(tmp_path):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"7": {"temperatures": [100, 200], "enthalpies": [1, 2]}}), encoding="utf-8")
    assert resolve_table({"table": {"path": str(path)}}).levels == (7.0,)
    assert resolve_table({"table": {"path": None}}) is default_table()
    assert set(STEAM_TABLE_DATA) == {"10", "20", "30", "50", "90"}
