"""Shared fixtures for the enthalpy estimator tests."""

import pytest

from steam_enthalpy.config import DEFAULT_SETTINGS, deep_merge
from steam_enthalpy.service import EnthalpyService
from steam_enthalpy.table.steam_table import ReferenceTable, default_table


@pytest.fixture
def table():
    return default_table()


@pytest.fixture
def tie_table():
    # Two equidistant levels around 15, declared high-to-low to expose the tie rule.
    return ReferenceTable.from_mapping(
        {
            "20": {"temperatures": [100, 200], "enthalpies": [2000.0, 2200.0]},
            "10": {"temperatures": [100, 200], "enthalpies": [1000.0, 1200.0]},
        }
    )


@pytest.fixture
def service():
    return EnthalpyService()


@pytest.fixture
def small_service():
    settings = deep_merge(DEFAULT_SETTINGS, {"history": {"max_data_points": 3}})
    return EnthalpyService(settings=settings)
