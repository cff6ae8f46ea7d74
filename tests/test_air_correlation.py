import pytest

from steam_enthalpy.errors import InvalidInputError
from steam_enthalpy.estimator.air_correlation import AirCorrelationEstimator, dry_air_cp, dry_air_enthalpy
from steam_enthalpy.estimator.estimator import Method


def test_cp_polynomial():
    assert dry_air_cp(0) == pytest.approx(1003.5)
    assert dry_air_cp(300) == pytest.approx(1003.5 + 30.0 - 1.8)


def test_enthalpy_is_cp_times_temperature():
    assert dry_air_enthalpy(300) == pytest.approx(1031.7 * 300)


def test_estimate_reports_kilojoules_and_keeps_pressure():
    estimate = AirCorrelationEstimator().estimate(300, 101325)
    assert estimate.enthalpy == pytest.approx(309.51)
    assert estimate.method is Method.CORRELATION
    assert estimate.medium == "air"
    assert estimate.pressure_used == estimate.pressure_requested == 101325
    assert not estimate.used_nearest_pressure


@pytest.mark.parametrize(("temperature", "pressure"), [(0, 101325), (300, 0), (float("nan"), 1)])
def test_rejects_non_positive_input(temperature, pressure):
    with pytest.raises(InvalidInputError):
        AirCorrelationEstimator().estimate(temperature, pressure)
