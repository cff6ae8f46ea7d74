import pytest

from steam_enthalpy.estimator.air_correlation import AirCorrelationEstimator
from steam_enthalpy.estimator.estimator import estimate_enthalpy
from steam_enthalpy.utils.physical_props import reference_deviation, reference_steam_enthalpy


def test_reference_enthalpy_is_superheated_steam_value():
    # 10 kg/cm²G ≈ 1.08 MPa abs; IF97 gives roughly 2825 kJ/kg at 200 °C.
    assert reference_steam_enthalpy(10, 200) == pytest.approx(2825, rel=0.01)


def test_tabulated_values_stay_close_to_iapws():
    for temperature in (250, 400, 600):
        deviation = reference_deviation(estimate_enthalpy(temperature, 10))
        assert abs(deviation["deviation_pct"]) < 2.0
        assert deviation["deviation_kJ_per_kg"] == pytest.approx(
            estimate_enthalpy(temperature, 10).enthalpy - deviation["reference_kJ_per_kg"]
        )


def test_reference_rejects_air():
    with pytest.raises(ValueError, match="steam"):
        reference_deviation(AirCorrelationEstimator().estimate(300, 101325))
