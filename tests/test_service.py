import logging

import pytest

from steam_enthalpy.config import DEFAULT_SETTINGS, deep_merge
from steam_enthalpy.errors import InvalidInputError, OutOfRangeError
from steam_enthalpy.estimator.estimator import Method
from steam_enthalpy.service import EnthalpyService, build_estimator


def test_successful_submission_records_history(service):
    submission = service.submit(225, 10)
    assert submission.ok
    assert submission.estimate.enthalpy == pytest.approx(2892.3)
    assert submission.entry.sequence == 1
    assert submission.stats.count == 1
    assert submission.notices == ()
    assert submission.message == "Enthalpy: 2892.30 kJ/kg"


def test_nearest_pressure_notice(service):
    submission = service.submit(300, 15)
    assert submission.estimate.pressure_used == 10
    assert len(submission.notices) == 1
    assert submission.notices[0].startswith("[PRESSURE_NEAREST_USED]")
    assert "requested 15, used 10" in submission.notices[0]


def test_out_of_range_leaves_history_untouched(service, caplog):
    service.submit(300, 10)
    with caplog.at_level(logging.WARNING, logger="steam_enthalpy.service"):
        low = service.submit(199, 10)
        high = service.submit(601, 10)
    assert isinstance(low.error, OutOfRangeError)
    assert isinstance(high.error, OutOfRangeError)
    assert not low.ok and low.estimate is None and low.entry is None
    assert service.current_stats().count == 1
    assert "Rejected query" in caplog.text
    assert low.message.startswith("[TEMPERATURE_OUT_OF_RANGE]")


def test_invalid_input_is_reported_not_raised(service):
    submission = service.submit("", 10)
    assert isinstance(submission.error, InvalidInputError)
    assert submission.message.startswith("[INVALID_INPUT]")
    assert submission.as_dict()["error"]["field"] == "temperature"
    assert len(service.history) == 0


def test_window_bound_from_settings(small_service):
    for temperature in (200, 250, 300, 350, 400):
        small_service.submit(temperature, 10)
    assert [entry.temperature for entry in small_service.history] == [300.0, 350.0, 400.0]
    assert small_service.current_stats().count == 3


def test_reset_all_twice(service):
    service.submit(225, 10)
    assert service.reset_all().count == 0
    assert service.reset_all().count == 0
    assert service.current_stats().average is None


def test_air_medium_from_settings():
    settings = deep_merge(DEFAULT_SETTINGS, {"medium": "air"})
    submission = EnthalpyService(settings=settings).submit(300, 101325)
    assert submission.estimate.method is Method.CORRELATION
    assert submission.notices == ()


def test_switching_medium_clears_history(service):
    service.submit(225, 10)
    service.set_medium("air")
    assert len(service.history) == 0
    submission = service.submit(300, 101325)
    assert [entry.estimate.medium for entry in service.history] == ["air"]
    assert submission.stats.count == 1
    assert submission.stats.average == pytest.approx(submission.estimate.enthalpy)


def test_reselecting_same_medium_keeps_history(service):
    service.submit(225, 10)
    service.set_medium("steam")
    assert len(service.history) == 1


def test_unknown_medium():
    with pytest.raises(ValueError, match="Unknown medium"):
        build_estimator("water")


def test_submission_as_dict(service):
    payload = service.submit(700, 10).as_dict()
    assert payload["ok"] is False
    assert payload["error"]["side"] == "above"
    assert payload["error"]["t_max"] == 600.0
