from steam_enthalpy.ui.events import (
    ESTIMATE_RECORDED,
    ESTIMATE_REJECTED,
    HISTORY_RESET,
    MEDIUM_CHANGED,
    NOTIFY,
    STATS_CHANGED,
    EventBus,
)
from steam_enthalpy.ui.model import SessionModel, validate_form
from steam_enthalpy.ui.theme import get_theme, toggle_theme


class Recorder:
    def __init__(self, bus, *events):
        self.calls = []
        for event in events:
            bus.subscribe(event, lambda _event=event, **payload: self.calls.append((_event, payload)))

    def names(self):
        return [name for name, _ in self.calls]

    def payloads(self, name):
        return [payload for event, payload in self.calls if event == name]


def test_event_bus_unsubscribe():
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe("ping", lambda **payload: received.append(payload))
    bus.publish("ping", value=1)
    unsubscribe()
    unsubscribe()
    bus.publish("ping", value=2)
    assert received == [{"value": 1}]
    assert bus.subscriber_count("ping") == 0


def test_event_bus_isolates_failing_subscriber():
    bus = EventBus()
    received = []

    def broken(**_):
        raise RuntimeError("boom")

    bus.subscribe("ping", broken)
    bus.subscribe("ping", lambda **payload: received.append(payload))
    bus.publish("ping", value=3)
    assert received == [{"value": 3}]


def test_validate_form_reports_each_field():
    errors = validate_form(" ", "-2")
    assert errors.temperature.startswith("Enter a positive temperature")
    assert errors.pressure.startswith("Enter a positive pressure")
    assert not validate_form("225", "10").any


def test_submit_publishes_record_stats_and_notifications():
    bus = EventBus()
    recorder = Recorder(bus, ESTIMATE_RECORDED, STATS_CHANGED, NOTIFY)
    model = SessionModel(bus)
    model.submit("300", "15")
    assert recorder.names() == [ESTIMATE_RECORDED, STATS_CHANGED, NOTIFY, NOTIFY]
    notifications = recorder.payloads(NOTIFY)
    assert notifications[0]["kind"] == "warning"
    assert notifications[1] == {"message": "Enthalpy: 3058.50 kJ/kg", "kind": "success"}
    assert recorder.payloads(ESTIMATE_RECORDED)[0]["series"]["enthalpies"] == [3058.5]
    assert model.stats.count == 1


def test_invalid_form_does_not_reach_service():
    bus = EventBus()
    recorder = Recorder(bus, ESTIMATE_REJECTED, NOTIFY)
    model = SessionModel(bus)
    assert model.submit("abc", "10") is None
    assert recorder.payloads(NOTIFY) == [{"message": "Fix input errors", "kind": "error"}]
    assert recorder.payloads(ESTIMATE_REJECTED)[0]["errors"].temperature is not None
    assert model.stats.count == 0


def test_out_of_range_is_rejected_with_message():
    bus = EventBus()
    recorder = Recorder(bus, ESTIMATE_REJECTED, NOTIFY)
    model = SessionModel(bus)
    submission = model.submit("650", "10")
    assert not submission.ok
    assert "out of range" in recorder.payloads(NOTIFY)[0]["message"]
    assert model.series()["enthalpies"] == []


def test_reset_all_clears_and_only_notifies_with_data():
    bus = EventBus()
    recorder = Recorder(bus, HISTORY_RESET, STATS_CHANGED, NOTIFY)
    model = SessionModel(bus)
    model.submit("225", "10")
    recorder.calls.clear()
    model.reset_all()
    model.reset_all()
    assert recorder.names().count(HISTORY_RESET) == 2
    assert recorder.payloads(NOTIFY) == [{"message": "Form and data reset", "kind": "success"}]
    assert all(payload["stats"].count == 0 for payload in recorder.payloads(STATS_CHANGED))
    assert model.entries() == ()


def test_set_medium_announces_change_once():
    bus = EventBus()
    recorder = Recorder(bus, MEDIUM_CHANGED)
    model = SessionModel(bus)
    model.set_medium("air")
    model.set_medium("air")
    assert recorder.payloads(MEDIUM_CHANGED) == [{"medium": "air"}]
    assert model.submit("300", "101325").estimate.medium == "air"


def test_theme_toggle():
    light = get_theme()
    dark = toggle_theme(light)
    assert (light.name, dark.name) == ("light", "dark")
    assert toggle_theme(dark) is light
    assert get_theme(dark=True) is dark


def test_set_medium_clears_history_and_publishes_reset():
    bus = EventBus()
    recorder = Recorder(bus, MEDIUM_CHANGED, HISTORY_RESET, STATS_CHANGED)
    model = SessionModel(bus)
    model.submit("225", "10")
    recorder.calls.clear()
    model.set_medium("air")
    assert recorder.names() == [MEDIUM_CHANGED, HISTORY_RESET, STATS_CHANGED]
    assert recorder.payloads(STATS_CHANGED)[0]["stats"].count == 0
    assert model.entries() == ()
    model.submit("300", "101325")
    assert [entry.estimate.medium for entry in model.entries()] == ["air"]
