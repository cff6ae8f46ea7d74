import json

import pytest

from steam_enthalpy.config import DEFAULT_SETTINGS, ConfigError, deep_merge, load_settings


def test_defaults_without_file_or_env():
    settings = load_settings(env={})
    assert settings == DEFAULT_SETTINGS
    assert settings is not DEFAULT_SETTINGS


def test_deep_merge_does_not_mutate_inputs():
    base = {"history": {"max_data_points": 50}, "medium": "steam"}
    merged = deep_merge(base, {"history": {"max_data_points": 10}})
    assert merged["history"]["max_data_points"] == 10
    assert merged["medium"] == "steam"
    assert base["history"]["max_data_points"] == 50


def test_file_then_env_precedence(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"history": {"max_data_points": 20}, "medium": "air"}), encoding="utf-8")
    settings = load_settings(path, env={"STEAM_ENTHALPY_MAX_POINTS": "7"})
    assert settings["history"]["max_data_points"] == 7
    assert settings["medium"] == "air"
    assert settings["ui"]["notification_ms"] == 3000


def test_config_file_from_environment(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"ui": {"dark_theme": True}}), encoding="utf-8")
    settings = load_settings(env={"STEAM_ENTHALPY_CONFIG": str(path), "STEAM_ENTHALPY_TABLE_PATH": "t.json"})
    assert settings["ui"]["dark_theme"] is True
    assert settings["table"]["path"] == "t.json"


@pytest.mark.parametrize(
    "env",
    [
        {"STEAM_ENTHALPY_MAX_POINTS": "many"},
        {"STEAM_ENTHALPY_MAX_POINTS": "0"},
        {"STEAM_ENTHALPY_MEDIUM": "water"},
    ],
)
def test_invalid_overrides(env):
    with pytest.raises(ConfigError):
        load_settings(env=env)


def test_invalid_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError, match="JSON object"):
        load_settings(path, env={})
    with pytest.raises(ConfigError, match="Cannot read"):
        load_settings(tmp_path / "absent.json", env={})
