from __future__ import annotations

import pytest

from truckremote.config import TruckRemoteConfig, WeatherConfig
from truckremote.exceptions import ConfigError

_ENV_KEYS = (
    "TRUCKREMOTE_GLOW_PLUG_THRESHOLD_F",
    "TRUCKREMOTE_GLOW_PLUG_TICK",
    "TRUCKREMOTE_RESET_DELAY",
    "TRUCKREMOTE_HISTORY_LIMIT",
    "TRUCKREMOTE_WEATHER_BASE_URL",
    "TRUCKREMOTE_WEATHER_API_KEY",
    "TRUCKREMOTE_WEATHER_FALLBACK_TEMP_F",
    "TRUCKREMOTE_WEATHER_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = TruckRemoteConfig()
    assert config.glow_plug_threshold_f == 50.0
    assert config.glow_plug_tick == 1.0
    assert config.reset_delay == 2.0
    assert config.history_limit == 5
    assert config.weather == WeatherConfig()
    assert config.weather.fallback_temperature_f == 68.0


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRUCKREMOTE_GLOW_PLUG_THRESHOLD_F", "40")
    monkeypatch.setenv("TRUCKREMOTE_RESET_DELAY", "0.5")
    monkeypatch.setenv("TRUCKREMOTE_HISTORY_LIMIT", "10")
    monkeypatch.setenv("TRUCKREMOTE_WEATHER_API_KEY", "abc")
    monkeypatch.setenv("TRUCKREMOTE_WEATHER_TIMEOUT", "3")

    config = TruckRemoteConfig.from_env()

    assert config.glow_plug_threshold_f == 40.0
    assert config.reset_delay == 0.5
    assert config.history_limit == 10
    assert config.weather.api_key == "abc"
    assert config.weather.timeout == 3.0


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRUCKREMOTE_GLOW_PLUG_TICK", "0.5")
    monkeypatch.setenv("TRUCKREMOTE_WEATHER_BASE_URL", "https://env.example.test")

    config = TruckRemoteConfig.from_env(glow_plug_tick=0.01, weather={"base_url": "https://override.example.test"})

    assert config.glow_plug_tick == 0.01
    assert config.weather.base_url == "https://override.example.test"


def test_weather_config_override_replaces_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRUCKREMOTE_WEATHER_API_KEY", "from-env")

    config = TruckRemoteConfig.from_env(weather=WeatherConfig(fallback_temperature_f=30.0))

    assert config.weather.api_key is None
    assert config.weather.fallback_temperature_f == 30.0


def test_invalid_number_in_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRUCKREMOTE_HISTORY_LIMIT", "five")

    with pytest.raises(ConfigError, match="TRUCKREMOTE_HISTORY_LIMIT"):
        TruckRemoteConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [{"history_limit": 0}, {"glow_plug_tick": -1.0}, {"reset_delay": -0.1}],
)
def test_invalid_values_rejected(kwargs: dict) -> None:
    with pytest.raises(ConfigError):
        TruckRemoteConfig(**kwargs)
