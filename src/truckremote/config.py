"""Client configuration for truckremote."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from truckremote._constants import (
    GLOW_PLUG_THRESHOLD_F,
    GLOW_PLUG_TICK_SECONDS,
    HISTORY_LIMIT,
    RESET_DELAY_SECONDS,
    WEATHER_BASE_URL,
    WEATHER_FALLBACK_TEMP_F,
    WEATHER_TIMEOUT_SECONDS,
)
from truckremote.exceptions import ConfigError


def _env_float(env: Mapping[str, str], key: str) -> float | None:
    value = env.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number, got {value!r}") from exc


def _env_int(env: Mapping[str, str], key: str) -> int | None:
    value = env.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class WeatherConfig:
    """Outside-temperature lookup settings.

    Parameters
    ----------
    base_url : str
        Forecast API base URL (Open-Meteo compatible).
    api_key : str or None
        Optional API key sent as the ``apikey`` query parameter.
    fallback_temperature_f : float
        Temperature returned whenever the lookup fails.
    timeout : float
        Total request timeout in seconds.
    """

    base_url: str = WEATHER_BASE_URL
    api_key: str | None = None
    fallback_temperature_f: float = WEATHER_FALLBACK_TEMP_F
    timeout: float = WEATHER_TIMEOUT_SECONDS


@dataclasses.dataclass(frozen=True)
class TruckRemoteConfig:
    """Client configuration.

    Parameters
    ----------
    glow_plug_threshold_f : float
        Glow plugs run when the cached outside temperature is at or
        below this value (°F).
    glow_plug_tick : float
        Seconds per glow-plug countdown tick.
    reset_delay : float
        Seconds a Success/Error state is shown before returning to Idle.
    history_limit : int
        Maximum number of command records kept (most recent first).
    weather : WeatherConfig
        Outside-temperature lookup settings.
    """

    glow_plug_threshold_f: float = GLOW_PLUG_THRESHOLD_F
    glow_plug_tick: float = GLOW_PLUG_TICK_SECONDS
    reset_delay: float = RESET_DELAY_SECONDS
    history_limit: int = HISTORY_LIMIT
    weather: WeatherConfig = dataclasses.field(default_factory=WeatherConfig)

    def __post_init__(self) -> None:
        if self.history_limit < 1:
            raise ConfigError(f"history_limit must be at least 1, got {self.history_limit}")
        if self.glow_plug_tick < 0 or self.reset_delay < 0:
            raise ConfigError("glow_plug_tick and reset_delay must not be negative")

    @classmethod
    def from_env(cls, **overrides: Any) -> TruckRemoteConfig:
        """Create configuration from ``TRUCKREMOTE_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        TruckRemoteConfig
            Populated configuration.
        """
        env = os.environ

        weather_kwargs: dict[str, Any] = {}
        base_url = env.get("TRUCKREMOTE_WEATHER_BASE_URL")
        if base_url is not None:
            weather_kwargs["base_url"] = base_url
        api_key = env.get("TRUCKREMOTE_WEATHER_API_KEY")
        if api_key:
            weather_kwargs["api_key"] = api_key
        fallback = _env_float(env, "TRUCKREMOTE_WEATHER_FALLBACK_TEMP_F")
        if fallback is not None:
            weather_kwargs["fallback_temperature_f"] = fallback
        timeout = _env_float(env, "TRUCKREMOTE_WEATHER_TIMEOUT")
        if timeout is not None:
            weather_kwargs["timeout"] = timeout

        # Allow overriding weather fields via a nested dict
        weather_overrides = overrides.pop("weather", None)
        if isinstance(weather_overrides, dict):
            weather_kwargs.update(weather_overrides)
        elif isinstance(weather_overrides, WeatherConfig):
            weather_kwargs = dataclasses.asdict(weather_overrides)

        config_kwargs: dict[str, Any] = {"weather": WeatherConfig(**weather_kwargs)}

        _ENV_FLOAT_MAP = {
            "TRUCKREMOTE_GLOW_PLUG_THRESHOLD_F": "glow_plug_threshold_f",
            "TRUCKREMOTE_GLOW_PLUG_TICK": "glow_plug_tick",
            "TRUCKREMOTE_RESET_DELAY": "reset_delay",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = _env_float(env, env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = val

        limit = _env_int(env, "TRUCKREMOTE_HISTORY_LIMIT")
        if limit is not None and "history_limit" not in overrides:
            config_kwargs["history_limit"] = limit

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
