"""Outside-temperature lookup against an Open-Meteo compatible forecast API.

Endpoint:
  - GET {base_url}/v1/forecast?latitude=..&longitude=..&current=temperature_2m
    &temperature_unit=fahrenheit[&apikey=..]

The lookup never raises: any transport error, non-2xx status or malformed
body yields the configured fallback temperature.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp
from pydantic import BaseModel, ConfigDict, ValidationError

from truckremote._constants import WEATHER_FORECAST_PATH
from truckremote.config import WeatherConfig
from truckremote.models.status import Coordinate

_logger = logging.getLogger(__name__)

_SENSITIVE_PARAMS = frozenset({"apikey"})


def _loggable(params: Mapping[str, str]) -> dict[str, str]:
    return {key: "<redacted>" if key in _SENSITIVE_PARAMS else value for key, value in params.items()}


class _CurrentWeather(BaseModel):
    model_config = ConfigDict(extra="ignore")

    temperature_2m: float | None = None


class _ForecastResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    current: _CurrentWeather | None = None


class WeatherClient:
    """Async outside-temperature lookup.

    Usage::

        async with aiohttp.ClientSession() as http:
            weather = WeatherClient(WeatherConfig(), http)
            temp_f = await weather.temperature(Coordinate(latitude=37.3, longitude=-122.0))
    """

    def __init__(self, config: WeatherConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    @property
    def fallback(self) -> float:
        return self._config.fallback_temperature_f

    def build_params(self, coordinate: Coordinate) -> dict[str, str]:
        params = {
            "latitude": str(coordinate.latitude),
            "longitude": str(coordinate.longitude),
            "current": "temperature_2m",
            "temperature_unit": "fahrenheit",
        }
        if self._config.api_key:
            params["apikey"] = self._config.api_key
        return params

    async def temperature(self, coordinate: Coordinate) -> float:
        """Return the current outside temperature in °F for *coordinate*."""
        url = f"{self._config.base_url.rstrip('/')}{WEATHER_FORECAST_PATH}"
        params = self.build_params(coordinate)
        _logger.debug("GET %s params=%s", url, _loggable(params))

        try:
            async with self._http.get(
                url,
                params=params,
                timeout=aiohttp.ClientTimeout(total=self._config.timeout),
            ) as resp:
                if not 200 <= resp.status < 300:
                    _logger.debug("Weather lookup returned HTTP %s; using fallback", resp.status)
                    return self.fallback
                body: Any = await resp.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError, ValueError):
            _logger.debug("Weather lookup failed; using fallback", exc_info=True)
            return self.fallback

        try:
            parsed = _ForecastResponse.model_validate(body)
        except ValidationError:
            _logger.debug("Weather response malformed; using fallback", exc_info=True)
            return self.fallback

        if parsed.current is None or parsed.current.temperature_2m is None:
            return self.fallback
        return parsed.current.temperature_2m
