"""Remote vehicle gateway: contract plus the bundled local implementation."""

from truckremote.gateway.base import LocationProvider, RemoteVehicleGateway, TemperatureSource
from truckremote.gateway.local import LocalRemoteVehicleGateway, default_fleet
from truckremote.gateway.weather import WeatherClient

__all__ = [
    "LocalRemoteVehicleGateway",
    "LocationProvider",
    "RemoteVehicleGateway",
    "TemperatureSource",
    "WeatherClient",
    "default_fleet",
]
