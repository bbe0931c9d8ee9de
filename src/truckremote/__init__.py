"""truckremote - Async remote command engine for trucks (lock, unlock, start, stop)."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("truckremote")
except PackageNotFoundError:
    __version__ = "0+local"
from truckremote.client import TruckRemoteClient
from truckremote.config import TruckRemoteConfig, WeatherConfig
from truckremote.exceptions import (
    CommandDispatchError,
    ConfigError,
    GatewayError,
    StatusRefreshError,
    TruckRemoteError,
    VehicleNotFoundError,
)
from truckremote.garage import VehicleGarage
from truckremote.gateway import LocalRemoteVehicleGateway, RemoteVehicleGateway, WeatherClient
from truckremote.models import (
    ENGINE_CATALOG,
    CommandRecord,
    Coordinate,
    EngineOption,
    FuelType,
    GlowPlugDiagnostics,
    RemoteCommand,
    Vehicle,
    VehicleStatus,
)
from truckremote.orchestrator import CommandOrchestrator
from truckremote.state.events import CommandPhase, CommandState
from truckremote.state.store import VehicleStatusCache

__all__ = [
    "__version__",
    "CommandDispatchError",
    "CommandOrchestrator",
    "CommandPhase",
    "CommandRecord",
    "CommandState",
    "ConfigError",
    "Coordinate",
    "ENGINE_CATALOG",
    "EngineOption",
    "FuelType",
    "GatewayError",
    "GlowPlugDiagnostics",
    "LocalRemoteVehicleGateway",
    "RemoteCommand",
    "RemoteVehicleGateway",
    "StatusRefreshError",
    "TruckRemoteClient",
    "TruckRemoteConfig",
    "TruckRemoteError",
    "Vehicle",
    "VehicleGarage",
    "VehicleNotFoundError",
    "VehicleStatus",
    "VehicleStatusCache",
    "WeatherClient",
    "WeatherConfig",
]
