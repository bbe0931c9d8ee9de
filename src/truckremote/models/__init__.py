"""Data models for vehicles, status snapshots and remote commands."""

from truckremote.models._base import TruckRemoteModel, utcnow
from truckremote.models.command import CommandRecord, GlowPlugDiagnostics, RemoteCommand, SUCCESS_MESSAGES
from truckremote.models.engine import (
    ENGINE_CATALOG,
    EngineOption,
    FuelType,
    fallback_engine,
    get_engine,
    needs_prewarm,
    resolve_engine,
)
from truckremote.models.status import Coordinate, VehicleStatus
from truckremote.models.vehicle import Vehicle

__all__ = [
    "CommandRecord",
    "Coordinate",
    "ENGINE_CATALOG",
    "EngineOption",
    "FuelType",
    "GlowPlugDiagnostics",
    "RemoteCommand",
    "SUCCESS_MESSAGES",
    "TruckRemoteModel",
    "Vehicle",
    "VehicleStatus",
    "fallback_engine",
    "get_engine",
    "needs_prewarm",
    "resolve_engine",
    "utcnow",
]
