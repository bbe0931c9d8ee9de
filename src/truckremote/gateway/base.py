"""Structural interfaces for the remote vehicle gateway and its helpers.

The orchestrator and status cache depend only on these protocols, which
makes it easy to pass test doubles while keeping production
implementations concrete.  Timeouts and retries are the gateway's
responsibility; callers never wrap these calls in their own deadlines.
"""

from __future__ import annotations

from typing import Protocol

from truckremote.models.command import RemoteCommand
from truckremote.models.engine import FuelType
from truckremote.models.status import Coordinate, VehicleStatus
from truckremote.models.vehicle import Vehicle


class RemoteVehicleGateway(Protocol):
    """Remote command dispatch and status retrieval.

    Every method raises on failure (normally a
    :class:`~truckremote.exceptions.GatewayError` subclass).
    """

    async def fetch_vehicles(self) -> list[Vehicle]:
        ...

    async def fetch_status(self, vehicle: Vehicle) -> VehicleStatus:
        ...

    async def send_command(self, command: RemoteCommand, vehicle: Vehicle) -> None:
        ...

    async def update_vehicle(self, vehicle: Vehicle) -> Vehicle:
        ...

    async def update_fuel_type(self, vehicle: Vehicle, fuel_type: FuelType) -> Vehicle:
        ...


class LocationProvider(Protocol):
    """Source of the device's live position."""

    async def current_location(self) -> Coordinate | None:
        """Return the current position, or ``None`` when unavailable."""
        ...


class TemperatureSource(Protocol):
    """Outside-temperature lookup keyed on a position."""

    async def temperature(self, coordinate: Coordinate) -> float:
        """Return the outside temperature in °F (never raises)."""
        ...
