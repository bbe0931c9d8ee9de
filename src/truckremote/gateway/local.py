"""In-memory remote vehicle gateway.

Simulates a small fleet so the orchestrator can run without a backend.
Commands mutate the simulated status; status fetches apply the live
device location (when available) and look up the outside temperature for
that position.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from truckremote.exceptions import VehicleNotFoundError
from truckremote.gateway.base import LocationProvider, TemperatureSource
from truckremote.models.command import RemoteCommand
from truckremote.models.engine import ENGINE_CATALOG, FuelType, fallback_engine
from truckremote.models.status import Coordinate, VehicleStatus
from truckremote.models.vehicle import Vehicle

_logger = logging.getLogger(__name__)

DEFAULT_LOCATION = Coordinate(latitude=37.3349, longitude=-122.0090)

DEFAULT_STATUS = VehicleStatus(
    is_locked=True,
    engine_on=False,
    fuel_percent=0.68,
    battery_voltage=12.4,
    outside_temp_f=70.0,
    location=DEFAULT_LOCATION,
)

#: Used for vehicles that were never seeded with a status.
UNSEEDED_STATUS = VehicleStatus(
    is_locked=True,
    engine_on=False,
    fuel_percent=0.5,
    battery_voltage=12.0,
    outside_temp_f=70.0,
    location=DEFAULT_LOCATION,
)


_COMMAND_EFFECTS: dict[RemoteCommand, dict[str, bool]] = {
    RemoteCommand.LOCK: {"is_locked": True},
    RemoteCommand.UNLOCK: {"is_locked": False},
    RemoteCommand.START: {"engine_on": True},
    RemoteCommand.STOP: {"engine_on": False},
}


def default_fleet() -> list[Vehicle]:
    diesel = next(engine for engine in ENGINE_CATALOG if engine.needs_glow_plugs)
    return [
        Vehicle(
            make="Ford",
            model="F-150",
            year=2023,
            nickname="Work Truck",
            image_name="car.fill",
            fuel_type=FuelType.DIESEL,
            engine_id=diesel.id,
        ),
        Vehicle(
            make="Ram",
            model="1500",
            year=2022,
            nickname="Family Hauler",
            image_name="car.2.fill",
            engine_id=fallback_engine(FuelType.GAS).id,
        ),
        Vehicle(
            make="GMC",
            model="Sierra",
            year=2021,
            nickname="Trail Rig",
            image_name="car.circle.fill",
            engine_id=fallback_engine(FuelType.DIESEL).id,
        ),
    ]


class _NoLocation:
    async def current_location(self) -> Coordinate | None:
        return None


class _FixedTemperature:
    def __init__(self, value: float) -> None:
        self._value = value

    async def temperature(self, coordinate: Coordinate) -> float:
        return self._value


class LocalRemoteVehicleGateway:
    """Gateway backed by in-process dictionaries."""

    def __init__(
        self,
        *,
        vehicles: Iterable[Vehicle] | None = None,
        initial_status: VehicleStatus = DEFAULT_STATUS,
        location_provider: LocationProvider | None = None,
        temperature_source: TemperatureSource | None = None,
    ) -> None:
        fleet = list(vehicles) if vehicles is not None else default_fleet()
        self._vehicles: list[Vehicle] = fleet
        self._statuses: dict[str, VehicleStatus] = {str(v.id): initial_status for v in fleet}
        self._location_provider: LocationProvider = location_provider or _NoLocation()
        self._temperature: TemperatureSource = temperature_source or _FixedTemperature(initial_status.outside_temp_f)

    def status_for(self, vehicle: Vehicle) -> VehicleStatus | None:
        """Simulated status as stored (no location/temperature enrichment)."""
        return self._statuses.get(str(vehicle.id))

    async def fetch_vehicles(self) -> list[Vehicle]:
        return list(self._vehicles)

    async def update_vehicle(self, vehicle: Vehicle) -> Vehicle:
        for index, existing in enumerate(self._vehicles):
            if existing.id == vehicle.id:
                self._vehicles[index] = vehicle
                return vehicle
        raise VehicleNotFoundError(f"Unknown vehicle {vehicle.id}", vehicle_id=str(vehicle.id))

    async def update_fuel_type(self, vehicle: Vehicle, fuel_type: FuelType) -> Vehicle:
        return await self.update_vehicle(vehicle.with_fuel_type(fuel_type))

    async def fetch_status(self, vehicle: Vehicle) -> VehicleStatus:
        key = str(vehicle.id)
        base = self._statuses.get(key, UNSEEDED_STATUS)

        live = await self._location_provider.current_location()
        if live is not None:
            base = base.model_copy(update={"location": live})
            self._statuses[key] = base

        temp_f = await self._temperature.temperature(base.location)
        return base.model_copy(update={"outside_temp_f": temp_f, "cabin_temp_f": None})

    async def send_command(self, command: RemoteCommand, vehicle: Vehicle) -> None:
        key = str(vehicle.id)
        current = self._statuses.get(key)
        if current is None:
            _logger.debug("Ignoring %s for unseeded vehicle=%s", command, key)
            return

        patch = _COMMAND_EFFECTS.get(command)
        if patch:
            self._statuses[key] = current.model_copy(update=patch)
        _logger.debug("Simulated %s for vehicle=%s", command, key)
