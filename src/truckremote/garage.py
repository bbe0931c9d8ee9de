"""Vehicle list, selection and engine choice.

Engine selections are kept in memory only.  Edits are pushed through the
gateway's ``update_vehicle`` and the returned vehicle replaces the local
copy (and the selection, when it is the selected vehicle).
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable

from truckremote.exceptions import VehicleNotFoundError
from truckremote.gateway.base import RemoteVehicleGateway
from truckremote.models.engine import EngineOption, FuelType, get_engine
from truckremote.models.vehicle import Vehicle
from truckremote.state.observers import ObserverList

_logger = logging.getLogger(__name__)


class VehicleGarage:
    """The user's vehicles and which one is selected."""

    def __init__(self, gateway: RemoteVehicleGateway) -> None:
        self._gateway = gateway
        self._vehicles: list[Vehicle] = []
        self._selected: Vehicle | None = None
        self._engine_selections: dict[uuid.UUID, str] = {}
        self._observers: ObserverList[Vehicle | None] = ObserverList()

    @property
    def vehicles(self) -> tuple[Vehicle, ...]:
        return tuple(self._vehicles)

    @property
    def selected(self) -> Vehicle | None:
        return self._selected

    def subscribe_selection(self, callback: Callable[[Vehicle | None], None]) -> Callable[[], None]:
        """Be notified whenever the selected vehicle changes or is replaced."""
        return self._observers.subscribe(callback)

    def _select(self, vehicle: Vehicle | None) -> None:
        self._selected = vehicle
        self._observers.notify(vehicle)

    def _find(self, vehicle_id: uuid.UUID) -> Vehicle:
        for vehicle in self._vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        raise VehicleNotFoundError(f"Unknown vehicle {vehicle_id}", vehicle_id=str(vehicle_id))

    def _replace(self, updated: Vehicle) -> None:
        self._vehicles = [updated if v.id == updated.id else v for v in self._vehicles]
        if self._selected is not None and self._selected.id == updated.id:
            self._select(updated)

    async def load_vehicles(self) -> list[Vehicle]:
        """Fetch the vehicle list; select the first one if none is selected."""
        fetched = await self._gateway.fetch_vehicles()
        self._vehicles = list(fetched)
        for vehicle in fetched:
            if vehicle.engine_id is not None:
                self._engine_selections.setdefault(vehicle.id, vehicle.engine_id)
        if self._selected is None and fetched:
            self._select(fetched[0])
        _logger.debug("Loaded %d vehicles", len(fetched))
        return list(fetched)

    def select_vehicle(self, vehicle: Vehicle) -> None:
        self._select(vehicle)

    def engine_option(self, vehicle_id: uuid.UUID) -> EngineOption | None:
        """Engine chosen for *vehicle_id*, or ``None`` if never chosen."""
        return get_engine(self._engine_selections.get(vehicle_id))

    async def set_engine_option(self, option: EngineOption, vehicle_id: uuid.UUID) -> Vehicle:
        """Select *option* for a vehicle; its fuel kind follows the engine."""
        self._engine_selections[vehicle_id] = option.id
        vehicle = self._find(vehicle_id).with_engine(option)
        updated = await self._gateway.update_vehicle(vehicle)
        self._replace(updated)
        _logger.info("Vehicle %s engine set to %s", vehicle_id, option.id)
        return updated

    async def set_fuel_type(self, fuel_type: FuelType, vehicle_id: uuid.UUID) -> Vehicle:
        """Change a vehicle's fuel kind, dropping a conflicting engine choice."""
        updated = await self._gateway.update_fuel_type(self._find(vehicle_id), fuel_type)
        if updated.engine_id is None:
            self._engine_selections.pop(vehicle_id, None)
        self._replace(updated)
        return updated

    async def update_vehicle_details(self, *, make: str, model: str, year: int, nickname: str) -> Vehicle | None:
        """Edit the selected vehicle's descriptive fields."""
        if self._selected is None:
            return None
        vehicle = self._selected.model_copy(update={"make": make, "model": model, "year": year, "nickname": nickname})
        updated = await self._gateway.update_vehicle(vehicle)
        self._replace(updated)
        return updated
