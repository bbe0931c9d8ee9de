"""High-level async client wiring the gateway, garage, status cache and orchestrator."""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp

from truckremote.config import TruckRemoteConfig
from truckremote.exceptions import TruckRemoteError
from truckremote.garage import VehicleGarage
from truckremote.gateway.base import LocationProvider, RemoteVehicleGateway
from truckremote.gateway.local import LocalRemoteVehicleGateway
from truckremote.gateway.weather import WeatherClient
from truckremote.models.status import VehicleStatus
from truckremote.models.vehicle import Vehicle
from truckremote.orchestrator import CommandOrchestrator
from truckremote.state.store import VehicleStatusCache

_logger = logging.getLogger(__name__)


class TruckRemoteClient:
    """Async facade over the remote command engine.

    Usage::

        async with TruckRemoteClient(config) as client:
            await client.load_vehicles()
            await client.refresh_status()
            await client.request_start()

    Without an explicit *gateway* the bundled
    :class:`~truckremote.gateway.local.LocalRemoteVehicleGateway` is used,
    with outside temperatures looked up through :class:`WeatherClient`.
    """

    def __init__(
        self,
        config: TruckRemoteConfig | None = None,
        *,
        gateway: RemoteVehicleGateway | None = None,
        session: aiohttp.ClientSession | None = None,
        location_provider: LocationProvider | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._config = config or TruckRemoteConfig()
        self._gateway = gateway
        self._owns_gateway = gateway is None
        self._external_session = session is not None
        self._http_session = session
        self._location_provider = location_provider
        self._sleep = sleep
        self._garage: VehicleGarage | None = None
        self._status_cache: VehicleStatusCache | None = None
        self._orchestrator: CommandOrchestrator | None = None
        self._unsubscribe_selection: Callable[[], None] | None = None
        self._selected_id: uuid.UUID | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TruckRemoteClient:
        if self._gateway is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._gateway = LocalRemoteVehicleGateway(
                location_provider=self._location_provider,
                temperature_source=WeatherClient(self._config.weather, self._http_session),
            )
        gateway = self._gateway
        self._garage = VehicleGarage(gateway)
        self._status_cache = VehicleStatusCache(gateway)
        self._orchestrator = CommandOrchestrator(
            gateway,
            self._status_cache,
            lambda: self._garage.selected if self._garage is not None else None,
            config=self._config,
            sleep=self._sleep,
        )
        self._unsubscribe_selection = self._garage.subscribe_selection(self._on_selection_changed)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._orchestrator is not None:
            await self._orchestrator.aclose()
        if self._unsubscribe_selection is not None:
            self._unsubscribe_selection()
            self._unsubscribe_selection = None
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._orchestrator = None
        self._status_cache = None
        self._garage = None
        self._selected_id = None
        if self._owns_gateway:
            self._gateway = None

    def _on_selection_changed(self, vehicle: Vehicle | None) -> None:
        vehicle_id = vehicle.id if vehicle is not None else None
        if vehicle_id != self._selected_id and self._status_cache is not None:
            _logger.debug("Selection changed to %s; clearing cached status", vehicle_id)
            self._status_cache.clear(vehicle_id)
        self._selected_id = vehicle_id

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    @property
    def garage(self) -> VehicleGarage:
        if self._garage is None:
            raise TruckRemoteError("Client not initialized. Use 'async with TruckRemoteClient(...) as client:'")
        return self._garage

    @property
    def status_cache(self) -> VehicleStatusCache:
        if self._status_cache is None:
            raise TruckRemoteError("Client not initialized. Use 'async with TruckRemoteClient(...) as client:'")
        return self._status_cache

    @property
    def orchestrator(self) -> CommandOrchestrator:
        if self._orchestrator is None:
            raise TruckRemoteError("Client not initialized. Use 'async with TruckRemoteClient(...) as client:'")
        return self._orchestrator

    # ------------------------------------------------------------------
    # Convenience
    # ------------------------------------------------------------------

    async def load_vehicles(self) -> list[Vehicle]:
        return await self.garage.load_vehicles()

    async def refresh_status(self) -> VehicleStatus | None:
        """Refresh the cached status of the selected vehicle."""
        return await self.status_cache.refresh(self.garage.selected)

    async def request_start(self) -> bool:
        return await self.orchestrator.request_start()

    async def request_stop(self) -> bool:
        return await self.orchestrator.request_stop()

    async def request_lock(self) -> bool:
        return await self.orchestrator.request_lock()

    async def request_unlock(self) -> bool:
        return await self.orchestrator.request_unlock()
