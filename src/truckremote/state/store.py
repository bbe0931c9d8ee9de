"""Vehicle status cache.

Holds the last fetched :class:`VehicleStatus` for the selected vehicle.
Refreshes replace the snapshot wholesale; a failed refresh keeps the
previous snapshot and records an error flag for observers.  The cache is
bound to one vehicle; snapshots fetched for any other vehicle are dropped.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from truckremote._constants import STATUS_FAILED_MESSAGE
from truckremote.exceptions import StatusRefreshError
from truckremote.gateway.base import RemoteVehicleGateway
from truckremote.models._base import utcnow
from truckremote.models.status import VehicleStatus
from truckremote.models.vehicle import Vehicle
from truckremote.state.observers import ObserverList

_logger = logging.getLogger(__name__)


class VehicleStatusCache:
    """Last-known status snapshot with refresh coordination."""

    def __init__(
        self,
        gateway: RemoteVehicleGateway,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._gateway = gateway
        self._clock = clock
        self._vehicle_id: uuid.UUID | None = None
        self._status: VehicleStatus | None = None
        self._last_updated_at: datetime | None = None
        self._error_message: str | None = None
        self._is_loading = False
        self._observers: ObserverList[VehicleStatusCache] = ObserverList()

    @property
    def status(self) -> VehicleStatus | None:
        return self._status

    @property
    def last_updated_at(self) -> datetime | None:
        return self._last_updated_at

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def vehicle_id(self) -> uuid.UUID | None:
        """Vehicle the cached snapshot belongs to, once known."""
        return self._vehicle_id

    def subscribe(self, callback: Callable[[VehicleStatusCache], None]) -> Callable[[], None]:
        """Be notified after every refresh (successful or not)."""
        return self._observers.subscribe(callback)

    def _tracks(self, vehicle: Vehicle) -> bool:
        return self._vehicle_id is None or self._vehicle_id == vehicle.id

    def clear(self, vehicle_id: uuid.UUID | None = None) -> None:
        """Forget the cached snapshot and track *vehicle_id* from now on.

        Refreshes completing later for any other vehicle are discarded.
        """
        self._vehicle_id = vehicle_id
        self._status = None
        self._last_updated_at = None
        self._error_message = None
        self._observers.notify(self)

    async def refresh(self, vehicle: Vehicle | None) -> VehicleStatus | None:
        """Fetch a fresh snapshot for *vehicle* and replace the cache.

        Returns ``None`` without calling the gateway when no vehicle is
        given.  A snapshot fetched for a vehicle other than the tracked
        one is returned but not cached.

        Raises
        ------
        StatusRefreshError
            When the gateway fetch fails.  The previous snapshot is kept
            and, for the tracked vehicle, :attr:`error_message` is set
            before raising.
        """
        if vehicle is None:
            return None
        failure: Exception | None = None
        self._is_loading = True
        try:
            fetched = await self._gateway.fetch_status(vehicle)
        except Exception as exc:
            failure = exc
        finally:
            self._is_loading = False

        if failure is not None:
            _logger.debug("Status refresh failed for vehicle=%s", vehicle.id, exc_info=failure)
            if self._tracks(vehicle):
                self._error_message = STATUS_FAILED_MESSAGE
                self._observers.notify(self)
            raise StatusRefreshError(
                f"Status refresh failed for vehicle {vehicle.id}: {failure}",
                vehicle_id=str(vehicle.id),
            ) from failure

        if not self._tracks(vehicle):
            _logger.debug("Discarding status for vehicle=%s; tracking vehicle=%s", vehicle.id, self._vehicle_id)
            return fetched

        changed = fetched != self._status
        self._vehicle_id = vehicle.id
        self._status = fetched
        self._last_updated_at = self._clock()
        self._error_message = None
        _logger.debug("Status refreshed for vehicle=%s changed=%s", vehicle.id, changed)
        self._observers.notify(self)
        return fetched
