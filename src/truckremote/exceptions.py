"""Custom exception hierarchy for truckremote."""

from __future__ import annotations


class TruckRemoteError(Exception):
    """Base exception for all truckremote errors."""


class ConfigError(TruckRemoteError):
    """Invalid or missing configuration."""


class GatewayError(TruckRemoteError):
    """The remote vehicle gateway failed to complete a call."""

    def __init__(
        self,
        message: str,
        *,
        vehicle_id: str | None = None,
    ) -> None:
        self.vehicle_id = vehicle_id
        super().__init__(message)


class CommandDispatchError(GatewayError):
    """A remote command could not be delivered to the vehicle."""

    def __init__(
        self,
        message: str,
        *,
        command: str = "",
        vehicle_id: str | None = None,
    ) -> None:
        self.command = command
        super().__init__(message, vehicle_id=vehicle_id)


class StatusRefreshError(GatewayError):
    """Fetching the vehicle status snapshot failed.

    Raised by the status cache after it has recorded the failure for
    observers.  The previously cached snapshot is left untouched.
    """


class VehicleNotFoundError(GatewayError):
    """The gateway has no vehicle with the requested id."""
