"""Vehicle status snapshot and geographic coordinate models."""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from truckremote.models._base import TruckRemoteModel


class Coordinate(TruckRemoteModel):
    """A latitude/longitude pair in degrees."""

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    @model_validator(mode="before")
    @classmethod
    def _accept_pair(cls, values: Any) -> Any:
        if isinstance(values, (list, tuple)):
            if len(values) != 2:
                raise ValueError(f"coordinate pair must have 2 items, got {len(values)}")
            return {"latitude": values[0], "longitude": values[1]}
        return values


class VehicleStatus(TruckRemoteModel):
    """Last known state of a vehicle.

    Equality is structural (location included), so two snapshots compare
    equal exactly when nothing observable changed.

    Parameters
    ----------
    is_locked : bool
        Door lock state.
    engine_on : bool
        Whether the engine is running.
    fuel_percent : float
        Fuel level as a fraction in ``[0, 1]``.
    battery_voltage : float
        12 V battery voltage.
    outside_temp_f : float
        Outside air temperature in °F.
    cabin_temp_f : float or None
        Cabin temperature in °F, when reported.
    location : Coordinate
        Last known position.
    """

    is_locked: bool
    engine_on: bool
    fuel_percent: float = Field(ge=0.0, le=1.0)
    battery_voltage: float
    outside_temp_f: float
    cabin_temp_f: float | None = None
    location: Coordinate

    @model_validator(mode="before")
    @classmethod
    def _lift_flat_location(cls, values: Any) -> Any:
        """Accept ``latitude``/``longitude`` at the top level.

        ``location`` itself may already be a ``[lat, lon]`` pair or a
        nested object; :class:`Coordinate` handles both.
        """
        if not isinstance(values, dict) or values.get("location") is not None:
            return values
        if "latitude" in values and "longitude" in values:
            merged = dict(values)
            merged["location"] = {"latitude": merged.pop("latitude"), "longitude": merged.pop("longitude")}
            return merged
        return values

    def to_payload(self) -> dict[str, Any]:
        """Serialise with the location flattened to ``latitude``/``longitude``."""
        payload = super().to_payload()
        location = payload.pop("location")
        payload["latitude"] = location["latitude"]
        payload["longitude"] = location["longitude"]
        return payload
