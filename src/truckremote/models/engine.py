"""Engine options and the static engine catalog.

The catalog is a pure lookup table.  Every lookup resolves to a defined
engine: an unknown id yields ``None`` from :func:`get_engine`, but
:func:`resolve_engine` always falls back, first by fuel kind and then to
the first catalog entry.
"""

from __future__ import annotations

import enum

from pydantic import Field, model_validator

from truckremote.models._base import TruckRemoteModel


class FuelType(enum.StrEnum):
    """Fuel kind of a vehicle or engine."""

    GAS = "Gas"
    DIESEL = "Diesel"


class EngineOption(TruckRemoteModel):
    """A selectable engine with its glow-plug pre-warm duration."""

    id: str
    name: str
    fuel_type: FuelType
    glow_plug_seconds: int = Field(default=0, ge=0)
    """Pre-warm duration in whole seconds (``0`` for gas engines)."""

    @property
    def needs_glow_plugs(self) -> bool:
        """Whether a start command is preceded by a glow-plug cycle."""
        return self.fuel_type == FuelType.DIESEL

    @model_validator(mode="after")
    def _prewarm_requires_diesel(self) -> EngineOption:
        if self.glow_plug_seconds > 0 and self.fuel_type != FuelType.DIESEL:
            raise ValueError(f"engine {self.id!r}: only diesel engines may declare a glow-plug duration")
        return self


ENGINE_CATALOG: tuple[EngineOption, ...] = (
    EngineOption(id="gas_v8", name="Gasoline V8", fuel_type=FuelType.GAS),
    EngineOption(id="gas_v6", name="Gasoline V6", fuel_type=FuelType.GAS),
    EngineOption(id="powerstroke_67", name="Ford Power Stroke 6.7L", fuel_type=FuelType.DIESEL, glow_plug_seconds=6),
    EngineOption(id="duramax_66", name="GM Duramax 6.6L", fuel_type=FuelType.DIESEL, glow_plug_seconds=5),
    EngineOption(id="cummins_67", name="Ram Cummins 6.7L", fuel_type=FuelType.DIESEL, glow_plug_seconds=7),
    EngineOption(id="maxxforce_75", name="Navistar MaxxForce 7.5L", fuel_type=FuelType.DIESEL, glow_plug_seconds=8),
)

_BY_ID: dict[str, EngineOption] = {engine.id: engine for engine in ENGINE_CATALOG}


def get_engine(engine_id: str | None) -> EngineOption | None:
    """Look up a catalog engine by id."""
    if engine_id is None:
        return None
    return _BY_ID.get(engine_id)


def fallback_engine(fuel_type: FuelType | None = None) -> EngineOption:
    """First catalog engine for *fuel_type*, else the first catalog entry."""
    if fuel_type is not None:
        for engine in ENGINE_CATALOG:
            if engine.fuel_type == fuel_type:
                return engine
    return ENGINE_CATALOG[0]


def resolve_engine(engine_id: str | None, fuel_type: FuelType | None) -> EngineOption:
    """Resolve the effective engine for a vehicle's configuration."""
    engine = get_engine(engine_id)
    if engine is not None:
        return engine
    return fallback_engine(fuel_type)


def needs_prewarm(engine: EngineOption) -> bool:
    return engine.needs_glow_plugs
