"""Vehicle model."""

from __future__ import annotations

import uuid

from pydantic import Field, model_validator

from truckremote.models._base import TruckRemoteModel
from truckremote.models.engine import EngineOption, FuelType, get_engine, resolve_engine


class Vehicle(TruckRemoteModel):
    """A vehicle associated with the user's account.

    When ``engine_id`` references a catalog engine, ``fuel_type`` always
    agrees with that engine's fuel kind.  A missing ``fuel_type`` is
    filled in from the engine; a conflicting one is rejected.
    """

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    make: str = ""
    model: str = ""
    year: int = 0
    nickname: str = ""
    image_name: str = "car.fill"
    fuel_type: FuelType | None = None
    engine_id: str | None = None
    """Catalog id of the selected engine, if any."""

    @property
    def engine_option(self) -> EngineOption | None:
        """The explicitly selected engine, or ``None`` when unset/unknown."""
        return get_engine(self.engine_id)

    @property
    def effective_engine(self) -> EngineOption:
        """Selected engine, else fuel-kind fallback, else the global fallback."""
        return resolve_engine(self.engine_id, self.fuel_type)

    @property
    def display_name(self) -> str:
        return self.nickname or f"{self.year} {self.make} {self.model}".strip()

    def with_engine(self, engine: EngineOption) -> Vehicle:
        """Return a copy with *engine* selected (fuel kind follows the engine)."""
        return self.model_copy(update={"engine_id": engine.id, "fuel_type": engine.fuel_type})

    def with_fuel_type(self, fuel_type: FuelType) -> Vehicle:
        """Return a copy with *fuel_type* set.

        An engine of a different fuel kind is deselected.
        """
        engine = self.engine_option
        engine_id = self.engine_id if engine is None or engine.fuel_type == fuel_type else None
        return self.model_copy(update={"fuel_type": fuel_type, "engine_id": engine_id})

    @model_validator(mode="after")
    def _fuel_follows_engine(self) -> Vehicle:
        engine = self.engine_option
        if engine is None:
            return self
        if self.fuel_type is None:
            object.__setattr__(self, "fuel_type", engine.fuel_type)
        elif self.fuel_type != engine.fuel_type:
            raise ValueError(
                f"fuel_type {self.fuel_type.value!r} conflicts with engine {engine.id!r} ({engine.fuel_type.value})"
            )
        return self
