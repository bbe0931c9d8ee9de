"""Base model for truckremote data.

Every model inherits from :class:`TruckRemoteModel` which provides:

* ``alias_generator=to_camel`` so camelCase gateway keys map
  automatically to snake_case fields.
* ``frozen=True`` so snapshots can be compared structurally and shared
  with observers without defensive copies.
* A ``model_validator(mode="before")`` that drops ``None`` values so the
  field default is used instead.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Timezone-aware "now" used as the default clock."""
    return datetime.now(UTC)


class TruckRemoteModel(BaseModel):
    """Base for all truckremote models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_none_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}

    def to_payload(self) -> dict[str, Any]:
        """Serialise with camelCase keys, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
