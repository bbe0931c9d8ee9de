"""Remote command kinds, command history records and glow-plug diagnostics."""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import Field

from truckremote.models._base import TruckRemoteModel, utcnow
from truckremote.models.status import Coordinate


class RemoteCommand(enum.StrEnum):
    """Command kinds accepted by the remote vehicle gateway."""

    LOCK = "lock"
    UNLOCK = "unlock"
    START = "start"
    STOP = "stop"
    HONK_FLASH = "honkflash"


#: Banner text shown after a command succeeds.
SUCCESS_MESSAGES: dict[RemoteCommand, str] = {
    RemoteCommand.LOCK: "Truck locked.",
    RemoteCommand.UNLOCK: "Truck unlocked.",
    RemoteCommand.START: "Engine start sent.",
    RemoteCommand.STOP: "Engine stopped.",
}


class CommandRecord(TruckRemoteModel):
    """One completed command in the history."""

    command: RemoteCommand
    timestamp: datetime = Field(default_factory=utcnow)
    success: bool


class GlowPlugDiagnostics(TruckRemoteModel):
    """Point-in-time record of the glow-plug decision for a start attempt.

    Produced once per diesel start attempt and replaced by the next one.
    ``remaining_seconds`` is updated on every countdown tick so observers
    can render the countdown; it stays ``0`` when the plugs did not run.
    """

    timestamp: datetime
    outside_temp_f: float
    location: Coordinate
    threshold: float
    engine_name: str
    should_run_glow_plugs: bool
    remaining_seconds: int = Field(default=0, ge=0)
