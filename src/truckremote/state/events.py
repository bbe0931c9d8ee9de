"""Orchestrator state values.

The orchestrator is always in exactly one of four phases.  ``CommandState``
is a frozen value; a transition replaces it, observers never mutate it.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, model_validator

from truckremote.models.command import RemoteCommand


class CommandPhase(StrEnum):
    IDLE = "idle"
    SENDING = "sending"
    SUCCESS = "success"
    ERROR = "error"


class CommandState(BaseModel):
    """Current orchestrator state.

    ``command`` is set only while ``SENDING``; ``message`` only for
    ``SUCCESS`` and ``ERROR``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    phase: CommandPhase = CommandPhase.IDLE
    command: RemoteCommand | None = None
    message: str | None = None

    @model_validator(mode="after")
    def _check_payload(self) -> CommandState:
        if (self.phase == CommandPhase.SENDING) != (self.command is not None):
            raise ValueError("command must be set exactly when phase is 'sending'")
        terminal = self.phase in (CommandPhase.SUCCESS, CommandPhase.ERROR)
        if terminal != (self.message is not None):
            raise ValueError("message must be set exactly when phase is 'success' or 'error'")
        return self

    @classmethod
    def idle(cls) -> CommandState:
        return cls()

    @classmethod
    def sending(cls, command: RemoteCommand) -> CommandState:
        return cls(phase=CommandPhase.SENDING, command=command)

    @classmethod
    def success(cls, message: str) -> CommandState:
        return cls(phase=CommandPhase.SUCCESS, message=message)

    @classmethod
    def error(cls, message: str) -> CommandState:
        return cls(phase=CommandPhase.ERROR, message=message)

    @property
    def is_idle(self) -> bool:
        return self.phase == CommandPhase.IDLE

    @property
    def is_terminal(self) -> bool:
        return self.phase in (CommandPhase.SUCCESS, CommandPhase.ERROR)

    def __str__(self) -> str:
        if self.command is not None:
            return f"{self.phase.value}({self.command.value})"
        if self.message is not None:
            return f"{self.phase.value}({self.message!r})"
        return self.phase.value
