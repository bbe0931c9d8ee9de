"""Remote command orchestration.

:class:`CommandOrchestrator` owns the command lifecycle for one selected
vehicle at a time::

    idle -> sending(cmd) -> success(msg) | error(msg) -> (after delay) idle

Only one command may be in flight per orchestrator instance.  The guard is
the ``idle`` check at the start of :meth:`CommandOrchestrator._send`; the
orchestrator is meant to be driven from a single event loop, so no lock is
needed.

Start commands for diesel engines may be preceded by a glow-plug
countdown.  The decision uses the *cached* outside temperature at the
moment the start begins; nothing is dispatched until the countdown has
completed.

The reset to ``idle`` runs as an independent task and is never cancelled
by later commands.  It writes ``idle`` unconditionally when it fires, even
if a newer command has moved the state on in the meantime.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from truckremote._constants import COMMAND_FAILED_MESSAGE, UNKNOWN_OUTSIDE_TEMP_F
from truckremote.config import TruckRemoteConfig
from truckremote.exceptions import CommandDispatchError
from truckremote.gateway.base import RemoteVehicleGateway
from truckremote.models._base import utcnow
from truckremote.models.command import SUCCESS_MESSAGES, CommandRecord, GlowPlugDiagnostics, RemoteCommand
from truckremote.models.status import Coordinate
from truckremote.models.vehicle import Vehicle
from truckremote.state.events import CommandState
from truckremote.state.history import CommandHistory
from truckremote.state.observers import ObserverList
from truckremote.state.store import VehicleStatusCache

_logger = logging.getLogger(__name__)

_UNKNOWN_LOCATION = Coordinate(latitude=0.0, longitude=0.0)


class CommandOrchestrator:
    """Drives remote commands for the currently selected vehicle.

    Parameters
    ----------
    gateway
        Remote vehicle gateway used for dispatch.
    status_cache
        Cache read for the glow-plug decision and refreshed after each
        dispatched command.
    vehicle_provider
        Returns the currently selected vehicle, or ``None``.
    config
        Threshold, tick length, reset delay and history size.
    sleep
        Awaitable delay used for countdown ticks and the idle reset.
        Tests pass a virtual-time implementation.
    clock
        Timestamp source for diagnostics and history records.
    """

    def __init__(
        self,
        gateway: RemoteVehicleGateway,
        status_cache: VehicleStatusCache,
        vehicle_provider: Callable[[], Vehicle | None],
        *,
        config: TruckRemoteConfig | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._gateway = gateway
        self._status_cache = status_cache
        self._vehicle_provider = vehicle_provider
        self._config = config or TruckRemoteConfig()
        self._sleep = sleep
        self._clock = clock
        self._state = CommandState.idle()
        self._history = CommandHistory(limit=self._config.history_limit, clock=clock)
        self._glow_plug_diagnostics: GlowPlugDiagnostics | None = None
        self._observers: ObserverList[CommandState] = ObserverList()
        self._reset_tasks: set[asyncio.Task[None]] = set()

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def state(self) -> CommandState:
        return self._state

    @property
    def history(self) -> tuple[CommandRecord, ...]:
        """Completed commands, most recent first."""
        return self._history.records

    @property
    def glow_plug_diagnostics(self) -> GlowPlugDiagnostics | None:
        """Decision record of the latest diesel start attempt, if any."""
        return self._glow_plug_diagnostics

    def subscribe(self, callback: Callable[[CommandState], None]) -> Callable[[], None]:
        """Call *callback* with every new state, including countdown ticks.

        Returns a function that removes the subscription.
        """
        return self._observers.subscribe(callback)

    def _set_state(self, state: CommandState) -> None:
        self._state = state
        self._observers.notify(state)

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    async def request_start(self) -> bool:
        """Start the engine (after glow plugs, when required)."""
        return await self._send(RemoteCommand.START)

    async def request_stop(self) -> bool:
        """Stop the engine."""
        return await self._send(RemoteCommand.STOP)

    async def request_lock(self) -> bool:
        """Lock the vehicle."""
        return await self._send(RemoteCommand.LOCK)

    async def request_unlock(self) -> bool:
        """Unlock the vehicle."""
        return await self._send(RemoteCommand.UNLOCK)

    # ------------------------------------------------------------------
    # Command flow
    # ------------------------------------------------------------------

    async def _send(self, command: RemoteCommand) -> bool:
        """Run one command to a terminal state.

        Returns ``False`` (without side effects) when the request is
        rejected because no vehicle is selected or a command is already
        in flight; ``True`` once the command reached success or error.
        """
        vehicle = self._vehicle_provider()
        if vehicle is None:
            _logger.debug("Rejected %s: no vehicle selected", command)
            return False
        if not self._state.is_idle:
            _logger.debug("Rejected %s: orchestrator busy (%s)", command, self._state)
            return False

        self._set_state(CommandState.sending(command))
        _logger.info("Sending %s to vehicle=%s", command, vehicle.id)

        try:
            if command == RemoteCommand.START:
                await self._run_glow_plugs_if_needed(vehicle)
            await self._dispatch(command, vehicle)
            await self._status_cache.refresh(vehicle)
        except asyncio.CancelledError:
            _logger.info("%s for vehicle=%s cancelled", command, vehicle.id)
            self._set_state(CommandState.idle())
            raise
        except Exception as exc:
            _logger.warning("%s for vehicle=%s failed: %s", command, vehicle.id, exc, exc_info=True)
            self._set_state(CommandState.error(COMMAND_FAILED_MESSAGE))
            self._history.record(command, success=False)
        else:
            _logger.info("%s for vehicle=%s succeeded", command, vehicle.id)
            self._set_state(CommandState.success(SUCCESS_MESSAGES[command]))
            self._history.record(command, success=True)

        self._schedule_reset()
        return True

    async def _dispatch(self, command: RemoteCommand, vehicle: Vehicle) -> None:
        try:
            await self._gateway.send_command(command, vehicle)
        except CommandDispatchError:
            raise
        except Exception as exc:
            raise CommandDispatchError(
                f"Dispatch of {command} failed: {exc}",
                command=command.value,
                vehicle_id=str(vehicle.id),
            ) from exc

    async def _run_glow_plugs_if_needed(self, vehicle: Vehicle) -> None:
        engine = vehicle.effective_engine
        if not engine.needs_glow_plugs or engine.glow_plug_seconds <= 0:
            self._glow_plug_diagnostics = None
            return

        cached = self._status_cache.status
        temp_f = cached.outside_temp_f if cached is not None else UNKNOWN_OUTSIDE_TEMP_F
        location = cached.location if cached is not None else _UNKNOWN_LOCATION
        threshold = self._config.glow_plug_threshold_f
        should_glow = temp_f <= threshold

        diagnostics = GlowPlugDiagnostics(
            timestamp=self._clock(),
            outside_temp_f=temp_f,
            location=location,
            threshold=threshold,
            engine_name=engine.name,
            should_run_glow_plugs=should_glow,
        )
        self._glow_plug_diagnostics = diagnostics
        _logger.info(
            "Glow plug decision engine=%s temp=%.1fF threshold=%.1fF run=%s",
            engine.name,
            temp_f,
            threshold,
            should_glow,
        )
        if not should_glow:
            return

        for remaining in range(engine.glow_plug_seconds, 0, -1):
            self._glow_plug_diagnostics = diagnostics.model_copy(update={"remaining_seconds": remaining})
            self._set_state(CommandState.sending(RemoteCommand.START))
            _logger.debug("Glow plugs warming: %ds", remaining)
            await self._sleep(self._config.glow_plug_tick)
        self._glow_plug_diagnostics = diagnostics

    # ------------------------------------------------------------------
    # Idle reset
    # ------------------------------------------------------------------

    def _schedule_reset(self) -> None:
        task = asyncio.get_running_loop().create_task(self._reset_after_delay())
        self._reset_tasks.add(task)
        task.add_done_callback(self._reset_tasks.discard)

    async def _reset_after_delay(self) -> None:
        await self._sleep(self._config.reset_delay)
        # Unconditional, see module docstring.
        self._set_state(CommandState.idle())

    async def aclose(self) -> None:
        """Cancel pending idle resets (used on teardown)."""
        tasks = list(self._reset_tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._reset_tasks.clear()
