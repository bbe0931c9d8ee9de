#!/usr/bin/env python3
"""Run a sequence of remote commands against the simulated local gateway.

Prints every orchestrator state transition, glow-plug countdown ticks and
the final command history.  No backend is required; outside temperatures
are looked up live unless ``--outside-temp`` pins them.

Examples::

    python scripts/remote_demo.py --vehicle 0 start lock
    python scripts/remote_demo.py --outside-temp 35 --fast start stop
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from truckremote import (  # noqa: E402
    CommandState,
    LocalRemoteVehicleGateway,
    StatusRefreshError,
    TruckRemoteClient,
    TruckRemoteConfig,
)
from truckremote.models import Coordinate  # noqa: E402

_INTENTS = ("start", "stop", "lock", "unlock")


class _PinnedTemperature:
    def __init__(self, value: float) -> None:
        self._value = value

    async def temperature(self, coordinate: Coordinate) -> float:
        return self._value


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Drive the truckremote orchestrator against a simulated fleet.")
    parser.add_argument("commands", nargs="+", choices=_INTENTS, help="Commands to send, in order.")
    parser.add_argument("--vehicle", type=int, default=0, help="Index of the vehicle to select (default: 0).")
    parser.add_argument("--outside-temp", type=float, default=None, help="Pin the outside temperature (°F).")
    parser.add_argument("--fast", action="store_true", help="Shorten glow-plug ticks and the idle reset.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging.")
    return parser.parse_args()


async def _run(args: argparse.Namespace) -> int:
    config = TruckRemoteConfig.from_env(**({"glow_plug_tick": 0.05, "reset_delay": 0.1} if args.fast else {}))
    gateway = None
    if args.outside_temp is not None:
        gateway = LocalRemoteVehicleGateway(temperature_source=_PinnedTemperature(args.outside_temp))

    async with TruckRemoteClient(config, gateway=gateway) as client:
        vehicles = await client.load_vehicles()
        if not 0 <= args.vehicle < len(vehicles):
            print(f"No vehicle at index {args.vehicle} (have {len(vehicles)})", file=sys.stderr)
            return 2
        vehicle = vehicles[args.vehicle]
        client.garage.select_vehicle(vehicle)
        print(f"Selected {vehicle.display_name} [{vehicle.effective_engine.name}]")

        try:
            status = await client.refresh_status()
        except StatusRefreshError as exc:
            print(f"Initial status refresh failed: {exc}", file=sys.stderr)
            return 1
        if status is not None:
            print(f"Outside {status.outside_temp_f:.1f}F, locked={status.is_locked}, engine_on={status.engine_on}")

        orchestrator = client.orchestrator

        def _on_state(state: CommandState) -> None:
            diagnostics = orchestrator.glow_plug_diagnostics
            if diagnostics is not None and diagnostics.remaining_seconds:
                print(f"  {state}  glow plugs {diagnostics.remaining_seconds}s")
            else:
                print(f"  {state}")

        orchestrator.subscribe(_on_state)

        for name in args.commands:
            print(f"> {name}")
            await getattr(client, f"request_{name}")()
            # Wait for the banner to reset so the next command is accepted.
            while not orchestrator.state.is_idle:
                await asyncio.sleep(0.05)

        print("History (most recent first):")
        for record in orchestrator.history:
            outcome = "ok" if record.success else "FAILED"
            print(f"  {record.timestamp:%H:%M:%S} {record.command.value:<7} {outcome}")
    return 0


def main() -> None:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
