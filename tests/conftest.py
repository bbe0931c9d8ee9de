from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from truckremote.models.command import RemoteCommand
from truckremote.models.engine import FuelType
from truckremote.models.status import Coordinate, VehicleStatus
from truckremote.models.vehicle import Vehicle


def make_status(**overrides: Any) -> VehicleStatus:
    values: dict[str, Any] = {
        "is_locked": True,
        "engine_on": False,
        "fuel_percent": 0.68,
        "battery_voltage": 12.4,
        "outside_temp_f": 70.0,
        "location": Coordinate(latitude=37.3349, longitude=-122.0090),
    }
    values.update(overrides)
    return VehicleStatus(**values)


class VirtualSleep:
    """Records requested delays instead of waiting; yields to the loop once."""

    def __init__(self, log: list[tuple[str, Any]]) -> None:
        self.calls: list[float] = []
        self._log = log

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)
        self._log.append(("sleep", delay))
        await asyncio.sleep(0)


class VirtualClock:
    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, 6, 30, tzinfo=UTC)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


class FakeGateway:
    """In-test gateway recording every call into a shared event log."""

    def __init__(self, log: list[tuple[str, Any]]) -> None:
        self._log = log
        self.status = make_status()
        self.vehicles: list[Vehicle] = []
        self.sent: list[RemoteCommand] = []
        self.updated: list[Vehicle] = []
        self.fetch_count = 0
        self.send_error: Exception | None = None
        self.status_error: Exception | None = None
        self.send_gate: asyncio.Event | None = None

    async def fetch_vehicles(self) -> list[Vehicle]:
        return list(self.vehicles)

    async def fetch_status(self, vehicle: Vehicle) -> VehicleStatus:
        self.fetch_count += 1
        self._log.append(("fetch_status", str(vehicle.id)))
        if self.status_error is not None:
            raise self.status_error
        return self.status

    async def send_command(self, command: RemoteCommand, vehicle: Vehicle) -> None:
        self._log.append(("send", command))
        if self.send_gate is not None:
            await self.send_gate.wait()
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(command)

    async def update_vehicle(self, vehicle: Vehicle) -> Vehicle:
        self.updated.append(vehicle)
        return vehicle

    async def update_fuel_type(self, vehicle: Vehicle, fuel_type: FuelType) -> Vehicle:
        return await self.update_vehicle(vehicle.with_fuel_type(fuel_type))


async def drain(rounds: int = 10) -> None:
    """Let pending tasks (e.g. idle resets on virtual time) run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def event_log() -> list[tuple[str, Any]]:
    return []


@pytest.fixture
def virtual_sleep(event_log: list[tuple[str, Any]]) -> VirtualSleep:
    return VirtualSleep(event_log)


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock()


@pytest.fixture
def gateway(event_log: list[tuple[str, Any]]) -> FakeGateway:
    return FakeGateway(event_log)


@pytest.fixture
def gas_truck() -> Vehicle:
    return Vehicle(make="Ram", model="1500", year=2022, nickname="Family Hauler", engine_id="gas_v8")


@pytest.fixture
def diesel_truck() -> Vehicle:
    return Vehicle(make="Ford", model="F-250", year=2023, nickname="Work Truck", engine_id="powerstroke_67")
