from __future__ import annotations

import pytest
from pydantic import ValidationError

from truckremote.models.command import CommandRecord, GlowPlugDiagnostics, RemoteCommand
from truckremote.models.engine import (
    ENGINE_CATALOG,
    EngineOption,
    FuelType,
    fallback_engine,
    get_engine,
    needs_prewarm,
    resolve_engine,
)
from truckremote.models.status import Coordinate, VehicleStatus
from truckremote.models.vehicle import Vehicle
from truckremote.state.events import CommandPhase, CommandState

# ------------------------------------------------------------------
# Engine catalog
# ------------------------------------------------------------------


def test_catalog_contents() -> None:
    by_id = {engine.id: engine for engine in ENGINE_CATALOG}
    assert by_id["gas_v8"].glow_plug_seconds == 0
    assert by_id["gas_v6"].fuel_type == FuelType.GAS
    assert by_id["powerstroke_67"].glow_plug_seconds == 6
    assert by_id["duramax_66"].glow_plug_seconds == 5
    assert by_id["cummins_67"].glow_plug_seconds == 7
    assert by_id["maxxforce_75"].glow_plug_seconds == 8
    assert len(by_id) == len(ENGINE_CATALOG)


def test_gas_engines_never_prewarm() -> None:
    for engine in ENGINE_CATALOG:
        if engine.fuel_type == FuelType.GAS:
            assert engine.glow_plug_seconds == 0
            assert not needs_prewarm(engine)
        else:
            assert needs_prewarm(engine)


def test_gas_engine_with_glow_plugs_rejected() -> None:
    with pytest.raises(ValidationError):
        EngineOption(id="bad", name="Bad", fuel_type=FuelType.GAS, glow_plug_seconds=3)


def test_negative_glow_plug_seconds_rejected() -> None:
    with pytest.raises(ValidationError):
        EngineOption(id="bad", name="Bad", fuel_type=FuelType.DIESEL, glow_plug_seconds=-1)


def test_get_engine_unknown_and_none() -> None:
    assert get_engine("does_not_exist") is None
    assert get_engine(None) is None
    assert get_engine("duramax_66").name == "GM Duramax 6.6L"


def test_fallback_engine_by_fuel_kind() -> None:
    assert fallback_engine(FuelType.DIESEL).id == "powerstroke_67"
    assert fallback_engine(FuelType.GAS).id == "gas_v8"
    assert fallback_engine(None) is ENGINE_CATALOG[0]


def test_resolve_engine_prefers_explicit_selection() -> None:
    assert resolve_engine("cummins_67", FuelType.DIESEL).id == "cummins_67"
    assert resolve_engine("unknown", FuelType.DIESEL).id == "powerstroke_67"
    assert resolve_engine(None, None) is ENGINE_CATALOG[0]


# ------------------------------------------------------------------
# Vehicle
# ------------------------------------------------------------------


def test_vehicle_fuel_type_follows_engine() -> None:
    vehicle = Vehicle(make="GMC", model="Sierra", year=2021, engine_id="duramax_66")
    assert vehicle.fuel_type == FuelType.DIESEL
    assert vehicle.effective_engine.id == "duramax_66"


def test_vehicle_conflicting_fuel_type_rejected() -> None:
    with pytest.raises(ValidationError, match="conflicts"):
        Vehicle(make="Ram", model="2500", year=2020, fuel_type=FuelType.GAS, engine_id="cummins_67")


def test_vehicle_unknown_engine_id_falls_back() -> None:
    vehicle = Vehicle(make="Ford", model="F-350", year=2019, fuel_type=FuelType.DIESEL, engine_id="retired")
    assert vehicle.engine_option is None
    assert vehicle.effective_engine.id == "powerstroke_67"


def test_vehicle_without_engine_or_fuel_uses_first_catalog_entry() -> None:
    vehicle = Vehicle(make="Ford", model="Ranger", year=2018)
    assert vehicle.effective_engine is ENGINE_CATALOG[0]


def test_with_engine_updates_fuel_kind() -> None:
    vehicle = Vehicle(make="Ram", model="1500", year=2022, engine_id="gas_v8")
    updated = vehicle.with_engine(get_engine("cummins_67"))
    assert updated.engine_id == "cummins_67"
    assert updated.fuel_type == FuelType.DIESEL
    assert updated.id == vehicle.id
    assert vehicle.engine_id == "gas_v8"


def test_with_fuel_type_deselects_conflicting_engine() -> None:
    vehicle = Vehicle(make="Ram", model="1500", year=2022, engine_id="gas_v8")
    updated = vehicle.with_fuel_type(FuelType.DIESEL)
    assert updated.engine_id is None
    assert updated.fuel_type == FuelType.DIESEL
    assert updated.effective_engine.id == "powerstroke_67"


def test_with_fuel_type_keeps_matching_engine() -> None:
    vehicle = Vehicle(make="GMC", model="Sierra", year=2021, engine_id="duramax_66")
    assert vehicle.with_fuel_type(FuelType.DIESEL).engine_id == "duramax_66"


def test_vehicle_display_name() -> None:
    assert Vehicle(make="Ford", model="F-150", year=2024, nickname="Work Truck").display_name == "Work Truck"
    assert Vehicle(make="Ford", model="F-150", year=2024).display_name == "2024 Ford F-150"


def test_vehicle_from_camel_case_payload() -> None:
    vehicle = Vehicle.model_validate(
        {"make": "Ford", "model": "F-150", "year": 2024, "imageName": "truck.box", "fuelType": "Diesel", "engineId": None}
    )
    assert vehicle.image_name == "truck.box"
    assert vehicle.fuel_type == FuelType.DIESEL
    assert vehicle.engine_id is None


# ------------------------------------------------------------------
# Status and coordinates
# ------------------------------------------------------------------


_STATUS_BASE = {
    "isLocked": True,
    "engineOn": False,
    "fuelPercent": 0.5,
    "batteryVoltage": 12.6,
    "outsideTempF": 41.0,
}


@pytest.mark.parametrize(
    "location_fields",
    [
        {"location": {"latitude": 40.0, "longitude": -105.0}},
        {"location": [40.0, -105.0]},
        {"latitude": 40.0, "longitude": -105.0},
    ],
)
def test_status_accepts_location_forms(location_fields: dict) -> None:
    status = VehicleStatus.model_validate({**_STATUS_BASE, **location_fields})
    assert status.location == Coordinate(latitude=40.0, longitude=-105.0)
    assert status.outside_temp_f == 41.0
    assert status.cabin_temp_f is None


def test_status_payload_flattens_location() -> None:
    status = VehicleStatus.model_validate({**_STATUS_BASE, "location": [40.0, -105.0], "cabinTempF": 60.5})
    payload = status.to_payload()
    assert payload["latitude"] == 40.0
    assert payload["longitude"] == -105.0
    assert "location" not in payload
    assert payload["cabinTempF"] == 60.5
    assert VehicleStatus.model_validate(payload) == status


def test_status_payload_omits_missing_cabin_temperature() -> None:
    status = VehicleStatus.model_validate({**_STATUS_BASE, "location": [0.0, 0.0]})
    assert "cabinTempF" not in status.to_payload()


def test_status_equality_includes_location() -> None:
    first = VehicleStatus.model_validate({**_STATUS_BASE, "location": [40.0, -105.0]})
    second = VehicleStatus.model_validate({**_STATUS_BASE, "location": [40.0, -105.1]})
    assert first != second
    assert first == VehicleStatus.model_validate({**_STATUS_BASE, "latitude": 40.0, "longitude": -105.0})


@pytest.mark.parametrize("fuel", [-0.1, 1.01])
def test_status_rejects_fuel_out_of_range(fuel: float) -> None:
    with pytest.raises(ValidationError):
        VehicleStatus.model_validate({**_STATUS_BASE, "fuelPercent": fuel, "location": [0.0, 0.0]})


def test_coordinate_rejects_out_of_range_and_bad_pairs() -> None:
    with pytest.raises(ValidationError):
        Coordinate(latitude=91.0, longitude=0.0)
    with pytest.raises(ValidationError):
        Coordinate.model_validate([1.0, 2.0, 3.0])


# ------------------------------------------------------------------
# Command values
# ------------------------------------------------------------------


def test_remote_command_wire_values() -> None:
    assert [command.value for command in RemoteCommand] == ["lock", "unlock", "start", "stop", "honkflash"]


def test_command_record_is_frozen() -> None:
    record = CommandRecord(command=RemoteCommand.LOCK, success=True)
    with pytest.raises(ValidationError):
        record.success = False  # type: ignore[misc]


def test_diagnostics_default_remaining_is_zero() -> None:
    record = CommandRecord(command=RemoteCommand.START, success=True)
    diagnostics = GlowPlugDiagnostics(
        timestamp=record.timestamp,
        outside_temp_f=10.0,
        location=Coordinate(latitude=0.0, longitude=0.0),
        threshold=50.0,
        engine_name="GM Duramax 6.6L",
        should_run_glow_plugs=True,
    )
    assert diagnostics.remaining_seconds == 0


def test_command_state_constructors() -> None:
    assert CommandState.idle().phase == CommandPhase.IDLE
    assert CommandState.sending(RemoteCommand.START).command == RemoteCommand.START
    assert CommandState.success("Truck locked.").is_terminal
    assert CommandState.error("Failed to send command").is_terminal
    assert not CommandState.sending(RemoteCommand.STOP).is_terminal


def test_command_state_payload_consistency() -> None:
    with pytest.raises(ValidationError):
        CommandState(phase=CommandPhase.SENDING)
    with pytest.raises(ValidationError):
        CommandState(phase=CommandPhase.IDLE, message="stray")
    with pytest.raises(ValidationError):
        CommandState(phase=CommandPhase.SUCCESS, command=RemoteCommand.LOCK, message="Truck locked.")


def test_command_state_str() -> None:
    assert str(CommandState.idle()) == "idle"
    assert str(CommandState.sending(RemoteCommand.START)) == "sending(start)"
    assert str(CommandState.success("Truck locked.")) == "success('Truck locked.')"
