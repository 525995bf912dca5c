from datetime import datetime, timedelta

import pytest

pytestmark = pytest.mark.asyncio


async def _create(client, url: str, payload) -> int:
    response = await client.post(url, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["id"]


async def _vehicle_refs(client, catalog):
    return {
        "client_id": catalog["client_id"],
        "fuel_type_id": await _create(client, "/v1/fuel-types", {"description": "Diesel"}),
        "manufacturer_id": await _create(client, "/v1/manufacturers", {"description": "Volvo"}),
        "vehicle_type_id": await _create(client, "/v1/vehicle-types", {"description": "Truck"}),
        "measure_unit_id": await _create(client, "/v1/measure-units", {"description": "km"}),
    }


def _vehicle(refs, plate: str = "AB-12-CD", **extra):
    return {**refs, "vehicle_name": "Hauler", "model": "FH16", "license_plate": plate, **extra}


async def test_catalog_descriptions_conflict(client):
    await _create(client, "/v1/fuel-types", {"description": "Diesel"})

    duplicate = await client.post("/v1/fuel-types", json={"description": "Diesel"})
    assert duplicate.status_code == 409
    assert duplicate.json() == {"detail": "A fuel type with this description already exists", "error_code": "Conflict"}

    await _create(client, "/v1/manufacturers", {"description": "Volvo"})
    assert (await client.post("/v1/manufacturers", json={"description": "Volvo"})).json()["detail"] == (
        "A manufacturer with this description already exists"
    )

    await _create(client, "/v1/measure-units", {"description": "km"})
    assert (await client.post("/v1/measure-units", json={"description": "km"})).status_code == 409

    # vehicle types may repeat
    await _create(client, "/v1/vehicle-types", {"description": "Van"})
    await _create(client, "/v1/vehicle-types", {"description": "Van"})
    assert len((await client.get("/v1/vehicle-types")).json()) == 2


async def test_catalog_rename_and_search(client):
    fuel_id = await _create(client, "/v1/fuel-types", {"description": "Petrol"})
    await _create(client, "/v1/fuel-types", {"description": "Electric"})

    renamed = await client.put(f"/v1/fuel-types/{fuel_id}", json={"description": "Gasoline"})
    assert renamed.json() == {"id": fuel_id, "description": "Gasoline"}

    clash = await client.put(f"/v1/fuel-types/{fuel_id}", json={"description": "Electric"})
    assert clash.status_code == 409

    mismatch = await client.put(f"/v1/fuel-types/{fuel_id}", json={"id": fuel_id + 1, "description": "LPG"})
    assert mismatch.status_code == 400

    found = await client.get("/v1/fuel-types/search", params={"term": "gaso"})
    assert [f["description"] for f in found.json()] == ["Gasoline"]


async def test_vehicle_requires_existing_related_entities(client, catalog):
    refs = await _vehicle_refs(client, catalog)

    for field in ("fuel_type_id", "manufacturer_id", "vehicle_type_id", "measure_unit_id", "client_id"):
        response = await client.post("/v1/vehicles", json=_vehicle({**refs, field: 9999}))
        assert response.status_code == 400, field
        assert response.json()["detail"] == "Invalid related entity ID(s)"

    assert (await client.get("/v1/vehicles/count")).json() == {"count": 0}


async def test_license_plate_and_chassis_must_be_unique(client, catalog):
    refs = await _vehicle_refs(client, catalog)
    first = await _create(client, "/v1/vehicles", _vehicle(refs, chassis_number="CH-1"))

    plate = await client.post("/v1/vehicles", json=_vehicle(refs))
    assert plate.status_code == 409
    assert plate.json()["detail"] == "A vehicle with this license plate already exists"

    chassis = await client.post("/v1/vehicles", json=_vehicle(refs, plate="ZZ-99-ZZ", chassis_number="CH-1"))
    assert chassis.status_code == 409
    assert chassis.json()["detail"] == "A vehicle with this chassis number already exists"

    second = await _create(client, "/v1/vehicles", _vehicle(refs, plate="ZZ-99-ZZ"))
    taken = await client.put(f"/v1/vehicles/{second}", json={"license_plate": "AB-12-CD"})
    assert taken.status_code == 409

    # keeping its own plate is fine
    same = await client.put(f"/v1/vehicles/{first}", json={"license_plate": "AB-12-CD", "model": "FH"})
    assert same.status_code == 200
    assert same.json()["model"] == "FH"


async def test_vehicle_lookups_and_patches(client, catalog):
    refs = await _vehicle_refs(client, catalog)
    vehicle_id = await _create(client, "/v1/vehicles", _vehicle(refs))

    by_plate = await client.get("/v1/vehicles/license/AB-12-CD")
    assert by_plate.json()["id"] == vehicle_id
    assert (await client.get("/v1/vehicles/license/NOPE")).status_code == 404

    searched = await client.get("/v1/vehicles/search", params={"query": "haul"})
    assert [v["id"] for v in searched.json()] == [vehicle_id]

    odometer = await client.patch(f"/v1/vehicles/{vehicle_id}/odometer", json={"odometer": 120000})
    assert odometer.json()["odometer"] == 120000
    assert (await client.patch(f"/v1/vehicles/{vehicle_id}/odometer", json={"odometer": -1})).status_code == 422

    inactive = await client.patch(f"/v1/vehicles/{vehicle_id}/status", json={"active": False})
    assert inactive.json()["active"] is False
    assert (await client.get("/v1/vehicles/active")).json() == []

    owned = await client.get(f"/v1/vehicles/client/{catalog['client_id']}")
    assert len(owned.json()) == 1


async def test_catalog_in_use_by_vehicle_cannot_be_deleted(client, catalog):
    refs = await _vehicle_refs(client, catalog)
    await _create(client, "/v1/vehicles", _vehicle(refs))

    fuel = await client.delete(f"/v1/fuel-types/{refs['fuel_type_id']}")
    assert fuel.status_code == 400
    assert fuel.json() == {"detail": "Cannot delete fuel type as it is being used by vehicles", "error_code": "InUse"}

    vehicle_type = await client.delete(f"/v1/vehicle-types/{refs['vehicle_type_id']}")
    assert vehicle_type.json()["detail"] == "Cannot delete vehicle type because it has associated vehicles."

    assert (await client.delete(f"/v1/manufacturers/{refs['manufacturer_id']}")).status_code == 400
    assert (await client.delete(f"/v1/measure-units/{refs['measure_unit_id']}")).status_code == 400

    client_delete = await client.delete(f"/v1/client-profiles/{catalog['client_id']}")
    assert client_delete.status_code == 400


async def test_appointment_requires_existing_vehicle(client, catalog):
    when = (datetime.utcnow() + timedelta(days=2)).isoformat()

    missing = await client.post("/v1/vehicle-appointments", json={"vehicle_id": 9999, "appointment_date": when})
    assert missing.status_code == 400
    assert missing.json() == {"detail": "Invalid Vehicle ID", "error_code": "InvalidInput"}

    refs = await _vehicle_refs(client, catalog)
    vehicle_id = await _create(client, "/v1/vehicles", _vehicle(refs))
    appointment_id = await _create(
        client,
        "/v1/vehicle-appointments",
        {"vehicle_id": vehicle_id, "garage_id": catalog["garage_id"], "appointment_date": when, "note": "Brakes"},
    )

    moved = await client.put(f"/v1/vehicle-appointments/{appointment_id}", json={"vehicle_id": 9999})
    assert moved.status_code == 400
    assert moved.json()["detail"] == "Invalid Vehicle ID"

    upcoming = await client.get("/v1/vehicle-appointments/upcoming")
    assert [a["id"] for a in upcoming.json()] == [appointment_id]
    for_client = await client.get(f"/v1/vehicle-appointments/client/{catalog['client_id']}")
    assert [a["id"] for a in for_client.json()] == [appointment_id]
    at_garage = await client.get(f"/v1/vehicle-appointments/garage/{catalog['garage_id']}")
    assert len(at_garage.json()) == 1

    blocked = await client.delete(f"/v1/vehicles/{vehicle_id}")
    assert blocked.status_code == 400
    assert blocked.json()["detail"] == "Cannot delete vehicle as it has related records"

    garage_delete = await client.delete(f"/v1/garage-profiles/{catalog['garage_id']}")
    assert garage_delete.status_code == 400

    assert (await client.delete(f"/v1/vehicle-appointments/{appointment_id}")).status_code == 204
    assert (await client.delete(f"/v1/vehicles/{vehicle_id}")).status_code == 204


async def test_appointment_range_and_reschedule(client, catalog):
    refs = await _vehicle_refs(client, catalog)
    vehicle_id = await _create(client, "/v1/vehicles", _vehicle(refs))
    appointment_id = await _create(
        client,
        "/v1/vehicle-appointments",
        {"vehicle_id": vehicle_id, "appointment_date": "2031-03-10T09:00:00"},
    )

    on_day = await client.get("/v1/vehicle-appointments/date/2031-03-10")
    assert [a["id"] for a in on_day.json()] == [appointment_id]

    rescheduled = await client.patch(
        f"/v1/vehicle-appointments/{appointment_id}/reschedule", json={"appointment_date": "2031-04-01T10:00:00"}
    )
    assert rescheduled.json()["appointment_date"].startswith("2031-04-01")

    in_range = await client.get(
        "/v1/vehicle-appointments/range", params={"start": "2031-03-01T00:00:00", "end": "2031-03-31T00:00:00"}
    )
    assert in_range.json() == []

    backwards = await client.get(
        "/v1/vehicle-appointments/range", params={"start": "2031-05-01T00:00:00", "end": "2031-03-01T00:00:00"}
    )
    assert backwards.status_code == 400
    assert (await client.get("/v1/vehicle-appointments/count")).json() == {"count": 1}


async def test_service_type_description_conflicts_and_selection(client):
    service_type_id = await _create(client, "/v1/service-types", {"description": "Oil change"})

    duplicate = await client.post("/v1/service-types", json={"description": "Oil change"})
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"] == "A service type with this description already exists"

    other = await _create(client, "/v1/service-types", {"description": "Tyre rotation"})
    renamed = await client.put(f"/v1/service-types/{other}", json={"description": "Oil change"})
    assert renamed.status_code == 409

    selected = await client.patch(f"/v1/service-types/{service_type_id}/select", json={"is_selected": True})
    assert selected.json()["is_selected"] is True
    assert [s["id"] for s in (await client.get("/v1/service-types/selected")).json()] == [service_type_id]


async def test_service_type_in_use_cannot_be_deleted(client):
    service_type_id = await _create(client, "/v1/service-types", {"description": "Oil change"})
    unit_id = await _create(client, "/v1/measure-units", {"description": "km"})
    setup = {"service_type_id": service_type_id, "service_value": 10000, "measure_unit_id": unit_id}
    setup_id = await _create(client, "/v1/service-type-setups", setup)

    same_interval = await client.post("/v1/service-type-setups", json=setup)
    assert same_interval.status_code == 409
    assert same_interval.json()["detail"] == "A setup with this service type and value already exists"

    setups = await client.get(f"/v1/service-types/{service_type_id}/setups")
    assert [s["id"] for s in setups.json()] == [setup_id]

    blocked = await client.delete(f"/v1/service-types/{service_type_id}")
    assert blocked.status_code == 400
    assert blocked.json() == {
        "detail": "Cannot delete service type as it is being used in setups or vehicle services",
        "error_code": "InUse",
    }

    unit_blocked = await client.delete(f"/v1/measure-units/{unit_id}")
    assert unit_blocked.json()["detail"] == "Cannot delete measurement unit as it is being used by services or vehicles"

    assert (await client.delete(f"/v1/service-type-setups/{setup_id}")).status_code == 204
    assert (await client.delete(f"/v1/service-types/{service_type_id}")).status_code == 204


async def test_service_line_blocks_service_type_and_currency_delete(client, catalog):
    refs = await _vehicle_refs(client, catalog)
    vehicle_id = await _create(client, "/v1/vehicles", _vehicle(refs))
    service_type_id = await _create(client, "/v1/service-types", {"description": "Oil change"})
    visit_id = await _create(
        client,
        "/v1/vehicle-services",
        {"vehicle_id": vehicle_id, "garage_id": catalog["garage_id"], "odometer": 50000},
    )
    line = {"service_type_id": service_type_id, "cost": "49.90", "curr_id": catalog["currency_id"]}
    line_id = await _create(client, f"/v1/vehicle-services/{visit_id}/service-types", line)

    again = await client.post(f"/v1/vehicle-services/{visit_id}/service-types", json=line)
    assert again.status_code == 409

    lines = await client.get(f"/v1/vehicle-services/{visit_id}/service-types")
    assert lines.json()[0]["cost"] == pytest.approx(49.9)

    service_type = await client.delete(f"/v1/service-types/{service_type_id}")
    assert service_type.status_code == 400

    currency = await client.delete(f"/v1/currencies/{catalog['currency_id']}")
    assert currency.status_code == 400
    assert currency.json()["detail"] == (
        "Cannot delete currency as it is being used in payment orders, premium offers, or service types"
    )

    assert (await client.delete(f"/v1/vehicle-services/{visit_id}/service-types/{line_id}")).status_code == 204
    assert (await client.delete(f"/v1/service-types/{service_type_id}")).status_code == 204


async def test_vehicle_service_requires_vehicle_and_garage(client, catalog):
    missing_vehicle = await client.post(
        "/v1/vehicle-services", json={"vehicle_id": 9999, "garage_id": catalog["garage_id"]}
    )
    assert missing_vehicle.status_code == 400
    assert missing_vehicle.json()["detail"] == "Invalid Vehicle ID"

    refs = await _vehicle_refs(client, catalog)
    vehicle_id = await _create(client, "/v1/vehicles", _vehicle(refs))
    missing_garage = await client.post("/v1/vehicle-services", json={"vehicle_id": vehicle_id, "garage_id": 9999})
    assert missing_garage.status_code == 400
    assert missing_garage.json()["detail"] == "Invalid Garage ID"
