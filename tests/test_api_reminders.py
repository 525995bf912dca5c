from datetime import datetime, timedelta

import pytest

pytestmark = pytest.mark.asyncio


async def test_client_keeps_a_single_reminder(client, catalog):
    client_id = catalog["client_id"]
    created = await client.post("/v1/client-reminders", json={"client_id": client_id, "notes": "Winter tyres"})
    assert created.status_code == 201, created.text

    second = await client.post("/v1/client-reminders", json={"client_id": client_id, "notes": "Oil"})
    assert second.status_code == 409
    assert second.json() == {
        "detail": "Client already has a reminder. Use PUT to update it.",
        "error_code": "Conflict",
    }

    fetched = await client.get(f"/v1/client-reminders/client/{client_id}")
    assert fetched.json()["notes"] == "Winter tyres"

    updated = await client.put(f"/v1/client-reminders/{created.json()['id']}", json={"notes": "Summer tyres"})
    assert updated.json()["notes"] == "Summer tyres"

    # the reminder keeps the client from being deleted
    assert (await client.delete(f"/v1/client-profiles/{client_id}")).status_code == 400


async def test_reminder_for_unknown_client_is_rejected(client, catalog):
    response = await client.post("/v1/client-reminders", json={"client_id": 9999})

    assert response.status_code == 400
    assert response.json()["detail"] == "Client does not exist"
    assert (await client.get("/v1/client-reminders/client/9999")).status_code == 404


async def test_upcoming_reminders_cover_the_next_week(client, catalog):
    other = await client.post(
        "/v1/client-profiles", json={"first_name": "Grace", "last_name": "Hopper", "email": "grace@example.com"}
    )
    assert other.status_code == 201, other.text
    soon = (datetime.utcnow() + timedelta(days=3)).isoformat()
    later = (datetime.utcnow() + timedelta(days=30)).isoformat()

    near = await client.post(
        "/v1/client-reminders", json={"client_id": catalog["client_id"], "reminder_date": soon}
    )
    far = await client.post("/v1/client-reminders", json={"client_id": other.json()["id"], "reminder_date": later})
    assert far.status_code == 201

    upcoming = await client.get("/v1/client-reminders/upcoming")
    assert [r["id"] for r in upcoming.json()] == [near.json()["id"]]

    moved = await client.patch(f"/v1/client-reminders/{far.json()['id']}/reminder-date", json={"reminder_date": soon})
    assert moved.status_code == 200
    assert len((await client.get("/v1/client-reminders/upcoming")).json()) == 2


async def test_reminder_notes_patch_and_delete(client, catalog):
    reminder = (await client.post("/v1/client-reminders", json={"client_id": catalog["client_id"]})).json()

    noted = await client.patch(f"/v1/client-reminders/{reminder['id']}/notes", json={"notes": "Check brakes"})
    assert noted.json()["notes"] == "Check brakes"

    mismatch = await client.put(f"/v1/client-reminders/{reminder['id']}", json={"id": reminder["id"] + 1})
    assert mismatch.status_code == 400

    assert (await client.delete(f"/v1/client-reminders/{reminder['id']}")).status_code == 204
    assert (await client.get(f"/v1/client-reminders/{reminder['id']}")).status_code == 404
