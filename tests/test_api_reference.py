import pytest

pytestmark = pytest.mark.asyncio


async def test_health(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_duplicate_country_name_conflicts(client):
    created = await client.post("/v1/countries", json={"country_name": "Portugal", "phone_ext": "+351"})
    assert created.status_code == 201

    duplicate = await client.post("/v1/countries", json={"country_name": "Portugal"})
    assert duplicate.status_code == 409
    assert duplicate.json() == {"detail": "A country with this name already exists", "error_code": "Conflict"}

    # renaming onto itself is not a conflict
    same = await client.put(f"/v1/countries/{created.json()['id']}", json={"country_name": "Portugal"})
    assert same.status_code == 200

    found = await client.get("/v1/countries/search", params={"name": "port"})
    assert [c["country_name"] for c in found.json()] == ["Portugal"]


async def test_country_in_use_cannot_be_deleted(client):
    country = (await client.post("/v1/countries", json={"country_name": "Chile"})).json()
    garage = await client.post("/v1/garage-profiles", json={"garage_name": "Andes Auto", "country_id": country["id"]})
    assert garage.status_code == 201

    blocked = await client.delete(f"/v1/countries/{country['id']}")
    assert blocked.status_code == 400
    assert blocked.json() == {
        "detail": "Cannot delete country as it is being used by clients or garages",
        "error_code": "InUse",
    }

    assert (await client.delete(f"/v1/garage-profiles/{garage.json()['id']}")).status_code == 204
    assert (await client.delete(f"/v1/countries/{country['id']}")).status_code == 204
    assert (await client.get(f"/v1/countries/{country['id']}")).status_code == 404


async def test_duplicate_currency_and_offer_conflict(client, catalog):
    assert (await client.post("/v1/currencies", json={"curr_desc": "USD"})).status_code == 409

    offer = {
        "user_type_id": catalog["user_type_id"],
        "premium_desc": "Gold",
        "premium_cost": 10,
        "curr_id": catalog["currency_id"],
    }
    response = await client.post("/v1/premium-offers", json=offer)
    assert response.status_code == 409
    assert response.json()["detail"] == "A premium offer with this description already exists"


async def test_duplicate_user_type_description_conflicts(client, catalog):
    duplicate = await client.post("/v1/user-types", json={"user_type_desc": "Client"})
    assert duplicate.status_code == 409
    assert duplicate.json() == {"detail": "A user type with this description already exists", "error_code": "Conflict"}

    garage_type = (await client.post("/v1/user-types", json={"user_type_desc": "Garage"})).json()
    renamed = await client.put(f"/v1/user-types/{garage_type['id']}", json={"user_type_desc": "Client"})
    assert renamed.status_code == 409

    same = await client.put(f"/v1/user-types/{catalog['user_type_id']}", json={"user_type_desc": "Client"})
    assert same.status_code == 200


async def test_duplicate_garage_email_conflicts(client, catalog):
    response = await client.post(
        "/v1/garage-profiles", json={"garage_name": "Copycat Garage", "email": "north@example.com"}
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "A garage with this email already exists"


async def test_owner_with_payment_method_cannot_be_deleted(client, catalog, card_payload):
    await client.post("/v1/client-payment-methods", json=card_payload("client_id", catalog["client_id"]))

    response = await client.delete(f"/v1/client-profiles/{catalog['client_id']}")

    assert response.status_code == 400
    assert response.json()["error_code"] == "InUse"


async def test_currency_and_offer_in_use_by_orders(client, catalog, card_payload):
    method = (
        await client.post("/v1/client-payment-methods", json=card_payload("client_id", catalog["client_id"]))
    ).json()
    await client.post(
        "/v1/client-payment-orders",
        json={
            "client_id": catalog["client_id"],
            "amount": 100,
            "curr_id": catalog["currency_id"],
            "payment_method_id": method["id"],
            "premium_offer_id": catalog["offer_id"],
        },
    )

    currency = await client.delete(f"/v1/currencies/{catalog['currency_id']}")
    assert currency.status_code == 400
    assert currency.json()["detail"] == (
        "Cannot delete currency as it is being used in payment orders, premium offers, or service types"
    )

    offer = await client.delete(f"/v1/premium-offers/{catalog['offer_id']}")
    assert offer.status_code == 400
    assert offer.json()["detail"] == "Cannot delete premium offer as it is being used by payment orders"


async def test_active_and_popular_offers(client, catalog, card_payload):
    silver = (
        await client.post(
            "/v1/premium-offers",
            json={
                "user_type_id": catalog["user_type_id"],
                "premium_desc": "Silver",
                "premium_cost": 50,
                "curr_id": catalog["currency_id"],
            },
        )
    ).json()
    method = (
        await client.post("/v1/garage-payment-methods", json=card_payload("garage_id", catalog["garage_id"]))
    ).json()
    for _ in range(2):
        await client.post(
            "/v1/garage-payment-orders",
            json={
                "garage_id": catalog["garage_id"],
                "amount": 50,
                "curr_id": catalog["currency_id"],
                "payment_method_id": method["id"],
                "premium_offer_id": silver["id"],
            },
        )

    active = (await client.get("/v1/premium-offers/active")).json()
    assert [o["premium_desc"] for o in active] == ["Silver"]

    popular = (await client.get("/v1/premium-offers/popular")).json()
    assert popular[0]["id"] == silver["id"]
    assert popular[0]["garage_purchases"] == 2
    assert popular[0]["client_purchases"] == 0
    assert popular[0]["total_purchases"] == 2
    assert popular[1]["total_purchases"] == 0


async def test_offer_price_patch(client, catalog):
    response = await client.patch(f"/v1/premium-offers/{catalog['offer_id']}/price", json={"premium_cost": 120.5})

    assert response.status_code == 200
    assert response.json()["premium_cost"] == pytest.approx(120.5)


async def test_create_notification_pushes_to_client(client, catalog, pushed):
    response = await client.post(
        "/v1/client-notifications", json={"client_id": catalog["client_id"], "notes": "  Your order shipped  "}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["notes"] == "Your order shipped"
    assert body["is_read"] is False
    assert pushed == [(catalog["client_id"], "Your order shipped")]

    unread = (await client.get(f"/v1/client-notifications/client/{catalog['client_id']}/unread")).json()
    assert [n["id"] for n in unread] == [body["id"]]

    read = await client.patch(f"/v1/client-notifications/{body['id']}/read")
    assert read.json()["is_read"] is True
    assert (await client.get(f"/v1/client-notifications/client/{catalog['client_id']}/unread")).json() == []


async def test_create_notification_validation_messages(client, catalog, pushed):
    blank = await client.post("/v1/client-notifications", json={"client_id": catalog["client_id"], "notes": "   "})
    assert blank.status_code == 400
    assert blank.json()["detail"] == "Notification notes are required."

    stranger = await client.post("/v1/client-notifications", json={"client_id": 9999, "notes": "hello"})
    assert stranger.status_code == 400
    assert stranger.json()["detail"] == "Specified Client does not exist."

    assert pushed == []


async def test_delete_client_notifications(client, catalog):
    missing = await client.delete(f"/v1/client-notifications/client/{catalog['client_id']}")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "No notifications found for this client."

    for notes in ("one", "two"):
        await client.post("/v1/client-notifications", json={"client_id": catalog["client_id"], "notes": notes})

    deleted = await client.delete(f"/v1/client-notifications/client/{catalog['client_id']}")
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "Deleted 2 notification(s)"


async def test_validation_errors_are_flattened(client):
    response = await client.post("/v1/countries", json={"country_name": ""})

    assert response.status_code == 422
    assert response.json()["detail"].startswith("country_name")
