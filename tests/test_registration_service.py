from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import InvalidInputError, NotFoundError
from app.models import ClientProfile, GarageProfile
from app.services import registration_service
from app.services.flag_service import CLIENT_REGISTRATIONS, GARAGE_REGISTRATIONS

pytestmark = pytest.mark.asyncio


async def test_create_defaults_register_date_and_active_flag(db, catalog):
    before = datetime.utcnow()
    registration = await registration_service.create_registration(
        db,
        CLIENT_REGISTRATIONS,
        {"client_id": catalog["client_id"], "expiry_date": before + timedelta(days=30)},
    )

    assert registration.is_active is True
    assert registration.register_date >= before - timedelta(seconds=1)


async def test_create_normalizes_aware_datetimes_to_naive_utc(db, catalog):
    aware = datetime(2031, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    registration = await registration_service.create_registration(
        db,
        GARAGE_REGISTRATIONS,
        {"garage_id": catalog["garage_id"], "expiry_date": aware},
    )

    assert registration.expiry_date == datetime(2031, 1, 1, 10, 0)


async def test_create_for_unknown_owner_is_not_found(db, catalog):
    with pytest.raises(NotFoundError):
        await registration_service.create_registration(
            db, GARAGE_REGISTRATIONS, {"garage_id": 9999, "expiry_date": datetime.utcnow() + timedelta(days=1)}
        )


async def test_activate_deactivates_the_other_registrations(db, catalog):
    expiry = datetime.utcnow() + timedelta(days=30)
    data = {"client_id": catalog["client_id"], "expiry_date": expiry}
    first = await registration_service.create_registration(db, CLIENT_REGISTRATIONS, data)
    second = await registration_service.create_registration(db, CLIENT_REGISTRATIONS, data)

    await registration_service.activate_registration(db, CLIENT_REGISTRATIONS, first.id)

    assert first.is_active is True
    assert second.is_active is False


async def test_activate_missing_registration_is_not_found(db, catalog):
    with pytest.raises(NotFoundError):
        await registration_service.activate_registration(db, GARAGE_REGISTRATIONS, 777)


async def test_extend_from_future_expiry(db, catalog):
    expiry = datetime(2099, 1, 31, 8, 0)
    registration = await registration_service.create_registration(
        db, GARAGE_REGISTRATIONS, {"garage_id": catalog["garage_id"], "expiry_date": expiry}
    )

    extended = await registration_service.extend_registration(db, GARAGE_REGISTRATIONS, registration.id, 1)

    # calendar months clamp to the end of a shorter month
    assert extended.expiry_date == datetime(2099, 2, 28, 8, 0)


async def test_extend_lapsed_registration_counts_from_now(db, catalog):
    lapsed = datetime.utcnow() - timedelta(days=90)
    registration = await registration_service.create_registration(
        db,
        CLIENT_REGISTRATIONS,
        {"client_id": catalog["client_id"], "register_date": lapsed - timedelta(days=30), "expiry_date": lapsed},
    )

    before = datetime.utcnow()
    extended = await registration_service.extend_registration(db, CLIENT_REGISTRATIONS, registration.id, 3)

    assert extended.expiry_date > before + timedelta(days=85)
    assert extended.expiry_date < datetime.utcnow() + timedelta(days=95)


async def test_extend_requires_positive_months(db, catalog):
    registration = await registration_service.create_registration(
        db,
        CLIENT_REGISTRATIONS,
        {"client_id": catalog["client_id"], "expiry_date": datetime.utcnow() + timedelta(days=5)},
    )

    with pytest.raises(InvalidInputError):
        await registration_service.extend_registration(db, CLIENT_REGISTRATIONS, registration.id, 0)


async def test_list_current_excludes_expired_and_inactive(db, catalog):
    now = datetime.utcnow()
    current = await registration_service.create_registration(
        db, CLIENT_REGISTRATIONS, {"client_id": catalog["client_id"], "expiry_date": now + timedelta(days=10)}
    )
    await registration_service.create_registration(
        db, CLIENT_REGISTRATIONS, {"client_id": catalog["client_id"], "expiry_date": now - timedelta(days=1)}
    )
    await registration_service.create_registration(
        db,
        CLIENT_REGISTRATIONS,
        {"client_id": catalog["client_id"], "expiry_date": now + timedelta(days=10), "is_active": False},
    )

    rows = await registration_service.list_current(db, CLIENT_REGISTRATIONS)

    assert [r.id for r in rows] == [current.id]


async def test_sync_owner_premium_follows_current_registrations(db, catalog):
    garage = await db.get(GarageProfile, catalog["garage_id"])
    assert await registration_service.sync_owner_premium(db, GARAGE_REGISTRATIONS, garage.id) is False

    await registration_service.create_registration(
        db,
        GARAGE_REGISTRATIONS,
        {"garage_id": garage.id, "expiry_date": datetime.utcnow() + timedelta(days=3)},
    )

    assert await registration_service.sync_owner_premium(db, GARAGE_REGISTRATIONS, garage.id) is True
    assert garage.is_premium is True


async def test_sync_owner_premium_clears_flag_when_only_expired(db, catalog):
    client = await db.get(ClientProfile, catalog["client_id"])
    client.is_premium = True
    await registration_service.create_registration(
        db,
        CLIENT_REGISTRATIONS,
        {"client_id": client.id, "expiry_date": datetime.utcnow() - timedelta(days=3)},
    )

    assert await registration_service.sync_owner_premium(db, CLIENT_REGISTRATIONS, client.id) is False
    assert client.is_premium is False
