import pytest
from sqlalchemy import delete

from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.models import ClientProfile, Country
from app.services import crud_service

pytestmark = pytest.mark.asyncio


async def test_update_of_row_deleted_concurrently_is_not_found(db, session_factory):
    db.add(Country(country_name="Peru"))
    await db.commit()
    country = await crud_service.get_or_404(db, Country, 1, "Country")

    async with session_factory() as other:
        await other.execute(delete(Country).where(Country.id == country.id))
        await other.commit()

    country.country_name = "Republic of Peru"
    with pytest.raises(NotFoundError) as excinfo:
        await crud_service.commit_or_not_found(db, Country, country.id, "Country")

    assert excinfo.value.detail == "Country not found"


async def test_commit_or_not_found_flushes_pending_changes(db, session_factory):
    db.add(Country(country_name="Peru"))
    await db.commit()
    country = await crud_service.get_or_404(db, Country, 1, "Country")

    country.phone_ext = "+51"
    await crud_service.commit_or_not_found(db, Country, country.id, "Country")
    await db.commit()

    async with session_factory() as other:
        assert (await other.get(Country, country.id)).phone_ext == "+51"


async def test_ensure_unique_ignores_the_row_being_updated(db):
    db.add(Country(country_name="Peru"))
    await db.flush()

    await crud_service.ensure_unique(db, Country, Country.country_name, "Peru", "A country", exclude_id=1)
    await crud_service.ensure_unique(db, Country, Country.country_name, None, "A country")
    with pytest.raises(ConflictError) as excinfo:
        await crud_service.ensure_unique(db, Country, Country.country_name, "Peru", "A country")

    assert excinfo.value.detail == "A country already exists"


async def test_ensure_unreferenced_reports_in_use(db):
    country = Country(country_name="Peru")
    db.add(country)
    await db.flush()
    db.add(ClientProfile(first_name="Ada", last_name="Byron", country_id=country.id))
    await db.flush()

    with pytest.raises(InvalidInputError) as excinfo:
        await crud_service.ensure_unreferenced(
            db, [(ClientProfile, ClientProfile.country_id == country.id)], "Country in use"
        )

    assert excinfo.value.error_code == "InUse"
