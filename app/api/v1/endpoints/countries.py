"""v1 country catalog endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import ClientProfile, Country, GarageProfile
from app.schemas_v1 import CountryCreateRequest, CountryResponse, CountryUpdateRequest
from app.services.crud_service import (
    apply_updates,
    commit_or_not_found,
    ensure_path_matches,
    ensure_unique,
    ensure_unreferenced,
    find_where,
    get_or_404,
)

router = APIRouter()

DUPLICATE_LABEL = "A country with this name"


@router.get("", response_model=List[CountryResponse])
async def list_countries(db: AsyncSession = Depends(get_db)):
    return await find_where(db, Country)


@router.get("/search", response_model=List[CountryResponse])
async def search_countries(
    name: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
):
    pattern = f"%{name.lower()}%"
    return await find_where(db, Country, func.lower(Country.country_name).like(pattern))


@router.get("/{country_id}", response_model=CountryResponse)
async def get_country(country_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Country, country_id, "Country")


@router.post("", response_model=CountryResponse, status_code=status.HTTP_201_CREATED)
async def create_country(req: CountryCreateRequest, db: AsyncSession = Depends(get_db)):
    await ensure_unique(db, Country, Country.country_name, req.country_name, DUPLICATE_LABEL)
    country = Country(**req.model_dump())
    db.add(country)
    await db.flush()
    await db.refresh(country)
    return country


@router.put("/{country_id}", response_model=CountryResponse)
async def update_country(
    country_id: int,
    req: CountryUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    ensure_path_matches(country_id, req.id)
    country = await get_or_404(db, Country, country_id, "Country")
    updates = req.model_dump(exclude_none=True, exclude={"id"})
    if "country_name" in updates:
        await ensure_unique(
            db, Country, Country.country_name, updates["country_name"], DUPLICATE_LABEL, exclude_id=country_id
        )
    apply_updates(country, updates)
    await commit_or_not_found(db, Country, country_id, "Country")
    await db.refresh(country)
    return country


@router.delete("/{country_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_country(country_id: int, db: AsyncSession = Depends(get_db)):
    country = await get_or_404(db, Country, country_id, "Country")
    await ensure_unreferenced(
        db,
        [
            (ClientProfile, ClientProfile.country_id == country_id),
            (GarageProfile, GarageProfile.country_id == country_id),
        ],
        "Cannot delete country as it is being used by clients or garages",
    )
    await db.delete(country)
    await db.flush()
