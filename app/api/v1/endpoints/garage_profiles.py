"""v1 garage profile endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.database import get_db
from app.models import (
    Country,
    GaragePaymentMethod,
    GaragePaymentOrder,
    GaragePremiumRegistration,
    GarageProfile,
    VehicleAppointment,
    VehicleService,
)
from app.schemas_v1 import (
    GarageProfileCreateRequest,
    GarageProfileResponse,
    GarageProfileUpdateRequest,
    PremiumFlagRequest,
    PremiumStatusResponse,
)
from app.services import registration_service
from app.services.crud_service import (
    apply_updates,
    commit_or_not_found,
    ensure_path_matches,
    ensure_unique,
    ensure_unreferenced,
    find_where,
    get_or_404,
)
from app.services.flag_service import GARAGE_REGISTRATIONS

router = APIRouter()

DUPLICATE_EMAIL_LABEL = "A garage with this email"


@router.get("", response_model=List[GarageProfileResponse])
async def list_garages(db: AsyncSession = Depends(get_db)):
    return await find_where(db, GarageProfile)


@router.get("/premium", response_model=List[GarageProfileResponse])
async def list_premium_garages(db: AsyncSession = Depends(get_db)):
    return await find_where(db, GarageProfile, GarageProfile.is_premium == True)  # noqa: E712


@router.get("/search", response_model=List[GarageProfileResponse])
async def search_garages(
    name: Optional[str] = Query(default=None, min_length=1),
    country_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
):
    criteria = []
    if name:
        criteria.append(func.lower(GarageProfile.garage_name).like(f"%{name.lower()}%"))
    if country_id is not None:
        criteria.append(GarageProfile.country_id == country_id)
    return await find_where(db, GarageProfile, *criteria)


@router.get("/by-email", response_model=GarageProfileResponse)
async def get_garage_by_email(email: str = Query(..., min_length=3), db: AsyncSession = Depends(get_db)):
    garages = await find_where(db, GarageProfile, func.lower(GarageProfile.email) == email.lower(), limit=1)
    if not garages:
        raise NotFoundError("Garage not found")
    return garages[0]


@router.get("/{garage_id}", response_model=GarageProfileResponse)
async def get_garage(garage_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, GarageProfile, garage_id, "Garage")


@router.post("", response_model=GarageProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_garage(req: GarageProfileCreateRequest, db: AsyncSession = Depends(get_db)):
    if req.country_id is not None:
        await get_or_404(db, Country, req.country_id, "Country")
    await ensure_unique(db, GarageProfile, GarageProfile.email, req.email, DUPLICATE_EMAIL_LABEL)

    garage = GarageProfile(**req.model_dump())
    db.add(garage)
    await db.flush()
    await db.refresh(garage)
    return garage


@router.put("/{garage_id}", response_model=GarageProfileResponse)
async def update_garage(
    garage_id: int,
    req: GarageProfileUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    ensure_path_matches(garage_id, req.id)
    garage = await get_or_404(db, GarageProfile, garage_id, "Garage")
    updates = req.model_dump(exclude_none=True, exclude={"id"})
    if "country_id" in updates:
        await get_or_404(db, Country, updates["country_id"], "Country")
    if "email" in updates:
        await ensure_unique(
            db, GarageProfile, GarageProfile.email, updates["email"], DUPLICATE_EMAIL_LABEL, exclude_id=garage_id
        )
    apply_updates(garage, updates)
    await commit_or_not_found(db, GarageProfile, garage_id, "Garage")
    await db.refresh(garage)
    return garage


@router.patch("/{garage_id}/premium", response_model=PremiumStatusResponse)
async def set_garage_premium(
    garage_id: int,
    req: PremiumFlagRequest,
    db: AsyncSession = Depends(get_db),
):
    garage = await get_or_404(db, GarageProfile, garage_id, "Garage")
    garage.is_premium = req.is_premium
    await commit_or_not_found(db, GarageProfile, garage_id, "Garage")
    return PremiumStatusResponse(id=garage.id, is_premium=garage.is_premium)


@router.post("/{garage_id}/check-premium", response_model=PremiumStatusResponse)
async def check_garage_premium(garage_id: int, db: AsyncSession = Depends(get_db)):
    is_premium = await registration_service.sync_owner_premium(db, GARAGE_REGISTRATIONS, garage_id)
    return PremiumStatusResponse(id=garage_id, is_premium=is_premium)


@router.delete("/{garage_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_garage(garage_id: int, db: AsyncSession = Depends(get_db)):
    garage = await get_or_404(db, GarageProfile, garage_id, "Garage")
    await ensure_unreferenced(
        db,
        [
            (GaragePaymentMethod, GaragePaymentMethod.garage_id == garage_id),
            (GaragePaymentOrder, GaragePaymentOrder.garage_id == garage_id),
            (GaragePremiumRegistration, GaragePremiumRegistration.garage_id == garage_id),
            (VehicleAppointment, VehicleAppointment.garage_id == garage_id),
            (VehicleService, VehicleService.garage_id == garage_id),
        ],
        "Cannot delete garage as it has associated payment methods, orders, registrations, appointments or services",
    )
    await db.delete(garage)
    await db.flush()
