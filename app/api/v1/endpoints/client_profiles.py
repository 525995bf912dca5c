"""v1 client profile endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.database import get_db
from app.models import (
    ClientNotification,
    ClientPaymentMethod,
    ClientPaymentOrder,
    ClientPremiumRegistration,
    ClientProfile,
    ClientReminder,
    Country,
    Vehicle,
)
from app.schemas_v1 import (
    ClientProfileCreateRequest,
    ClientProfileResponse,
    ClientProfileUpdateRequest,
    PremiumFlagRequest,
    PremiumStatusResponse,
)
from app.services import registration_service
from app.services.crud_service import (
    apply_updates,
    commit_or_not_found,
    ensure_path_matches,
    ensure_unreferenced,
    find_where,
    get_or_404,
)
from app.services.flag_service import CLIENT_REGISTRATIONS

router = APIRouter()


@router.get("", response_model=List[ClientProfileResponse])
async def list_clients(db: AsyncSession = Depends(get_db)):
    return await find_where(db, ClientProfile)


@router.get("/premium", response_model=List[ClientProfileResponse])
async def list_premium_clients(db: AsyncSession = Depends(get_db)):
    return await find_where(db, ClientProfile, ClientProfile.is_premium == True)  # noqa: E712


@router.get("/search", response_model=List[ClientProfileResponse])
async def search_clients(
    name: Optional[str] = Query(default=None, min_length=1),
    country_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
):
    criteria = []
    if name:
        pattern = f"%{name.lower()}%"
        criteria.append(
            func.lower(ClientProfile.first_name).like(pattern) | func.lower(ClientProfile.last_name).like(pattern)
        )
    if country_id is not None:
        criteria.append(ClientProfile.country_id == country_id)
    return await find_where(db, ClientProfile, *criteria)


@router.get("/by-email", response_model=ClientProfileResponse)
async def get_client_by_email(email: str = Query(..., min_length=3), db: AsyncSession = Depends(get_db)):
    clients = await find_where(db, ClientProfile, func.lower(ClientProfile.email) == email.lower(), limit=1)
    if not clients:
        raise NotFoundError("Client not found")
    return clients[0]


@router.get("/{client_id}", response_model=ClientProfileResponse)
async def get_client(client_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, ClientProfile, client_id, "Client")


@router.post("", response_model=ClientProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_client(req: ClientProfileCreateRequest, db: AsyncSession = Depends(get_db)):
    if req.country_id is not None:
        await get_or_404(db, Country, req.country_id, "Country")
    client = ClientProfile(**req.model_dump())
    db.add(client)
    await db.flush()
    await db.refresh(client)
    return client


@router.put("/{client_id}", response_model=ClientProfileResponse)
async def update_client(
    client_id: int,
    req: ClientProfileUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    ensure_path_matches(client_id, req.id)
    client = await get_or_404(db, ClientProfile, client_id, "Client")
    updates = req.model_dump(exclude_none=True, exclude={"id"})
    if "country_id" in updates:
        await get_or_404(db, Country, updates["country_id"], "Country")
    apply_updates(client, updates)
    await commit_or_not_found(db, ClientProfile, client_id, "Client")
    await db.refresh(client)
    return client


@router.patch("/{client_id}/premium", response_model=PremiumStatusResponse)
async def set_client_premium(
    client_id: int,
    req: PremiumFlagRequest,
    db: AsyncSession = Depends(get_db),
):
    client = await get_or_404(db, ClientProfile, client_id, "Client")
    client.is_premium = req.is_premium
    await commit_or_not_found(db, ClientProfile, client_id, "Client")
    return PremiumStatusResponse(id=client.id, is_premium=client.is_premium)


@router.post("/{client_id}/check-premium", response_model=PremiumStatusResponse)
async def check_client_premium(client_id: int, db: AsyncSession = Depends(get_db)):
    is_premium = await registration_service.sync_owner_premium(db, CLIENT_REGISTRATIONS, client_id)
    return PremiumStatusResponse(id=client_id, is_premium=is_premium)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(client_id: int, db: AsyncSession = Depends(get_db)):
    client = await get_or_404(db, ClientProfile, client_id, "Client")
    await ensure_unreferenced(
        db,
        [
            (ClientPaymentMethod, ClientPaymentMethod.client_id == client_id),
            (ClientPaymentOrder, ClientPaymentOrder.client_id == client_id),
            (ClientPremiumRegistration, ClientPremiumRegistration.client_id == client_id),
            (ClientNotification, ClientNotification.client_id == client_id),
            (ClientReminder, ClientReminder.client_id == client_id),
            (Vehicle, Vehicle.client_id == client_id),
        ],
        "Cannot delete client as it has associated payment methods, orders, registrations, "
        "notifications, reminders or vehicles",
    )
    await db.delete(client)
    await db.flush()
