"""v1 premium registration endpoints, one router per owner kind."""

from typing import List, Type

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas_v1 import (
    ClientRegistrationCreateRequest,
    ClientRegistrationResponse,
    GarageRegistrationCreateRequest,
    GarageRegistrationResponse,
    RegistrationExtendRequest,
    RegistrationUpdateRequest,
)
from app.services import flag_service, registration_service
from app.services.crud_service import apply_updates, commit_or_not_found, ensure_path_matches, find_where, get_or_404
from app.services.flag_service import CLIENT_REGISTRATIONS, GARAGE_REGISTRATIONS, FlaggedCollection


def build_router(
    collection: FlaggedCollection,
    create_model: Type[BaseModel],
    response_model: Type[BaseModel],
) -> APIRouter:
    router = APIRouter()
    model = collection.model
    owner_path = collection.owner_label.lower()

    @router.get("", response_model=List[response_model])
    async def list_registrations(db: AsyncSession = Depends(get_db)):
        return await find_where(db, model)

    @router.get("/current", response_model=List[response_model])
    async def list_current_registrations(db: AsyncSession = Depends(get_db)):
        return await registration_service.list_current(db, collection)

    @router.get(f"/{owner_path}/{{owner_id}}", response_model=List[response_model])
    async def list_owner_registrations(owner_id: int, db: AsyncSession = Depends(get_db)):
        await flag_service.ensure_owner_exists(db, collection, owner_id)
        return await find_where(
            db, model, collection.owner_criterion(owner_id), order_by=model.register_date.desc()
        )

    @router.get("/{registration_id}", response_model=response_model)
    async def get_registration(registration_id: int, db: AsyncSession = Depends(get_db)):
        return await get_or_404(db, model, registration_id, collection.label)

    @router.post("", response_model=response_model, status_code=status.HTTP_201_CREATED)
    async def create_registration(req: create_model, db: AsyncSession = Depends(get_db)):
        return await registration_service.create_registration(db, collection, req.model_dump())

    @router.put("/{registration_id}", response_model=response_model)
    async def update_registration(
        registration_id: int,
        req: RegistrationUpdateRequest,
        db: AsyncSession = Depends(get_db),
    ):
        ensure_path_matches(registration_id, req.id)
        registration = await get_or_404(db, model, registration_id, collection.label)
        updates = req.model_dump(exclude_none=True, exclude={"id"})
        apply_updates(registration, {k: registration_service.naive_utc(v) for k, v in updates.items()})
        await commit_or_not_found(db, model, registration_id, collection.label)
        await db.refresh(registration)
        return registration

    @router.patch("/{registration_id}/activate", response_model=response_model)
    async def activate_registration(registration_id: int, db: AsyncSession = Depends(get_db)):
        registration = await registration_service.activate_registration(db, collection, registration_id)
        await db.refresh(registration)
        return registration

    @router.patch("/{registration_id}/extend", response_model=response_model)
    async def extend_registration(
        registration_id: int,
        req: RegistrationExtendRequest,
        db: AsyncSession = Depends(get_db),
    ):
        return await registration_service.extend_registration(db, collection, registration_id, req.months)

    @router.delete("/{registration_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_registration(registration_id: int, db: AsyncSession = Depends(get_db)):
        registration = await get_or_404(db, model, registration_id, collection.label)
        await db.delete(registration)
        await db.flush()

    return router


client_router = build_router(CLIENT_REGISTRATIONS, ClientRegistrationCreateRequest, ClientRegistrationResponse)
garage_router = build_router(GARAGE_REGISTRATIONS, GarageRegistrationCreateRequest, GarageRegistrationResponse)
