"""v1 payment method endpoints, one router per owner kind."""

from datetime import datetime
from typing import List, Type

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.core.security import mask_card_number
from app.core.v1_dependencies import Principal, require_admin
from app.database import get_db
from app.schemas_v1 import (
    ClientPaymentMethodCreateRequest,
    ClientPaymentMethodResponse,
    GaragePaymentMethodCreateRequest,
    GaragePaymentMethodResponse,
    PaymentMethodUpdateRequest,
)
from app.services import flag_service
from app.services.crud_service import (
    apply_updates,
    commit_or_not_found,
    ensure_path_matches,
    find_where,
    get_or_404,
)
from app.services.flag_service import CLIENT_PAYMENT_METHODS, GARAGE_PAYMENT_METHODS, FlaggedCollection


def _method_response(response_model: Type[BaseModel], method, unmask: bool = False) -> BaseModel:
    response = response_model.model_validate(method)
    if unmask:
        return response
    return response.model_copy(update={"card_number": mask_card_number(method.card_number)})


def build_router(
    collection: FlaggedCollection,
    create_model: Type[BaseModel],
    response_model: Type[BaseModel],
) -> APIRouter:
    router = APIRouter()
    model = collection.model
    owner_path = collection.owner_label.lower()

    @router.get("", response_model=List[response_model])
    async def list_methods(db: AsyncSession = Depends(get_db)):
        methods = await find_where(db, model)
        return [_method_response(response_model, m) for m in methods]

    @router.get(f"/{owner_path}/{{owner_id}}", response_model=List[response_model])
    async def list_owner_methods(owner_id: int, db: AsyncSession = Depends(get_db)):
        await flag_service.ensure_owner_exists(db, collection, owner_id)
        methods = await find_where(db, model, collection.owner_criterion(owner_id))
        return [_method_response(response_model, m) for m in methods]

    @router.get(f"/{owner_path}/{{owner_id}}/primary", response_model=response_model)
    async def get_owner_primary(owner_id: int, db: AsyncSession = Depends(get_db)):
        await flag_service.ensure_owner_exists(db, collection, owner_id)
        methods = await find_where(
            db, model, collection.owner_criterion(owner_id), model.is_primary == True, limit=1  # noqa: E712
        )
        if not methods:
            raise NotFoundError(f"No primary payment method found for this {owner_path}")
        return _method_response(response_model, methods[0])

    @router.get("/{method_id}", response_model=response_model)
    async def get_method(method_id: int, db: AsyncSession = Depends(get_db)):
        method = await get_or_404(db, model, method_id, collection.label)
        return _method_response(response_model, method)

    @router.get("/{method_id}/unmasked", response_model=response_model)
    async def get_method_unmasked(
        method_id: int,
        _: Principal = Depends(require_admin),
        db: AsyncSession = Depends(get_db),
    ):
        method = await get_or_404(db, model, method_id, collection.label)
        return _method_response(response_model, method, unmask=True)

    @router.post("", response_model=response_model, status_code=status.HTTP_201_CREATED)
    async def create_method(req: create_model, db: AsyncSession = Depends(get_db)):
        method = await flag_service.create_with_default_flag(db, collection, model(**req.model_dump()))
        return _method_response(response_model, method)

    @router.put("/{method_id}", response_model=response_model)
    async def update_method(
        method_id: int,
        req: PaymentMethodUpdateRequest,
        db: AsyncSession = Depends(get_db),
    ):
        ensure_path_matches(method_id, req.id)
        method = await get_or_404(db, model, method_id, collection.label)
        updates = req.model_dump(exclude_none=True, exclude={"id"})
        if updates and collection.modified_attr:
            updates[collection.modified_attr] = datetime.utcnow()
        apply_updates(method, updates)
        await commit_or_not_found(db, model, method_id, collection.label)
        await db.refresh(method)
        return _method_response(response_model, method)

    @router.patch("/{method_id}/set-primary", response_model=response_model)
    async def set_primary_method(method_id: int, db: AsyncSession = Depends(get_db)):
        method = await get_or_404(db, model, method_id, collection.label)
        promoted = await flag_service.promote(db, collection, collection.owner_id_of(method), method_id)
        await db.refresh(promoted)
        return _method_response(response_model, promoted)

    @router.delete("/{method_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_method(method_id: int, db: AsyncSession = Depends(get_db)):
        method = await get_or_404(db, model, method_id, collection.label)
        await flag_service.reassign_on_delete(db, collection, method)

    return router


client_router = build_router(CLIENT_PAYMENT_METHODS, ClientPaymentMethodCreateRequest, ClientPaymentMethodResponse)
garage_router = build_router(GARAGE_PAYMENT_METHODS, GaragePaymentMethodCreateRequest, GaragePaymentMethodResponse)
