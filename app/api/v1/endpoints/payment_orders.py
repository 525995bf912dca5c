"""v1 payment order endpoints, one router per owner kind."""

import logging
from typing import List, Type

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.v1_dependencies import Principal, SettlementScheduler, get_settlement_scheduler, require_admin
from app.database import get_db
from app.schemas_v1 import (
    ClientOrderCreateRequest,
    ClientOrderResponse,
    GarageOrderCreateRequest,
    GarageOrderResponse,
    OrderStatusRequest,
    OrderSummaryResponse,
)
from app.services import order_service
from app.services.crud_service import find_where, get_or_404
from app.services.order_service import CLIENT_ORDERS, GARAGE_ORDERS, OrderFamily

logger = logging.getLogger(__name__)
settings = get_settings()


def build_router(
    family: OrderFamily,
    create_model: Type[BaseModel],
    response_model: Type[BaseModel],
) -> APIRouter:
    router = APIRouter()
    model = family.order_model
    owner_path = family.owner_label.lower()

    @router.get("", response_model=List[response_model])
    async def list_orders(db: AsyncSession = Depends(get_db)):
        return await find_where(db, model)

    @router.get("/recent", response_model=List[response_model])
    async def list_recent_orders(db: AsyncSession = Depends(get_db)):
        return await find_where(
            db, model, order_by=model.created_date.desc(), limit=settings.RECENT_ORDERS_LIMIT
        )

    @router.get("/status/{order_status}", response_model=List[response_model])
    async def list_orders_by_status(order_status: str, db: AsyncSession = Depends(get_db)):
        parsed = order_service.parse_status(order_status)
        return await find_where(db, model, model.status == parsed.value)

    @router.get("/payment-method/{method_id}", response_model=List[response_model])
    async def list_orders_by_method(method_id: int, db: AsyncSession = Depends(get_db)):
        return await find_where(db, model, model.payment_method_id == method_id)

    @router.get(f"/{owner_path}/{{owner_id}}", response_model=List[response_model])
    async def list_owner_orders(owner_id: int, db: AsyncSession = Depends(get_db)):
        await get_or_404(db, family.owner_model, owner_id, family.owner_label)
        return await find_where(
            db, model, family.owner_criterion(owner_id), order_by=model.created_date.desc()
        )

    @router.get(f"/{owner_path}/{{owner_id}}/summary", response_model=OrderSummaryResponse)
    async def get_owner_summary(owner_id: int, db: AsyncSession = Depends(get_db)):
        return OrderSummaryResponse(**await order_service.order_summary(db, family, owner_id))

    @router.get("/{order_id}", response_model=response_model)
    async def get_order(order_id: int, db: AsyncSession = Depends(get_db)):
        return await get_or_404(db, model, order_id, "Payment order")

    @router.post("", response_model=response_model, status_code=status.HTTP_201_CREATED)
    async def create_order(
        req: create_model,
        db: AsyncSession = Depends(get_db),
        schedule: SettlementScheduler = Depends(get_settlement_scheduler),
    ):
        order = await order_service.create_order(db, family, req.model_dump())
        # settlement must observe a durable Pending row
        await db.commit()
        try:
            schedule(family.kind, order.id)
        except Exception:
            # the order stays Pending and can still be settled by status update
            logger.exception("Could not schedule settlement of %s order %s", family.kind, order.id)
        return order

    @router.patch("/{order_id}/status", response_model=response_model)
    async def update_order_status(
        order_id: int,
        req: OrderStatusRequest,
        principal: Principal = Depends(require_admin),
        db: AsyncSession = Depends(get_db),
    ):
        order = await order_service.update_status_manually(db, family, order_id, req.status)
        logger.info("Order %s status set by %s", order_id, principal.subject)
        return order

    @router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_order(order_id: int, db: AsyncSession = Depends(get_db)):
        order = await get_or_404(db, model, order_id, "Payment order")
        await db.delete(order)
        await db.flush()

    return router


client_router = build_router(CLIENT_ORDERS, ClientOrderCreateRequest, ClientOrderResponse)
garage_router = build_router(GARAGE_ORDERS, GarageOrderCreateRequest, GarageOrderResponse)
