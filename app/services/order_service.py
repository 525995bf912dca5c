"""Payment-order lifecycle: creation, delayed settlement and manual overrides."""

import logging
import secrets
import string
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.models import (
    ClientPaymentMethod,
    ClientPaymentOrder,
    ClientProfile,
    Currency,
    GaragePaymentMethod,
    GaragePaymentOrder,
    GarageProfile,
    OrderStatus,
    PremiumOffer,
)

logger = logging.getLogger(__name__)
settings = get_settings()

ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits
ORDER_NUMBER_SUFFIX_LENGTH = 8


@dataclass(frozen=True)
class OrderFamily:
    kind: str
    order_model: Type[Any]
    method_model: Type[Any]
    owner_model: Type[Any]
    owner_column: str
    owner_label: str
    prefix: str

    def owner_criterion(self, owner_id: int):
        return getattr(self.order_model, self.owner_column) == owner_id


CLIENT_ORDERS = OrderFamily(
    kind="client",
    order_model=ClientPaymentOrder,
    method_model=ClientPaymentMethod,
    owner_model=ClientProfile,
    owner_column="client_id",
    owner_label="Client",
    prefix="ORD",
)

GARAGE_ORDERS = OrderFamily(
    kind="garage",
    order_model=GaragePaymentOrder,
    method_model=GaragePaymentMethod,
    owner_model=GarageProfile,
    owner_column="garage_id",
    owner_label="Garage",
    prefix="GPO",
)

ORDER_FAMILIES: Dict[str, OrderFamily] = {f.kind: f for f in (CLIENT_ORDERS, GARAGE_ORDERS)}


def get_family(kind: str) -> OrderFamily:
    try:
        return ORDER_FAMILIES[kind]
    except KeyError:
        raise InvalidInputError(f"Unknown order kind: {kind}")


def generate_order_number(prefix: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.utcnow()
    suffix = "".join(secrets.choice(ORDER_NUMBER_ALPHABET) for _ in range(ORDER_NUMBER_SUFFIX_LENGTH))
    return f"{prefix}-{now:%Y%m%d}-{suffix}"


def parse_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise InvalidInputError(f"Invalid status '{value}'. Allowed values: {allowed}")


async def _require(db: AsyncSession, model: Type[Any], obj_id: int, label: str) -> Any:
    obj = await db.get(model, obj_id)
    if obj is None:
        raise NotFoundError(f"{label} not found")
    return obj


async def _unique_order_number(db: AsyncSession, family: OrderFamily) -> str:
    for _ in range(max(1, settings.ORDER_NUMBER_MAX_ATTEMPTS)):
        candidate = generate_order_number(family.prefix)
        taken = await db.scalar(
            select(family.order_model.id).where(family.order_model.order_number == candidate)
        )
        if taken is None:
            return candidate
    raise ConflictError("Could not generate a unique order number", error_code="DuplicateOrderNumber")


async def create_order(db: AsyncSession, family: OrderFamily, data: Dict[str, Any]) -> Any:
    """Persist a Pending order. The caller commits, then schedules settlement."""
    owner_id = data[family.owner_column]
    await _require(db, family.owner_model, owner_id, family.owner_label)
    await _require(db, Currency, data["curr_id"], "Currency")
    await _require(db, PremiumOffer, data["premium_offer_id"], "Premium offer")
    method = await _require(db, family.method_model, data["payment_method_id"], "Payment method")
    if getattr(method, family.owner_column) != owner_id:
        raise InvalidInputError(
            f"Payment method does not belong to this {family.owner_label.lower()}",
            error_code="MethodOwnerMismatch",
        )

    order = family.order_model(
        order_number=await _unique_order_number(db, family),
        amount=data["amount"],
        curr_id=data["curr_id"],
        payment_method_id=data["payment_method_id"],
        premium_offer_id=data["premium_offer_id"],
        status=OrderStatus.PENDING.value,
        created_date=datetime.utcnow(),
        processed_date=None,
    )
    setattr(order, family.owner_column, owner_id)
    db.add(order)
    await db.flush()
    await db.refresh(order)
    logger.info("Created %s order %s (%s)", family.kind, order.id, order.order_number)
    return order


async def settle_order(db: AsyncSession, family: OrderFamily, order_id: int) -> Optional[OrderStatus]:
    """Move a Pending order to its terminal state; anything else is a no-op."""
    result = await db.execute(
        select(family.order_model).where(family.order_model.id == order_id).with_for_update()
    )
    order = result.scalar_one_or_none()
    if order is None:
        logger.info("Settlement skipped: %s order %s no longer exists", family.kind, order_id)
        return None
    if order.status != OrderStatus.PENDING.value:
        logger.info("Settlement skipped: %s order %s is %s", family.kind, order_id, order.status)
        return None

    method = await db.get(family.method_model, order.payment_method_id)
    if method is None:
        order.status = OrderStatus.FAILED_INVALID_METHOD.value
    else:
        order.status = OrderStatus.PROCESSED.value
        order.processed_date = datetime.utcnow()
    await db.flush()

    logger.info("Settled %s order %s as %s", family.kind, order_id, order.status)
    return OrderStatus(order.status)


async def _mark_failed(session_factory: Callable[[], AsyncSession], family: OrderFamily, order_id: int) -> None:
    async with session_factory() as db:
        order = await db.get(family.order_model, order_id)
        if order is not None and order.status == OrderStatus.PENDING.value:
            order.status = OrderStatus.FAILED.value
            await db.commit()


async def run_settlement(
    session_factory: Callable[[], AsyncSession],
    family: OrderFamily,
    order_id: int,
) -> Optional[OrderStatus]:
    """Unit of work for the worker. Failures end in the Failed status, never raise."""
    try:
        async with session_factory() as db:
            outcome = await settle_order(db, family, order_id)
            await db.commit()
            return outcome
    except SQLAlchemyError:
        logger.exception("Settlement of %s order %s failed", family.kind, order_id)

    try:
        await _mark_failed(session_factory, family, order_id)
    except SQLAlchemyError:
        logger.exception("Could not mark %s order %s as failed", family.kind, order_id)
        return None
    return OrderStatus.FAILED


async def update_status_manually(db: AsyncSession, family: OrderFamily, order_id: int, status: str) -> Any:
    new_status = parse_status(status)
    order = await _require(db, family.order_model, order_id, "Payment order")

    previous = order.status
    order.status = new_status.value
    if new_status == OrderStatus.PROCESSED:
        order.processed_date = datetime.utcnow()
    await db.flush()
    await db.refresh(order)

    logger.info(
        "Manual status override on %s order %s: %s -> %s",
        family.kind,
        order_id,
        previous,
        new_status.value,
    )
    return order


async def order_summary(db: AsyncSession, family: OrderFamily, owner_id: int) -> Dict[str, Any]:
    await _require(db, family.owner_model, owner_id, family.owner_label)
    model = family.order_model
    total_orders, total_amount, last_payment = (
        await db.execute(
            select(
                func.count(model.id),
                func.coalesce(func.sum(model.amount), 0),
                func.max(model.created_date),
            ).where(family.owner_criterion(owner_id))
        )
    ).one()
    return {
        "total_orders": int(total_orders or 0),
        "total_amount": float(total_amount or 0),
        "last_payment": last_payment,
    }
