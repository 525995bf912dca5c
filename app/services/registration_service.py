"""Premium registration lifecycle on top of the flag service."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidInputError
from app.services import flag_service
from app.services.crud_service import get_or_404
from app.services.flag_service import FlaggedCollection

logger = logging.getLogger(__name__)


def naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


async def create_registration(db: AsyncSession, collection: FlaggedCollection, data: Dict[str, Any]) -> Any:
    values = dict(data)
    for field in ("register_date", "expiry_date"):
        values[field] = naive_utc(values.get(field))
    if values.get("register_date") is None:
        values["register_date"] = datetime.utcnow()
    if values.get("is_active") is None:
        values["is_active"] = True
    return await flag_service.create_with_default_flag(db, collection, collection.model(**values))


async def activate_registration(db: AsyncSession, collection: FlaggedCollection, registration_id: int) -> Any:
    registration = await get_or_404(db, collection.model, registration_id, collection.label)
    return await flag_service.promote(db, collection, collection.owner_id_of(registration), registration_id)


async def extend_registration(
    db: AsyncSession,
    collection: FlaggedCollection,
    registration_id: int,
    months: int,
) -> Any:
    """Push expiry forward by ``months`` from whichever is later: current expiry or now."""
    if months < 1:
        raise InvalidInputError("Months must be at least 1")
    registration = await get_or_404(db, collection.model, registration_id, collection.label)

    now = datetime.utcnow()
    base = registration.expiry_date if registration.expiry_date and registration.expiry_date > now else now
    registration.expiry_date = base + relativedelta(months=months)
    await db.flush()
    await db.refresh(registration)

    logger.info(
        "Extended %s registration %s by %s month(s) to %s",
        collection.owner_label.lower(),
        registration_id,
        months,
        registration.expiry_date,
    )
    return registration


async def list_current(db: AsyncSession, collection: FlaggedCollection) -> List[Any]:
    model = collection.model
    result = await db.execute(
        select(model)
        .where(model.is_active == True, model.expiry_date >= datetime.utcnow())  # noqa: E712
        .order_by(model.id.asc())
    )
    return list(result.scalars().all())


async def sync_owner_premium(db: AsyncSession, collection: FlaggedCollection, owner_id: int) -> bool:
    """Recompute the owner's ``is_premium`` from its active, unexpired registrations."""
    owner = await get_or_404(db, collection.owner_model, owner_id, collection.owner_label)
    model = collection.model
    current = await db.scalar(
        select(model.id)
        .where(
            collection.owner_criterion(owner_id),
            model.is_active == True,  # noqa: E712
            model.expiry_date >= datetime.utcnow(),
        )
        .limit(1)
    )
    owner.is_premium = current is not None
    await db.flush()
    return owner.is_premium
