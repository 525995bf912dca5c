"""Keeps a boolean primary/active marker unique within an owner's collection.

One ``FlaggedCollection`` describes each owner-scoped table (client payment
methods, garage payment methods, client and garage premium registrations).
The operations here lock the owner's rows before touching siblings, so two
promotions for the same owner are serialized by the database.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.models import (
    ClientPaymentMethod,
    ClientPremiumRegistration,
    ClientProfile,
    GaragePaymentMethod,
    GaragePremiumRegistration,
    GarageProfile,
)

logger = logging.getLogger(__name__)

# Creation policies
FLAG_FIRST_ROW = "first_row"
DEACTIVATE_SIBLINGS = "deactivate_siblings"
PLAIN_INSERT = "plain"


@dataclass(frozen=True)
class FlaggedCollection:
    model: Type[Any]
    owner_model: Type[Any]
    owner_column: str
    flag_attr: str
    label: str
    owner_label: str
    create_policy: str
    modified_attr: Optional[str] = None
    reassign_on_delete: bool = False

    def owner_id_of(self, row: Any) -> int:
        return getattr(row, self.owner_column)

    def owner_criterion(self, owner_id: int):
        return getattr(self.model, self.owner_column) == owner_id

    def flag_column(self):
        return getattr(self.model, self.flag_attr)


CLIENT_PAYMENT_METHODS = FlaggedCollection(
    model=ClientPaymentMethod,
    owner_model=ClientProfile,
    owner_column="client_id",
    flag_attr="is_primary",
    label="Payment method",
    owner_label="Client",
    create_policy=FLAG_FIRST_ROW,
    modified_attr="last_modified",
    reassign_on_delete=True,
)

GARAGE_PAYMENT_METHODS = FlaggedCollection(
    model=GaragePaymentMethod,
    owner_model=GarageProfile,
    owner_column="garage_id",
    flag_attr="is_primary",
    label="Payment method",
    owner_label="Garage",
    create_policy=FLAG_FIRST_ROW,
    modified_attr="last_modified",
    reassign_on_delete=True,
)

CLIENT_REGISTRATIONS = FlaggedCollection(
    model=ClientPremiumRegistration,
    owner_model=ClientProfile,
    owner_column="client_id",
    flag_attr="is_active",
    label="Premium registration",
    owner_label="Client",
    create_policy=PLAIN_INSERT,
)

GARAGE_REGISTRATIONS = FlaggedCollection(
    model=GaragePremiumRegistration,
    owner_model=GarageProfile,
    owner_column="garage_id",
    flag_attr="is_active",
    label="Premium registration",
    owner_label="Garage",
    create_policy=DEACTIVATE_SIBLINGS,
)


async def _lock_owner_rows(db: AsyncSession, collection: FlaggedCollection, owner_id: int) -> List[Any]:
    result = await db.execute(
        select(collection.model)
        .where(collection.owner_criterion(owner_id))
        .order_by(collection.model.id.asc())
        .with_for_update()
    )
    return list(result.scalars().all())


def _set_flag(collection: FlaggedCollection, row: Any, value: bool, now: datetime) -> None:
    setattr(row, collection.flag_attr, value)
    if collection.modified_attr:
        setattr(row, collection.modified_attr, now)


async def ensure_owner_exists(db: AsyncSession, collection: FlaggedCollection, owner_id: int) -> None:
    owner = await db.get(collection.owner_model, owner_id)
    if owner is None:
        raise NotFoundError(f"{collection.owner_label} not found")


async def promote(db: AsyncSession, collection: FlaggedCollection, owner_id: int, target_id: int) -> Any:
    """Set the flag on ``target_id`` and clear it on every other row of the owner."""
    rows = await _lock_owner_rows(db, collection, owner_id)
    target = next((row for row in rows if row.id == target_id), None)
    if target is None:
        raise NotFoundError(f"{collection.label} not found for this {collection.owner_label.lower()}")

    now = datetime.utcnow()
    for row in rows:
        if row.id != target_id and getattr(row, collection.flag_attr):
            _set_flag(collection, row, False, now)
    _set_flag(collection, target, True, now)
    await db.flush()

    logger.info(
        "Promoted %s %s for %s %s",
        collection.label.lower(),
        target_id,
        collection.owner_label.lower(),
        owner_id,
    )
    return target


async def create_with_default_flag(db: AsyncSession, collection: FlaggedCollection, row: Any) -> Any:
    """Insert ``row`` applying the collection's creation policy."""
    owner_id = collection.owner_id_of(row)
    await ensure_owner_exists(db, collection, owner_id)
    now = datetime.utcnow()

    if collection.create_policy == FLAG_FIRST_ROW:
        siblings = await _lock_owner_rows(db, collection, owner_id)
        setattr(row, collection.flag_attr, not siblings)
    elif collection.create_policy == DEACTIVATE_SIBLINGS:
        siblings = await _lock_owner_rows(db, collection, owner_id)
        for sibling in siblings:
            if getattr(sibling, collection.flag_attr):
                _set_flag(collection, sibling, False, now)

    if collection.modified_attr:
        setattr(row, collection.modified_attr, now)
    db.add(row)
    await db.flush()
    await db.refresh(row)
    return row


async def reassign_on_delete(db: AsyncSession, collection: FlaggedCollection, row: Any) -> Optional[Any]:
    """Delete ``row``; when it held the flag, hand it to the first remaining sibling."""
    owner_id = collection.owner_id_of(row)
    was_flagged = bool(getattr(row, collection.flag_attr))
    siblings = await _lock_owner_rows(db, collection, owner_id)

    await db.delete(row)
    await db.flush()

    if not (collection.reassign_on_delete and was_flagged):
        return None

    heir = next((sibling for sibling in siblings if sibling.id != row.id), None)
    if heir is None:
        return None

    _set_flag(collection, heir, True, datetime.utcnow())
    await db.flush()
    logger.info(
        "Reassigned primary %s to %s for %s %s",
        collection.label.lower(),
        heir.id,
        collection.owner_label.lower(),
        owner_id,
    )
    return heir


async def count_flagged(db: AsyncSession, collection: FlaggedCollection, owner_id: int) -> int:
    total = await db.scalar(
        select(func.count())
        .select_from(collection.model)
        .where(collection.owner_criterion(owner_id), collection.flag_column() == True)  # noqa: E712
    )
    return int(total or 0)
