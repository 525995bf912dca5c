"""v1 premium offer catalog endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_db
from app.models import ClientPaymentOrder, Currency, GaragePaymentOrder, PremiumOffer, UserType
from app.schemas_v1 import (
    PremiumOfferCreateRequest,
    PremiumOfferPopularityResponse,
    PremiumOfferPriceRequest,
    PremiumOfferResponse,
    PremiumOfferUpdateRequest,
)
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
settings = get_settings()

DUPLICATE_LABEL = "A premium offer with this description"


def _purchase_counts(order_model):
    return (
        select(order_model.premium_offer_id.label("offer_id"), func.count(order_model.id).label("purchases"))
        .group_by(order_model.premium_offer_id)
        .subquery()
    )


@router.get("", response_model=List[PremiumOfferResponse])
async def list_premium_offers(db: AsyncSession = Depends(get_db)):
    return await find_where(db, PremiumOffer)


@router.get("/active", response_model=List[PremiumOfferResponse])
async def list_purchased_offers(db: AsyncSession = Depends(get_db)):
    """Offers bought at least once by a client or a garage, cheapest first."""
    return await find_where(
        db,
        PremiumOffer,
        or_(
            PremiumOffer.id.in_(select(ClientPaymentOrder.premium_offer_id)),
            PremiumOffer.id.in_(select(GaragePaymentOrder.premium_offer_id)),
        ),
        order_by=PremiumOffer.premium_cost.asc(),
    )


@router.get("/popular", response_model=List[PremiumOfferPopularityResponse])
async def list_popular_offers(db: AsyncSession = Depends(get_db)):
    client_counts = _purchase_counts(ClientPaymentOrder)
    garage_counts = _purchase_counts(GaragePaymentOrder)
    client_n = func.coalesce(client_counts.c.purchases, 0)
    garage_n = func.coalesce(garage_counts.c.purchases, 0)

    result = await db.execute(
        select(PremiumOffer, client_n, garage_n)
        .outerjoin(client_counts, client_counts.c.offer_id == PremiumOffer.id)
        .outerjoin(garage_counts, garage_counts.c.offer_id == PremiumOffer.id)
        .order_by((client_n + garage_n).desc(), PremiumOffer.id.asc())
        .limit(settings.POPULAR_OFFERS_LIMIT)
    )
    return [
        PremiumOfferPopularityResponse(
            id=offer.id,
            user_type_id=offer.user_type_id,
            premium_desc=offer.premium_desc,
            premium_cost=offer.premium_cost,
            curr_id=offer.curr_id,
            client_purchases=int(client_purchases),
            garage_purchases=int(garage_purchases),
            total_purchases=int(client_purchases) + int(garage_purchases),
        )
        for offer, client_purchases, garage_purchases in result.all()
    ]


@router.get("/user-type/{user_type_id}", response_model=List[PremiumOfferResponse])
async def list_offers_by_user_type(user_type_id: int, db: AsyncSession = Depends(get_db)):
    return await find_where(db, PremiumOffer, PremiumOffer.user_type_id == user_type_id)


@router.get("/currency/{currency_id}", response_model=List[PremiumOfferResponse])
async def list_offers_by_currency(currency_id: int, db: AsyncSession = Depends(get_db)):
    return await find_where(db, PremiumOffer, PremiumOffer.curr_id == currency_id)


@router.get("/{offer_id}", response_model=PremiumOfferResponse)
async def get_premium_offer(offer_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, PremiumOffer, offer_id, "Premium offer")


@router.post("", response_model=PremiumOfferResponse, status_code=status.HTTP_201_CREATED)
async def create_premium_offer(req: PremiumOfferCreateRequest, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, UserType, req.user_type_id, "User type")
    await get_or_404(db, Currency, req.curr_id, "Currency")
    await ensure_unique(db, PremiumOffer, PremiumOffer.premium_desc, req.premium_desc, DUPLICATE_LABEL)

    offer = PremiumOffer(**req.model_dump())
    db.add(offer)
    await db.flush()
    await db.refresh(offer)
    return offer


@router.put("/{offer_id}", response_model=PremiumOfferResponse)
async def update_premium_offer(
    offer_id: int,
    req: PremiumOfferUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    ensure_path_matches(offer_id, req.id)
    offer = await get_or_404(db, PremiumOffer, offer_id, "Premium offer")
    updates = req.model_dump(exclude_none=True, exclude={"id"})
    if "user_type_id" in updates:
        await get_or_404(db, UserType, updates["user_type_id"], "User type")
    if "curr_id" in updates:
        await get_or_404(db, Currency, updates["curr_id"], "Currency")
    if "premium_desc" in updates:
        await ensure_unique(
            db, PremiumOffer, PremiumOffer.premium_desc, updates["premium_desc"], DUPLICATE_LABEL, exclude_id=offer_id
        )

    apply_updates(offer, updates)
    await commit_or_not_found(db, PremiumOffer, offer_id, "Premium offer")
    await db.refresh(offer)
    return offer


@router.patch("/{offer_id}/price", response_model=PremiumOfferResponse)
async def update_premium_offer_price(
    offer_id: int,
    req: PremiumOfferPriceRequest,
    db: AsyncSession = Depends(get_db),
):
    offer = await get_or_404(db, PremiumOffer, offer_id, "Premium offer")
    offer.premium_cost = req.premium_cost
    await commit_or_not_found(db, PremiumOffer, offer_id, "Premium offer")
    await db.refresh(offer)
    return offer


@router.delete("/{offer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_premium_offer(offer_id: int, db: AsyncSession = Depends(get_db)):
    offer = await get_or_404(db, PremiumOffer, offer_id, "Premium offer")
    await ensure_unreferenced(
        db,
        [
            (ClientPaymentOrder, ClientPaymentOrder.premium_offer_id == offer_id),
            (GaragePaymentOrder, GaragePaymentOrder.premium_offer_id == offer_id),
        ],
        "Cannot delete premium offer as it is being used by payment orders",
    )
    await db.delete(offer)
    await db.flush()
