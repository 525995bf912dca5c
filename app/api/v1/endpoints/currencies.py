"""v1 currency catalog endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import ClientPaymentOrder, Currency, GaragePaymentOrder, PremiumOffer, VehicleServiceLine
from app.schemas_v1 import CurrencyCreateRequest, CurrencyResponse, CurrencyUpdateRequest
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

DUPLICATE_LABEL = "A currency with this description"


@router.get("", response_model=List[CurrencyResponse])
async def list_currencies(db: AsyncSession = Depends(get_db)):
    return await find_where(db, Currency)


@router.get("/{currency_id}", response_model=CurrencyResponse)
async def get_currency(currency_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Currency, currency_id, "Currency")


@router.post("", response_model=CurrencyResponse, status_code=status.HTTP_201_CREATED)
async def create_currency(req: CurrencyCreateRequest, db: AsyncSession = Depends(get_db)):
    await ensure_unique(db, Currency, Currency.curr_desc, req.curr_desc, DUPLICATE_LABEL)
    currency = Currency(curr_desc=req.curr_desc)
    db.add(currency)
    await db.flush()
    await db.refresh(currency)
    return currency


@router.put("/{currency_id}", response_model=CurrencyResponse)
async def update_currency(
    currency_id: int,
    req: CurrencyUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    ensure_path_matches(currency_id, req.id)
    currency = await get_or_404(db, Currency, currency_id, "Currency")
    if req.curr_desc is not None:
        await ensure_unique(
            db, Currency, Currency.curr_desc, req.curr_desc, DUPLICATE_LABEL, exclude_id=currency_id
        )
    apply_updates(currency, req.model_dump(exclude_none=True, exclude={"id"}))
    await commit_or_not_found(db, Currency, currency_id, "Currency")
    await db.refresh(currency)
    return currency


@router.delete("/{currency_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_currency(currency_id: int, db: AsyncSession = Depends(get_db)):
    currency = await get_or_404(db, Currency, currency_id, "Currency")
    await ensure_unreferenced(
        db,
        [
            (ClientPaymentOrder, ClientPaymentOrder.curr_id == currency_id),
            (GaragePaymentOrder, GaragePaymentOrder.curr_id == currency_id),
            (PremiumOffer, PremiumOffer.curr_id == currency_id),
            (VehicleServiceLine, VehicleServiceLine.curr_id == currency_id),
        ],
        "Cannot delete currency as it is being used in payment orders, premium offers, or service types",
    )
    await db.delete(currency)
    await db.flush()
