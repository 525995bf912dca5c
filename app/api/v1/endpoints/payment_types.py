"""v1 payment type catalog endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import PaymentType
from app.schemas_v1 import PaymentTypeCreateRequest, PaymentTypeResponse, PaymentTypeUpdateRequest
from app.services.crud_service import apply_updates, commit_or_not_found, ensure_path_matches, find_where, get_or_404

router = APIRouter()


@router.get("", response_model=List[PaymentTypeResponse])
async def list_payment_types(db: AsyncSession = Depends(get_db)):
    return await find_where(db, PaymentType)


@router.get("/{payment_type_id}", response_model=PaymentTypeResponse)
async def get_payment_type(payment_type_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, PaymentType, payment_type_id, "Payment type")


@router.post("", response_model=PaymentTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_payment_type(req: PaymentTypeCreateRequest, db: AsyncSession = Depends(get_db)):
    payment_type = PaymentType(payment_type_desc=req.payment_type_desc.strip())
    db.add(payment_type)
    await db.flush()
    await db.refresh(payment_type)
    return payment_type


@router.put("/{payment_type_id}", response_model=PaymentTypeResponse)
async def update_payment_type(
    payment_type_id: int,
    req: PaymentTypeUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    ensure_path_matches(payment_type_id, req.id)
    payment_type = await get_or_404(db, PaymentType, payment_type_id, "Payment type")
    apply_updates(payment_type, req.model_dump(exclude_none=True, exclude={"id"}))
    await commit_or_not_found(db, PaymentType, payment_type_id, "Payment type")
    await db.refresh(payment_type)
    return payment_type


@router.delete("/{payment_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment_type(payment_type_id: int, db: AsyncSession = Depends(get_db)):
    payment_type = await get_or_404(db, PaymentType, payment_type_id, "Payment type")
    await db.delete(payment_type)
    await db.flush()
