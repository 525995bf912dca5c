"""v1 user type catalog endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import PremiumOffer, UserType
from app.schemas_v1 import UserTypeCreateRequest, UserTypeResponse, UserTypeUpdateRequest
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

DUPLICATE_LABEL = "A user type with this description"


@router.get("", response_model=List[UserTypeResponse])
async def list_user_types(db: AsyncSession = Depends(get_db)):
    return await find_where(db, UserType)


@router.get("/{user_type_id}", response_model=UserTypeResponse)
async def get_user_type(user_type_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, UserType, user_type_id, "User type")


@router.post("", response_model=UserTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_user_type(req: UserTypeCreateRequest, db: AsyncSession = Depends(get_db)):
    await ensure_unique(db, UserType, UserType.user_type_desc, req.user_type_desc, DUPLICATE_LABEL)
    user_type = UserType(user_type_desc=req.user_type_desc)
    db.add(user_type)
    await db.flush()
    await db.refresh(user_type)
    return user_type


@router.put("/{user_type_id}", response_model=UserTypeResponse)
async def update_user_type(
    user_type_id: int,
    req: UserTypeUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    ensure_path_matches(user_type_id, req.id)
    user_type = await get_or_404(db, UserType, user_type_id, "User type")
    updates = req.model_dump(exclude_none=True, exclude={"id"})
    if "user_type_desc" in updates:
        await ensure_unique(
            db, UserType, UserType.user_type_desc, updates["user_type_desc"], DUPLICATE_LABEL, exclude_id=user_type_id
        )
    apply_updates(user_type, updates)
    await commit_or_not_found(db, UserType, user_type_id, "User type")
    await db.refresh(user_type)
    return user_type


@router.delete("/{user_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_type(user_type_id: int, db: AsyncSession = Depends(get_db)):
    user_type = await get_or_404(db, UserType, user_type_id, "User type")
    await ensure_unreferenced(
        db,
        [(PremiumOffer, PremiumOffer.user_type_id == user_type_id)],
        "Cannot delete user type as it is being used by premium offers",
    )
    await db.delete(user_type)
    await db.flush()
