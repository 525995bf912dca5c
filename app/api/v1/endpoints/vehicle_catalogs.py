"""v1 vehicle catalog endpoints: fuel types, manufacturers, vehicle types and measure units."""

from typing import Any, Callable, List, Optional, Sequence, Tuple, Type

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import FuelType, Manufacturer, MeasureUnit, ServiceTypeSetup, Vehicle, VehicleType
from app.schemas_v1 import CatalogItemRequest, CatalogItemResponse
from app.services.crud_service import (
    commit_or_not_found,
    ensure_path_matches,
    ensure_unique,
    ensure_unreferenced,
    find_where,
    get_or_404,
)

UsageChecks = Callable[[int], Sequence[Tuple[Type[Any], Any]]]


def build_router(
    model: Type[Any],
    field: str,
    label: str,
    usage_checks: UsageChecks,
    in_use_message: str,
    duplicate_label: Optional[str] = None,
) -> APIRouter:
    """CRUD over a single-description catalog table stored in ``field``."""
    router = APIRouter()
    column = getattr(model, field)

    def _item(row) -> CatalogItemResponse:
        return CatalogItemResponse(id=row.id, description=getattr(row, field))

    async def _check_unique(db: AsyncSession, value: str, exclude_id: Optional[int] = None) -> None:
        if duplicate_label:
            await ensure_unique(db, model, column, value, duplicate_label, exclude_id=exclude_id)

    @router.get("", response_model=List[CatalogItemResponse])
    async def list_items(db: AsyncSession = Depends(get_db)):
        return [_item(row) for row in await find_where(db, model)]

    @router.get("/search", response_model=List[CatalogItemResponse])
    async def search_items(term: str = Query(..., min_length=1), db: AsyncSession = Depends(get_db)):
        rows = await find_where(db, model, func.lower(column).like(f"%{term.lower()}%"))
        return [_item(row) for row in rows]

    @router.get("/{item_id}", response_model=CatalogItemResponse)
    async def get_item(item_id: int, db: AsyncSession = Depends(get_db)):
        return _item(await get_or_404(db, model, item_id, label))

    @router.post("", response_model=CatalogItemResponse, status_code=status.HTTP_201_CREATED)
    async def create_item(req: CatalogItemRequest, db: AsyncSession = Depends(get_db)):
        await _check_unique(db, req.description)
        row = model(**{field: req.description})
        db.add(row)
        await db.flush()
        await db.refresh(row)
        return _item(row)

    @router.put("/{item_id}", response_model=CatalogItemResponse)
    async def update_item(item_id: int, req: CatalogItemRequest, db: AsyncSession = Depends(get_db)):
        ensure_path_matches(item_id, req.id)
        row = await get_or_404(db, model, item_id, label)
        await _check_unique(db, req.description, exclude_id=item_id)
        setattr(row, field, req.description)
        await commit_or_not_found(db, model, item_id, label)
        await db.refresh(row)
        return _item(row)

    @router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_item(item_id: int, db: AsyncSession = Depends(get_db)):
        row = await get_or_404(db, model, item_id, label)
        await ensure_unreferenced(db, usage_checks(item_id), in_use_message)
        await db.delete(row)
        await db.flush()

    return router


fuel_types_router = build_router(
    FuelType,
    "fuel_type_desc",
    "Fuel type",
    lambda item_id: [(Vehicle, Vehicle.fuel_type_id == item_id)],
    "Cannot delete fuel type as it is being used by vehicles",
    duplicate_label="A fuel type with this description",
)

manufacturers_router = build_router(
    Manufacturer,
    "manufacturer_desc",
    "Manufacturer",
    lambda item_id: [(Vehicle, Vehicle.manufacturer_id == item_id)],
    "Cannot delete manufacturer as it is being used by vehicles",
    duplicate_label="A manufacturer with this description",
)

# vehicle type descriptions may repeat
vehicle_types_router = build_router(
    VehicleType,
    "vehicle_type_desc",
    "Vehicle type",
    lambda item_id: [(Vehicle, Vehicle.vehicle_type_id == item_id)],
    "Cannot delete vehicle type because it has associated vehicles.",
)

measure_units_router = build_router(
    MeasureUnit,
    "measure_unit_desc",
    "Measurement unit",
    lambda item_id: [
        (ServiceTypeSetup, ServiceTypeSetup.measure_unit_id == item_id),
        (Vehicle, Vehicle.measure_unit_id == item_id),
    ],
    "Cannot delete measurement unit as it is being used by services or vehicles",
    duplicate_label="A measurement unit with this description",
)
