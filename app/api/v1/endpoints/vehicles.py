"""v1 vehicle endpoints."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidInputError, NotFoundError
from app.database import get_db
from app.models import (
    ClientProfile,
    FuelType,
    Manufacturer,
    MeasureUnit,
    Vehicle,
    VehicleAppointment,
    VehicleService,
    VehicleType,
)
from app.schemas_v1 import (
    CountResponse,
    OdometerRequest,
    VehicleCreateRequest,
    VehicleResponse,
    VehicleStatusRequest,
    VehicleUpdateRequest,
)
from app.services.crud_service import (
    apply_updates,
    commit_or_not_found,
    ensure_path_matches,
    ensure_unique,
    ensure_unreferenced,
    exists_where,
    find_where,
    get_or_404,
)

router = APIRouter()

PLATE_LABEL = "A vehicle with this license plate"
CHASSIS_LABEL = "A vehicle with this chassis number"

RELATED = (
    ("client_id", ClientProfile),
    ("fuel_type_id", FuelType),
    ("manufacturer_id", Manufacturer),
    ("measure_unit_id", MeasureUnit),
    ("vehicle_type_id", VehicleType),
)


async def _ensure_related(db: AsyncSession, fields: Dict[str, Any]) -> None:
    for field, model in RELATED:
        if field in fields and not await exists_where(db, model, model.id == fields[field]):
            raise InvalidInputError("Invalid related entity ID(s)")


async def _ensure_identifiers_unique(db: AsyncSession, fields: Dict[str, Any], exclude_id=None) -> None:
    await ensure_unique(
        db, Vehicle, Vehicle.license_plate, fields.get("license_plate"), PLATE_LABEL, exclude_id=exclude_id
    )
    await ensure_unique(
        db, Vehicle, Vehicle.chassis_number, fields.get("chassis_number"), CHASSIS_LABEL, exclude_id=exclude_id
    )


@router.get("", response_model=List[VehicleResponse])
async def list_vehicles(db: AsyncSession = Depends(get_db)):
    return await find_where(db, Vehicle)


@router.get("/active", response_model=List[VehicleResponse])
async def list_active_vehicles(db: AsyncSession = Depends(get_db)):
    return await find_where(db, Vehicle, Vehicle.active.is_(True))


@router.get("/count", response_model=CountResponse)
async def count_vehicles(db: AsyncSession = Depends(get_db)):
    return CountResponse(count=await db.scalar(select(func.count()).select_from(Vehicle)))


@router.get("/search", response_model=List[VehicleResponse])
async def search_vehicles(
    query: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
):
    pattern = f"%{query.lower()}%"
    return await find_where(
        db,
        Vehicle,
        or_(
            func.lower(Vehicle.license_plate).like(pattern),
            func.lower(Vehicle.chassis_number).like(pattern),
            func.lower(Vehicle.vehicle_name).like(pattern),
            func.lower(Vehicle.model).like(pattern),
        ),
        order_by=Vehicle.license_plate.asc(),
    )


@router.get("/client/{client_id}", response_model=List[VehicleResponse])
async def list_client_vehicles(client_id: int, db: AsyncSession = Depends(get_db)):
    return await find_where(db, Vehicle, Vehicle.client_id == client_id)


@router.get("/manufacturer/{manufacturer_id}", response_model=List[VehicleResponse])
async def list_manufacturer_vehicles(manufacturer_id: int, db: AsyncSession = Depends(get_db)):
    return await find_where(db, Vehicle, Vehicle.manufacturer_id == manufacturer_id)


@router.get("/license/{license_plate}", response_model=VehicleResponse)
async def get_vehicle_by_plate(license_plate: str, db: AsyncSession = Depends(get_db)):
    rows = await find_where(db, Vehicle, Vehicle.license_plate == license_plate, limit=1)
    if not rows:
        raise NotFoundError("Vehicle not found")
    return rows[0]


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Vehicle, vehicle_id, "Vehicle")


@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle(req: VehicleCreateRequest, db: AsyncSession = Depends(get_db)):
    fields = req.model_dump()
    await _ensure_related(db, fields)
    await _ensure_identifiers_unique(db, fields)
    vehicle = Vehicle(**fields)
    db.add(vehicle)
    await db.flush()
    await db.refresh(vehicle)
    return vehicle


@router.put("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(
    vehicle_id: int,
    req: VehicleUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    ensure_path_matches(vehicle_id, req.id)
    vehicle = await get_or_404(db, Vehicle, vehicle_id, "Vehicle")
    updates = req.model_dump(exclude_none=True, exclude={"id"})
    await _ensure_related(db, updates)
    await _ensure_identifiers_unique(db, updates, exclude_id=vehicle_id)
    apply_updates(vehicle, updates)
    await commit_or_not_found(db, Vehicle, vehicle_id, "Vehicle")
    await db.refresh(vehicle)
    return vehicle


@router.patch("/{vehicle_id}/odometer", response_model=VehicleResponse)
async def update_odometer(
    vehicle_id: int,
    req: OdometerRequest,
    db: AsyncSession = Depends(get_db),
):
    vehicle = await get_or_404(db, Vehicle, vehicle_id, "Vehicle")
    vehicle.odometer = req.odometer
    await commit_or_not_found(db, Vehicle, vehicle_id, "Vehicle")
    await db.refresh(vehicle)
    return vehicle


@router.patch("/{vehicle_id}/status", response_model=VehicleResponse)
async def update_status(
    vehicle_id: int,
    req: VehicleStatusRequest,
    db: AsyncSession = Depends(get_db),
):
    vehicle = await get_or_404(db, Vehicle, vehicle_id, "Vehicle")
    vehicle.active = req.active
    await commit_or_not_found(db, Vehicle, vehicle_id, "Vehicle")
    await db.refresh(vehicle)
    return vehicle


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    vehicle = await get_or_404(db, Vehicle, vehicle_id, "Vehicle")
    await ensure_unreferenced(
        db,
        [
            (VehicleAppointment, VehicleAppointment.vehicle_id == vehicle_id),
            (VehicleService, VehicleService.vehicle_id == vehicle_id),
        ],
        "Cannot delete vehicle as it has related records",
    )
    await db.delete(vehicle)
    await db.flush()
