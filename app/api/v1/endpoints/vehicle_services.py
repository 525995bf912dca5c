"""v1 vehicle service visits and the service types performed in them."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, InvalidInputError
from app.database import get_db
from app.models import Currency, GarageProfile, ServiceType, Vehicle, VehicleService, VehicleServiceLine
from app.schemas_v1 import (
    ServiceLineCreateRequest,
    ServiceLineResponse,
    VehicleServiceCreateRequest,
    VehicleServiceResponse,
    VehicleServiceUpdateRequest,
)
from app.services.crud_service import (
    apply_updates,
    commit_or_not_found,
    ensure_path_matches,
    exists_where,
    find_where,
    get_or_404,
)

router = APIRouter()

BY_DATE = VehicleService.service_date.desc()


@router.get("", response_model=List[VehicleServiceResponse])
async def list_vehicle_services(db: AsyncSession = Depends(get_db)):
    return await find_where(db, VehicleService, order_by=BY_DATE)


@router.get("/vehicle/{vehicle_id}", response_model=List[VehicleServiceResponse])
async def list_services_for_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    return await find_where(db, VehicleService, VehicleService.vehicle_id == vehicle_id, order_by=BY_DATE)


@router.get("/garage/{garage_id}", response_model=List[VehicleServiceResponse])
async def list_services_at_garage(garage_id: int, db: AsyncSession = Depends(get_db)):
    return await find_where(db, VehicleService, VehicleService.garage_id == garage_id, order_by=BY_DATE)


@router.get("/{service_id}", response_model=VehicleServiceResponse)
async def get_vehicle_service(service_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, VehicleService, service_id, "Vehicle service")


@router.post("", response_model=VehicleServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle_service(req: VehicleServiceCreateRequest, db: AsyncSession = Depends(get_db)):
    if not await exists_where(db, Vehicle, Vehicle.id == req.vehicle_id):
        raise InvalidInputError("Invalid Vehicle ID")
    if not await exists_where(db, GarageProfile, GarageProfile.id == req.garage_id):
        raise InvalidInputError("Invalid Garage ID")
    service = VehicleService(**req.model_dump(exclude_none=True))
    db.add(service)
    await db.flush()
    await db.refresh(service)
    return service


@router.put("/{service_id}", response_model=VehicleServiceResponse)
async def update_vehicle_service(
    service_id: int,
    req: VehicleServiceUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    ensure_path_matches(service_id, req.id)
    service = await get_or_404(db, VehicleService, service_id, "Vehicle service")
    apply_updates(service, req.model_dump(exclude_none=True, exclude={"id"}))
    await commit_or_not_found(db, VehicleService, service_id, "Vehicle service")
    await db.refresh(service)
    return service


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle_service(service_id: int, db: AsyncSession = Depends(get_db)):
    service = await get_or_404(db, VehicleService, service_id, "Vehicle service")
    # lines go with the visit
    await db.delete(service)
    await db.flush()


@router.get("/{service_id}/service-types", response_model=List[ServiceLineResponse])
async def list_service_lines(service_id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, VehicleService, service_id, "Vehicle service")
    return await find_where(db, VehicleServiceLine, VehicleServiceLine.vehicle_service_id == service_id)


@router.post(
    "/{service_id}/service-types",
    response_model=ServiceLineResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_service_line(
    service_id: int,
    req: ServiceLineCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    await get_or_404(db, VehicleService, service_id, "Vehicle service")
    if not await exists_where(db, ServiceType, ServiceType.id == req.service_type_id):
        raise InvalidInputError("Invalid service type ID")
    if not await exists_where(db, Currency, Currency.id == req.curr_id):
        raise InvalidInputError("Invalid currency ID")
    if await exists_where(
        db,
        VehicleServiceLine,
        VehicleServiceLine.vehicle_service_id == service_id,
        VehicleServiceLine.service_type_id == req.service_type_id,
    ):
        raise ConflictError("This service type is already recorded for the visit")
    line = VehicleServiceLine(vehicle_service_id=service_id, **req.model_dump())
    db.add(line)
    await db.flush()
    await db.refresh(line)
    return line


@router.delete("/{service_id}/service-types/{line_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_service_line(service_id: int, line_id: int, db: AsyncSession = Depends(get_db)):
    line = await get_or_404(db, VehicleServiceLine, line_id, "Vehicle service line")
    if line.vehicle_service_id != service_id:
        raise InvalidInputError("Line does not belong to this vehicle service", error_code="IdMismatch")
    await db.delete(line)
    await db.flush()
