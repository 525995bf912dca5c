"""v1 service type endpoints and their interval setups."""

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, InvalidInputError
from app.database import get_db
from app.models import MeasureUnit, ServiceType, ServiceTypeSetup, VehicleServiceLine
from app.schemas_v1 import (
    ServiceSetupCreateRequest,
    ServiceSetupResponse,
    ServiceSetupUpdateRequest,
    ServiceTypeCreateRequest,
    ServiceTypeResponse,
    ServiceTypeSelectRequest,
    ServiceTypeUpdateRequest,
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
setups_router = APIRouter()

DUPLICATE_LABEL = "A service type with this description"
DUPLICATE_SETUP_LABEL = "A setup with this service type and value"


@router.get("", response_model=List[ServiceTypeResponse])
async def list_service_types(db: AsyncSession = Depends(get_db)):
    return await find_where(db, ServiceType)


@router.get("/selected", response_model=List[ServiceTypeResponse])
async def list_selected_service_types(db: AsyncSession = Depends(get_db)):
    return await find_where(db, ServiceType, ServiceType.is_selected.is_(True))


@router.get("/search", response_model=List[ServiceTypeResponse])
async def search_service_types(
    term: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
):
    pattern = f"%{term.lower()}%"
    return await find_where(db, ServiceType, func.lower(ServiceType.description).like(pattern))


@router.get("/{service_type_id}", response_model=ServiceTypeResponse)
async def get_service_type(service_type_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, ServiceType, service_type_id, "Service type")


@router.get("/{service_type_id}/setups", response_model=List[ServiceSetupResponse])
async def list_service_type_setups(service_type_id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, ServiceType, service_type_id, "Service type")
    return await find_where(db, ServiceTypeSetup, ServiceTypeSetup.service_type_id == service_type_id)


@router.post("", response_model=ServiceTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_service_type(req: ServiceTypeCreateRequest, db: AsyncSession = Depends(get_db)):
    await ensure_unique(db, ServiceType, ServiceType.description, req.description, DUPLICATE_LABEL)
    service_type = ServiceType(**req.model_dump())
    db.add(service_type)
    await db.flush()
    await db.refresh(service_type)
    return service_type


@router.put("/{service_type_id}", response_model=ServiceTypeResponse)
async def update_service_type(
    service_type_id: int,
    req: ServiceTypeUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    ensure_path_matches(service_type_id, req.id)
    service_type = await get_or_404(db, ServiceType, service_type_id, "Service type")
    updates = req.model_dump(exclude_none=True, exclude={"id"})
    if "description" in updates:
        await ensure_unique(
            db, ServiceType, ServiceType.description, updates["description"], DUPLICATE_LABEL,
            exclude_id=service_type_id,
        )
    apply_updates(service_type, updates)
    await commit_or_not_found(db, ServiceType, service_type_id, "Service type")
    await db.refresh(service_type)
    return service_type


@router.patch("/{service_type_id}/select", response_model=ServiceTypeResponse)
async def select_service_type(
    service_type_id: int,
    req: ServiceTypeSelectRequest,
    db: AsyncSession = Depends(get_db),
):
    service_type = await get_or_404(db, ServiceType, service_type_id, "Service type")
    service_type.is_selected = req.is_selected
    await commit_or_not_found(db, ServiceType, service_type_id, "Service type")
    await db.refresh(service_type)
    return service_type


@router.delete("/{service_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service_type(service_type_id: int, db: AsyncSession = Depends(get_db)):
    service_type = await get_or_404(db, ServiceType, service_type_id, "Service type")
    await ensure_unreferenced(
        db,
        [
            (ServiceTypeSetup, ServiceTypeSetup.service_type_id == service_type_id),
            (VehicleServiceLine, VehicleServiceLine.service_type_id == service_type_id),
        ],
        "Cannot delete service type as it is being used in setups or vehicle services",
    )
    await db.delete(service_type)
    await db.flush()


async def _ensure_setup_unique(db: AsyncSession, service_type_id: int, service_value: int, exclude_id=None) -> None:
    criteria = [
        ServiceTypeSetup.service_type_id == service_type_id,
        ServiceTypeSetup.service_value == service_value,
    ]
    if exclude_id is not None:
        criteria.append(ServiceTypeSetup.id != exclude_id)
    if await exists_where(db, ServiceTypeSetup, *criteria):
        raise ConflictError(f"{DUPLICATE_SETUP_LABEL} already exists")


async def _ensure_setup_refs(db: AsyncSession, service_type_id: int, measure_unit_id: int) -> None:
    if not await exists_where(db, ServiceType, ServiceType.id == service_type_id):
        raise InvalidInputError("Invalid service type ID")
    if not await exists_where(db, MeasureUnit, MeasureUnit.id == measure_unit_id):
        raise InvalidInputError("Invalid measurement unit ID")


@setups_router.get("", response_model=List[ServiceSetupResponse])
async def list_setups(db: AsyncSession = Depends(get_db)):
    return await find_where(db, ServiceTypeSetup)


@setups_router.get("/{setup_id}", response_model=ServiceSetupResponse)
async def get_setup(setup_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, ServiceTypeSetup, setup_id, "Service type setup")


@setups_router.post("", response_model=ServiceSetupResponse, status_code=status.HTTP_201_CREATED)
async def create_setup(req: ServiceSetupCreateRequest, db: AsyncSession = Depends(get_db)):
    await _ensure_setup_refs(db, req.service_type_id, req.measure_unit_id)
    await _ensure_setup_unique(db, req.service_type_id, req.service_value)
    setup = ServiceTypeSetup(**req.model_dump())
    db.add(setup)
    await db.flush()
    await db.refresh(setup)
    return setup


@setups_router.put("/{setup_id}", response_model=ServiceSetupResponse)
async def update_setup(
    setup_id: int,
    req: ServiceSetupUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    ensure_path_matches(setup_id, req.id)
    setup = await get_or_404(db, ServiceTypeSetup, setup_id, "Service type setup")
    updates = req.model_dump(exclude_none=True, exclude={"id"})
    if "measure_unit_id" in updates:
        await _ensure_setup_refs(db, setup.service_type_id, updates["measure_unit_id"])
    if "service_value" in updates:
        await _ensure_setup_unique(db, setup.service_type_id, updates["service_value"], exclude_id=setup_id)
    apply_updates(setup, updates)
    await commit_or_not_found(db, ServiceTypeSetup, setup_id, "Service type setup")
    await db.refresh(setup)
    return setup


@setups_router.delete("/{setup_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_setup(setup_id: int, db: AsyncSession = Depends(get_db)):
    setup = await get_or_404(db, ServiceTypeSetup, setup_id, "Service type setup")
    await db.delete(setup)
    await db.flush()
