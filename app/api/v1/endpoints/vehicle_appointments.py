"""v1 vehicle appointment endpoints."""

from datetime import date, datetime, time, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidInputError
from app.database import get_db
from app.models import GarageProfile, Vehicle, VehicleAppointment
from app.schemas_v1 import (
    AppointmentCreateRequest,
    AppointmentNoteRequest,
    AppointmentRescheduleRequest,
    AppointmentResponse,
    AppointmentUpdateRequest,
    CountResponse,
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

BY_DATE = VehicleAppointment.appointment_date.asc()


async def _ensure_vehicle(db: AsyncSession, vehicle_id: int) -> None:
    if not await exists_where(db, Vehicle, Vehicle.id == vehicle_id):
        raise InvalidInputError("Invalid Vehicle ID")


async def _ensure_garage(db: AsyncSession, garage_id: Optional[int]) -> None:
    if garage_id is not None and not await exists_where(db, GarageProfile, GarageProfile.id == garage_id):
        raise InvalidInputError("Invalid Garage ID")


@router.get("", response_model=List[AppointmentResponse])
async def list_appointments(db: AsyncSession = Depends(get_db)):
    return await find_where(db, VehicleAppointment, order_by=BY_DATE)


@router.get("/upcoming", response_model=List[AppointmentResponse])
async def list_upcoming_appointments(db: AsyncSession = Depends(get_db)):
    today = datetime.combine(date.today(), time.min)
    return await find_where(db, VehicleAppointment, VehicleAppointment.appointment_date >= today, order_by=BY_DATE)


@router.get("/count", response_model=CountResponse)
async def count_appointments(db: AsyncSession = Depends(get_db)):
    return CountResponse(count=await db.scalar(select(func.count()).select_from(VehicleAppointment)))


@router.get("/range", response_model=List[AppointmentResponse])
async def list_appointments_in_range(
    start: datetime = Query(...),
    end: datetime = Query(...),
    db: AsyncSession = Depends(get_db),
):
    if end < start:
        raise InvalidInputError("End date must not be before start date")
    return await find_where(
        db,
        VehicleAppointment,
        VehicleAppointment.appointment_date >= start,
        VehicleAppointment.appointment_date <= end,
        order_by=BY_DATE,
    )


@router.get("/date/{day}", response_model=List[AppointmentResponse])
async def list_appointments_on(day: date, db: AsyncSession = Depends(get_db)):
    start = datetime.combine(day, time.min)
    return await find_where(
        db,
        VehicleAppointment,
        VehicleAppointment.appointment_date >= start,
        VehicleAppointment.appointment_date < start + timedelta(days=1),
        order_by=BY_DATE,
    )


@router.get("/vehicle/{vehicle_id}", response_model=List[AppointmentResponse])
async def list_vehicle_appointments(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    return await find_where(db, VehicleAppointment, VehicleAppointment.vehicle_id == vehicle_id, order_by=BY_DATE)


@router.get("/garage/{garage_id}", response_model=List[AppointmentResponse])
async def list_garage_appointments(garage_id: int, db: AsyncSession = Depends(get_db)):
    return await find_where(db, VehicleAppointment, VehicleAppointment.garage_id == garage_id, order_by=BY_DATE)


@router.get("/client/{client_id}", response_model=List[AppointmentResponse])
async def list_client_appointments(client_id: int, db: AsyncSession = Depends(get_db)):
    return await find_where(
        db,
        VehicleAppointment,
        VehicleAppointment.vehicle.has(Vehicle.client_id == client_id),
        order_by=BY_DATE,
    )


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(appointment_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, VehicleAppointment, appointment_id, "Appointment")


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(req: AppointmentCreateRequest, db: AsyncSession = Depends(get_db)):
    await _ensure_vehicle(db, req.vehicle_id)
    await _ensure_garage(db, req.garage_id)
    appointment = VehicleAppointment(**req.model_dump())
    db.add(appointment)
    await db.flush()
    await db.refresh(appointment)
    return appointment


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    req: AppointmentUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    ensure_path_matches(appointment_id, req.id)
    appointment = await get_or_404(db, VehicleAppointment, appointment_id, "Appointment")
    updates = req.model_dump(exclude_none=True, exclude={"id"})
    if "vehicle_id" in updates:
        await _ensure_vehicle(db, updates["vehicle_id"])
    await _ensure_garage(db, updates.get("garage_id"))
    apply_updates(appointment, updates)
    await commit_or_not_found(db, VehicleAppointment, appointment_id, "Appointment")
    await db.refresh(appointment)
    return appointment


@router.patch("/{appointment_id}/reschedule", response_model=AppointmentResponse)
async def reschedule_appointment(
    appointment_id: int,
    req: AppointmentRescheduleRequest,
    db: AsyncSession = Depends(get_db),
):
    appointment = await get_or_404(db, VehicleAppointment, appointment_id, "Appointment")
    appointment.appointment_date = req.appointment_date
    await commit_or_not_found(db, VehicleAppointment, appointment_id, "Appointment")
    await db.refresh(appointment)
    return appointment


@router.patch("/{appointment_id}/note", response_model=AppointmentResponse)
async def update_appointment_note(
    appointment_id: int,
    req: AppointmentNoteRequest,
    db: AsyncSession = Depends(get_db),
):
    appointment = await get_or_404(db, VehicleAppointment, appointment_id, "Appointment")
    appointment.note = req.note
    await commit_or_not_found(db, VehicleAppointment, appointment_id, "Appointment")
    await db.refresh(appointment)
    return appointment


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_appointment(appointment_id: int, db: AsyncSession = Depends(get_db)):
    appointment = await get_or_404(db, VehicleAppointment, appointment_id, "Appointment")
    await db.delete(appointment)
    await db.flush()
