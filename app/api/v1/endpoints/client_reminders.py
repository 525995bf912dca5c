"""v1 client reminder endpoints. A client keeps at most one reminder."""

from datetime import datetime, timedelta
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.database import get_db
from app.models import ClientProfile, ClientReminder
from app.schemas_v1 import (
    ReminderCreateRequest,
    ReminderDateRequest,
    ReminderNotesRequest,
    ReminderResponse,
    ReminderUpdateRequest,
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

UPCOMING_WINDOW = timedelta(days=7)


@router.get("", response_model=List[ReminderResponse])
async def list_reminders(db: AsyncSession = Depends(get_db)):
    return await find_where(db, ClientReminder)


@router.get("/upcoming", response_model=List[ReminderResponse])
async def list_upcoming_reminders(db: AsyncSession = Depends(get_db)):
    now = datetime.utcnow()
    return await find_where(
        db,
        ClientReminder,
        ClientReminder.reminder_date >= now,
        ClientReminder.reminder_date <= now + UPCOMING_WINDOW,
        order_by=ClientReminder.reminder_date.asc(),
    )


@router.get("/client/{client_id}", response_model=ReminderResponse)
async def get_client_reminder(client_id: int, db: AsyncSession = Depends(get_db)):
    rows = await find_where(db, ClientReminder, ClientReminder.client_id == client_id, limit=1)
    if not rows:
        raise NotFoundError("Reminder not found")
    return rows[0]


@router.get("/{reminder_id}", response_model=ReminderResponse)
async def get_reminder(reminder_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, ClientReminder, reminder_id, "Reminder")


@router.post("", response_model=ReminderResponse, status_code=status.HTTP_201_CREATED)
async def create_reminder(req: ReminderCreateRequest, db: AsyncSession = Depends(get_db)):
    if not await exists_where(db, ClientProfile, ClientProfile.id == req.client_id):
        raise InvalidInputError("Client does not exist")
    if await exists_where(db, ClientReminder, ClientReminder.client_id == req.client_id):
        raise ConflictError("Client already has a reminder. Use PUT to update it.")
    reminder = ClientReminder(**req.model_dump())
    db.add(reminder)
    await db.flush()
    await db.refresh(reminder)
    return reminder


@router.put("/{reminder_id}", response_model=ReminderResponse)
async def update_reminder(
    reminder_id: int,
    req: ReminderUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    ensure_path_matches(reminder_id, req.id)
    reminder = await get_or_404(db, ClientReminder, reminder_id, "Reminder")
    apply_updates(reminder, req.model_dump(exclude_none=True, exclude={"id"}))
    await commit_or_not_found(db, ClientReminder, reminder_id, "Reminder")
    await db.refresh(reminder)
    return reminder


@router.patch("/{reminder_id}/reminder-date", response_model=ReminderResponse)
async def update_reminder_date(
    reminder_id: int,
    req: ReminderDateRequest,
    db: AsyncSession = Depends(get_db),
):
    reminder = await get_or_404(db, ClientReminder, reminder_id, "Reminder")
    reminder.reminder_date = req.reminder_date
    await commit_or_not_found(db, ClientReminder, reminder_id, "Reminder")
    await db.refresh(reminder)
    return reminder


@router.patch("/{reminder_id}/notes", response_model=ReminderResponse)
async def update_reminder_notes(
    reminder_id: int,
    req: ReminderNotesRequest,
    db: AsyncSession = Depends(get_db),
):
    reminder = await get_or_404(db, ClientReminder, reminder_id, "Reminder")
    reminder.notes = req.notes
    await commit_or_not_found(db, ClientReminder, reminder_id, "Reminder")
    await db.refresh(reminder)
    return reminder


@router.delete("/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reminder(reminder_id: int, db: AsyncSession = Depends(get_db)):
    reminder = await get_or_404(db, ClientReminder, reminder_id, "Reminder")
    await db.delete(reminder)
    await db.flush()
