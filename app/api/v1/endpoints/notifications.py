"""v1 client notification endpoints."""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidInputError, NotFoundError
from app.core.v1_dependencies import PushSink, get_push_sink
from app.database import get_db
from app.models import ClientNotification, ClientProfile
from app.schemas_v1 import MessageResponse, NotificationCreateRequest, NotificationResponse
from app.services.crud_service import exists_where, find_where, get_or_404

router = APIRouter()


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(db: AsyncSession = Depends(get_db)):
    return await find_where(db, ClientNotification, order_by=ClientNotification.created_date.desc())


@router.get("/client/{client_id}", response_model=List[NotificationResponse])
async def list_client_notifications(client_id: int, db: AsyncSession = Depends(get_db)):
    return await find_where(
        db,
        ClientNotification,
        ClientNotification.client_id == client_id,
        order_by=ClientNotification.created_date.desc(),
    )


@router.get("/client/{client_id}/unread", response_model=List[NotificationResponse])
async def list_unread_notifications(client_id: int, db: AsyncSession = Depends(get_db)):
    return await find_where(
        db,
        ClientNotification,
        ClientNotification.client_id == client_id,
        ClientNotification.is_read == False,  # noqa: E712
        order_by=ClientNotification.created_date.desc(),
    )


@router.get("/{notification_id}", response_model=NotificationResponse)
async def get_notification(notification_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, ClientNotification, notification_id, "Notification")


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    req: NotificationCreateRequest,
    db: AsyncSession = Depends(get_db),
    push: PushSink = Depends(get_push_sink),
):
    notes = (req.notes or "").strip()
    if not notes:
        raise InvalidInputError("Notification notes are required.")
    if not await exists_where(db, ClientProfile, ClientProfile.id == req.client_id):
        raise InvalidInputError("Specified Client does not exist.")

    notification = ClientNotification(
        client_id=req.client_id,
        notes=notes,
        is_read=False,
        created_date=datetime.utcnow(),
    )
    db.add(notification)
    await db.commit()
    await db.refresh(notification)

    await push(notification.client_id, notification.notes)
    return notification


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(notification_id: int, db: AsyncSession = Depends(get_db)):
    notification = await get_or_404(db, ClientNotification, notification_id, "Notification")
    notification.is_read = True
    await db.flush()
    await db.refresh(notification)
    return notification


@router.delete("/client/{client_id}", response_model=MessageResponse)
async def delete_client_notifications(client_id: int, db: AsyncSession = Depends(get_db)):
    if not await exists_where(db, ClientNotification, ClientNotification.client_id == client_id):
        raise NotFoundError("No notifications found for this client.")
    result = await db.execute(delete(ClientNotification).where(ClientNotification.client_id == client_id))
    return MessageResponse(message=f"Deleted {result.rowcount} notification(s)")


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(notification_id: int, db: AsyncSession = Depends(get_db)):
    notification = await get_or_404(db, ClientNotification, notification_id, "Notification")
    await db.delete(notification)
    await db.flush()
