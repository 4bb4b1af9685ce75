"""
Notification routes.
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from budgetly.db.session import get_db
from budgetly.models.user import User
from budgetly.schemas.notification import NotificationResponse
from budgetly.services.notification_service import list_notifications, mark_read
from budgetly.api.dependencies import get_current_user

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationResponse])
async def get_notifications(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the user's notifications, newest first."""
    return list_notifications(current_user.id, db)


@router.post("/{notification_id}/read")
async def mark_notification_read(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Mark a notification as read. Repeating the call is harmless."""
    notification = mark_read(current_user.id, notification_id, db)
    if not notification:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found"
        )
    return {"message": "Notification marked as read"}
