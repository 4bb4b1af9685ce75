"""
Notification service.
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from budgetly.models.notification import Notification


def list_notifications(user_id: int, db: Session) -> List[Notification]:
    """A user's notifications, newest first."""
    return db.query(Notification).filter(
        Notification.user_id == user_id
    ).order_by(Notification.date.desc(), Notification.id.desc()).all()


def mark_read(user_id: int, notification_id: int, db: Session) -> Optional[Notification]:
    """Flag a notification as read. Returns None if the user has no such notification."""
    notification = db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.user_id == user_id
    ).first()
    if not notification:
        return None

    if not notification.read:
        notification.read = True
        db.commit()
        db.refresh(notification)

    return notification
