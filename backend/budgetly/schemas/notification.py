"""
Pydantic schemas for Notification entity.
"""
from datetime import datetime
from budgetly.schemas.common import CamelModel


class NotificationResponse(CamelModel):
    """Schema for notification response."""
    id: int
    user_id: int
    message: str
    read: bool
    date: datetime
