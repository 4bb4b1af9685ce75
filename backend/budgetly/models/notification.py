"""
Notification model for budget warnings.
"""
from sqlalchemy import Column, Boolean, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from budgetly.core.utils import utcnow
from budgetly.db.base import BaseModel


class Notification(BaseModel):
    """Message shown to a user, e.g. a low remaining budget warning."""
    __tablename__ = "notifications"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    date = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    user = relationship("User", back_populates="notifications")
