"""
Expense model for tracking spending.
"""
import enum
from sqlalchemy import Column, String, Float, DateTime, ForeignKey, Integer, Text, JSON
from sqlalchemy.orm import relationship
from budgetly.core.utils import utcnow
from budgetly.db.base import BaseModel


class Currency(str, enum.Enum):
    """Supported expense currencies."""
    VND = "vnd"
    USD = "usd"
    EUR = "eur"


class ExpenseCategory(str, enum.Enum):
    """Supported expense categories."""
    FOOD = "food"
    TRANSPORTATION = "transportation"
    UTILITY = "utility"
    RENT = "rent"
    HEALTH = "health"


class Expense(BaseModel):
    """Expense model representing a single spending event."""
    __tablename__ = "expenses"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    currency = Column(String(3), nullable=False)
    category = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    receipt_url = Column(Text, nullable=True)
    date = Column(DateTime, nullable=False, default=utcnow, index=True)
    extracted_items = Column(JSON, nullable=True)  # [{amount, currency, category}, ...]

    # Relationships
    user = relationship("User", back_populates="expenses")
