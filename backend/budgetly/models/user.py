"""
User model for authentication and ownership of budget data.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from budgetly.db.base import BaseModel


class User(BaseModel):
    """Application user identified by a unique username."""
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    # Relationships
    budgets = relationship("Budget", back_populates="user", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="user", cascade="all, delete-orphan")
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")
