"""
Budget model for monthly spending allowance.
"""
from sqlalchemy import Column, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from budgetly.db.base import BaseModel


class Budget(BaseModel):
    """A user's total and remaining allowance for one calendar month."""
    __tablename__ = "budgets"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    total_amount = Column(Float, nullable=False)
    remaining_amount = Column(Float, nullable=False)
    month = Column(String(7), nullable=False, index=True)  # "YYYY-MM"

    # Relationships
    user = relationship("User", back_populates="budgets")

    # One budget per user per month
    __table_args__ = (
        UniqueConstraint("user_id", "month", name="uq_user_month_budget"),
    )

    @property
    def spent_amount(self) -> float:
        return self.total_amount - self.remaining_amount
