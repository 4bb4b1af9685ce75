"""
Pydantic schemas for Budget entity.
"""
from pydantic import Field
from budgetly.core.utils import MONTH_PATTERN
from budgetly.schemas.common import CamelModel


class BudgetCreate(CamelModel):
    """Schema for budget creation."""
    total_amount: float = Field(gt=0)
    month: str = Field(pattern=MONTH_PATTERN)  # "YYYY-MM"


class BudgetResponse(CamelModel):
    """Schema for budget response."""
    id: int
    user_id: int
    total_amount: float
    remaining_amount: float
    month: str
