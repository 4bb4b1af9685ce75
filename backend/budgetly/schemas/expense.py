"""
Pydantic schemas for Expense entity.
"""
from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime
from budgetly.models.expense import Currency, ExpenseCategory
from budgetly.schemas.common import CamelModel


class ExpenseItem(CamelModel):
    """Single line item, typically extracted from a receipt image."""
    amount: float = Field(gt=0)
    currency: Currency
    category: ExpenseCategory

    @field_validator("currency", "category", mode="before")
    @classmethod
    def normalize_case(cls, v):
        """Accept "USD" as well as "usd"."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class ExpenseCreate(CamelModel):
    """Schema for expense creation."""
    amount: float = Field(gt=0)
    currency: Currency
    category: ExpenseCategory
    description: Optional[str] = None
    receipt_url: Optional[str] = None
    extracted_items: Optional[List[ExpenseItem]] = None

    @field_validator("currency", "category", mode="before")
    @classmethod
    def normalize_case(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class ExpenseResponse(CamelModel):
    """Schema for expense response."""
    id: int
    user_id: int
    amount: float
    currency: str
    category: str
    description: Optional[str] = None
    receipt_url: Optional[str] = None
    date: datetime
    extracted_items: Optional[List[ExpenseItem]] = None
