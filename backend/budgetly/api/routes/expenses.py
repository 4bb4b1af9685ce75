"""
Expense routes.
"""
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
from budgetly.core.utils import MONTH_PATTERN
from budgetly.db.session import get_db
from budgetly.models.user import User
from budgetly.schemas.expense import ExpenseCreate, ExpenseResponse
from budgetly.services.expense_service import create_expense, list_expenses
from budgetly.api.dependencies import get_current_user

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("/{month}", response_model=List[ExpenseResponse])
async def get_month_expenses(
    month: str = Path(pattern=MONTH_PATTERN),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get expenses logged during a month."""
    return list_expenses(current_user.id, month, db)


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def add_expense(
    expense_data: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Log an expense and charge it against this month's budget."""
    return create_expense(current_user.id, expense_data, db)
