"""
Budget management routes.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
from budgetly.core.utils import MONTH_PATTERN
from budgetly.db.session import get_db
from budgetly.models.user import User
from budgetly.schemas.budget import BudgetCreate, BudgetResponse
from budgetly.services.budget_service import get_budget, set_budget
from budgetly.api.dependencies import get_current_user

router = APIRouter(prefix="/budget", tags=["budget"])


@router.get("/{month}", response_model=Optional[BudgetResponse])
async def get_month_budget(
    month: str = Path(pattern=MONTH_PATTERN),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the budget for a month, or null if none was set."""
    return get_budget(current_user.id, month, db)


@router.post("", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(
    budget_data: BudgetCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Set or edit the budget for a month."""
    return set_budget(current_user.id, budget_data, db)
