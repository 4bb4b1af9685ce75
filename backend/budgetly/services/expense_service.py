"""
Expense service for expense-related business logic.
"""
import logging
from datetime import datetime
from typing import List
from sqlalchemy.orm import Session
from budgetly.core.utils import current_month, month_bounds, utcnow
from budgetly.models.expense import Expense
from budgetly.schemas.expense import ExpenseCreate
from budgetly.services.budget_service import get_budget, apply_expense

logger = logging.getLogger(__name__)


def create_expense(
    user_id: int,
    expense_data: ExpenseCreate,
    db: Session,
    now: datetime = None
) -> Expense:
    """
    Record an expense and charge it against the current month's budget.

    The expense, the budget update and any warning notification are committed
    together.
    """
    now = now or utcnow()

    extracted_items = None
    if expense_data.extracted_items is not None:
        extracted_items = [item.model_dump(mode="json") for item in expense_data.extracted_items]

    expense = Expense(
        user_id=user_id,
        amount=expense_data.amount,
        currency=expense_data.currency.value,
        category=expense_data.category.value,
        description=expense_data.description,
        receipt_url=expense_data.receipt_url,
        date=now,
        extracted_items=extracted_items
    )
    db.add(expense)
    db.flush()

    budget = get_budget(user_id, current_month(now), db, for_update=True)
    if budget:
        apply_expense(budget, expense.amount, db)
    else:
        logger.debug(f"No budget for user {user_id} in {current_month(now)}; expense {expense.id} not charged")

    db.commit()
    db.refresh(expense)

    return expense


def list_expenses(user_id: int, month: str, db: Session) -> List[Expense]:
    """Expenses a user logged during a month, oldest first."""
    start, end = month_bounds(month)
    return db.query(Expense).filter(
        Expense.user_id == user_id,
        Expense.date >= start,
        Expense.date < end
    ).order_by(Expense.date, Expense.id).all()
