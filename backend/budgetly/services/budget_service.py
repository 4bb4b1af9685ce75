"""
Budget service for monthly allowance bookkeeping.
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session
from budgetly.core.config import settings
from budgetly.models.budget import Budget
from budgetly.models.notification import Notification
from budgetly.schemas.budget import BudgetCreate

logger = logging.getLogger(__name__)


def low_budget_message(threshold: float) -> str:
    """Warning text for a remaining budget below the given share of the total."""
    return f"Warning: You have less than {threshold * 100:g}% of your budget remaining"


def get_budget(user_id: int, month: str, db: Session, for_update: bool = False) -> Optional[Budget]:
    """Get a user's budget for a month, or None. `for_update` locks the row."""
    query = db.query(Budget).filter(
        Budget.user_id == user_id,
        Budget.month == month
    )
    if for_update:
        query = query.with_for_update()
    return query.first()


def set_budget(user_id: int, budget_data: BudgetCreate, db: Session) -> Budget:
    """
    Create the budget for a month, or replace the total of an existing one.

    Replacing the total keeps what was already spent, so the new remainder is
    new_total - (old_total - old_remaining).
    """
    budget = get_budget(user_id, budget_data.month, db, for_update=True)

    if budget:
        spent = budget.spent_amount
        budget.total_amount = budget_data.total_amount
        budget.remaining_amount = budget_data.total_amount - spent
        logger.info(f"Updated budget {budget.id} for user {user_id} ({budget.month}): total={budget.total_amount}")
    else:
        budget = Budget(
            user_id=user_id,
            month=budget_data.month,
            total_amount=budget_data.total_amount,
            remaining_amount=budget_data.total_amount
        )
        db.add(budget)
        logger.info(f"Created budget for user {user_id} ({budget_data.month}): total={budget_data.total_amount}")

    db.commit()
    db.refresh(budget)
    return budget


def apply_expense(budget: Budget, amount: float, db: Session) -> Optional[Notification]:
    """
    Deduct an expense from a budget and queue a warning when the remainder
    falls below the configured share of the total.

    Changes are added to the session but not committed.
    """
    # Deducted in SQL; the loaded row may be stale
    db.query(Budget).filter(Budget.id == budget.id).update(
        {Budget.remaining_amount: Budget.remaining_amount - amount},
        synchronize_session=False
    )
    db.refresh(budget)

    threshold = settings.LOW_BUDGET_THRESHOLD
    if budget.remaining_amount < budget.total_amount * threshold:
        notification = Notification(
            user_id=budget.user_id,
            message=low_budget_message(threshold)
        )
        db.add(notification)
        logger.info(
            f"Budget {budget.id} for user {budget.user_id} below {threshold:.0%}: "
            f"remaining={budget.remaining_amount} total={budget.total_amount}"
        )
        return notification

    return None
