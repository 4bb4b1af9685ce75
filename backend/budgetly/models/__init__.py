"""Models package - Import all models for SQLAlchemy registration."""
from budgetly.models.user import User
from budgetly.models.budget import Budget
from budgetly.models.expense import Expense, ExpenseCategory, Currency
from budgetly.models.notification import Notification

__all__ = [
    "User",
    "Budget",
    "Expense",
    "ExpenseCategory",
    "Currency",
    "Notification",
]
