"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from budgetly.api.routes import auth, budget, expenses, notifications, ai

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(budget.router)
api_router.include_router(expenses.router)
api_router.include_router(notifications.router)
api_router.include_router(ai.router)
