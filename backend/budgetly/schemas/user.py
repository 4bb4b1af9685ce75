"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, Field
from budgetly.schemas.common import CamelModel


class UserCreate(BaseModel):
    """Schema for user registration."""
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=1)


class UserLogin(BaseModel):
    """Schema for user login."""
    username: str
    password: str


class UserResponse(CamelModel):
    """Schema for user response. The password hash is never exposed."""
    id: int
    username: str
