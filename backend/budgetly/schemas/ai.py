"""
Pydantic schemas for the AI test endpoint.
"""
from typing import List, Optional, Union
from budgetly.schemas.common import CamelModel
from budgetly.schemas.expense import ExpenseItem


class AIRequest(CamelModel):
    """Prompt and/or base64 image; a data URL prefix is tolerated."""
    prompt: Optional[str] = ""
    image: Optional[str] = None


class AIResponse(CamelModel):
    """Free text for prompt-only requests, extracted items for images."""
    response: Union[str, List[ExpenseItem]]
