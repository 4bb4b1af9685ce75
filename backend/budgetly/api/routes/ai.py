"""
AI test route: free-text answers and receipt extraction.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from budgetly.core.utils import format_error
from budgetly.models.user import User
from budgetly.schemas.ai import AIRequest, AIResponse
from budgetly.services.ai_service import generate_response
from budgetly.api.dependencies import get_current_user

router = APIRouter(tags=["ai"])


@router.post("/test-ai", response_model=AIResponse)
async def test_ai(
    request: AIRequest,
    current_user: User = Depends(get_current_user)
):
    """Send a prompt and/or base64 image to the AI model."""
    try:
        response = await generate_response(request.prompt, request.image)
    except ValueError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=format_error(str(e))
        )
    return {"response": response}
