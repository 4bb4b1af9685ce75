"""
Server-rendered pages: login and the AI test form.
"""
import base64
import logging
import os
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session
from budgetly.core.config import settings
from budgetly.db.session import get_db
from budgetly.models.user import User
from budgetly.services.ai_service import AIServiceError, generate_response
from budgetly.api.dependencies import get_optional_user
from budgetly.api.routes.auth import authenticate, set_session_cookie

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=os.path.join(os.path.dirname(__file__), "templates"))

router = APIRouter(include_in_schema=False)


def _to_login() -> RedirectResponse:
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/login")
async def login_page(request: Request, user: Optional[User] = Depends(get_optional_user)):
    if user:
        return RedirectResponse("/test-ai", status_code=status.HTTP_303_SEE_OTHER)
    return templates.TemplateResponse(request, "login.html", {"error": None})


@router.post("/login")
async def login_submit(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db)
):
    user = authenticate(username, password, db)
    if not user:
        return templates.TemplateResponse(
            request,
            "login.html",
            {"error": "Incorrect username or password", "username": username},
            status_code=status.HTTP_401_UNAUTHORIZED
        )

    response = RedirectResponse("/test-ai", status_code=status.HTTP_303_SEE_OTHER)
    set_session_cookie(response, user)
    return response


@router.get("/test-ai")
async def test_ai_page(request: Request, user: Optional[User] = Depends(get_optional_user)):
    """Empty AI test form."""
    if not user:
        return _to_login()
    return templates.TemplateResponse(request, "test_ai.html", {"prompt": "", "image": None, "response": None, "error": None})


@router.post("/test-ai")
async def test_ai_submit(
    request: Request,
    prompt: str = Form(""),
    image: Optional[UploadFile] = File(None),
    user: Optional[User] = Depends(get_optional_user)
):
    """
    Send the prompt and/or uploaded image to the AI model and render the
    answer: text as preformatted output, extracted items as rows.
    """
    if not user:
        return _to_login()

    context = {"prompt": prompt, "image": None, "response": None, "error": None}

    if image is not None and image.filename:
        content = await image.read()
        if len(content) > settings.MAX_UPLOAD_SIZE:
            context["error"] = "Image is too large"
            return templates.TemplateResponse(request, "test_ai.html", context, status_code=status.HTTP_400_BAD_REQUEST)
        if content:
            context["image"] = base64.b64encode(content).decode("utf-8")

    if not prompt.strip() and not context["image"]:
        # Nothing to send
        return templates.TemplateResponse(request, "test_ai.html", context)

    try:
        context["response"] = await generate_response(prompt, context["image"])
    except (AIServiceError, ValueError) as e:
        logger.warning(f"AI test request failed for user {user.id}: {e}")
        context["error"] = str(e) or "Failed to generate response"

    return templates.TemplateResponse(request, "test_ai.html", context)
