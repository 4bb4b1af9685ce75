"""
FastAPI entrypoint for the Budgetly backend application.
"""
import logging
from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from budgetly.core.config import settings
from budgetly.core.utils import format_error
from budgetly.api.dependencies import NotAuthenticated
from budgetly.api.router import api_router
from budgetly.services.ai_service import AIServiceError
from budgetly.web.pages import router as pages_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Budgetly API",
    description="Backend API for personal monthly budgeting",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NotAuthenticated)
async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
    """Unauthenticated requests get a bare 401."""
    return Response(status_code=status.HTTP_401_UNAUTHORIZED)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Payload validation failures are answered with 400 and the error list."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=format_error("Validation failed", jsonable_encoder(exc.errors()))
    )


@app.exception_handler(AIServiceError)
async def ai_service_error_handler(request: Request, exc: AIServiceError):
    """The AI provider failed; report its message."""
    logger.error(f"AI service error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=format_error(str(exc))
    )


# Include API routes
app.include_router(api_router, prefix="/api")
app.include_router(pages_router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Budgetly API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
