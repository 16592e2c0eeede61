import math
import uuid
from typing import Optional

from fastapi import FastAPI, Depends, Form, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware

from truereview.config import settings
from truereview.schemas.analyze_schemas import AnalyzeResponse, BlockResultSchema, StatusResponse
from truereview.pipelines.review_pipeline import analyze
from truereview.services.lexicon_service import lexicon_store
from truereview.api.security import verify_api_token, check_rate_limit
from truereview.api.admin import router as admin_router
from truereview.utils.logging_config import StructuredLogger, init_logging, request_id_var

VERSION = "0.1.0"
SENSITIVITY_LEVELS = [1, 2, 3]

# Initialize structured logging
init_logging()

logger = StructuredLogger(__name__)

app = FastAPI(
    title="TrueReview API",
    version=VERSION,
    description="Heuristic fake-review scoring for English and Hindi text",
    docs_url="/docs" if settings.debug else None,  # Disable docs in production
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# Security headers middleware
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    if settings.is_production:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


# Rate limit headers middleware
@app.middleware("http")
async def add_rate_limit_headers(request: Request, call_next):
    response = await call_next(request)
    if hasattr(request.state, "rate_limit_remaining"):
        response.headers["X-RateLimit-Limit"] = str(request.state.rate_limit_limit)
        response.headers["X-RateLimit-Remaining"] = str(request.state.rate_limit_remaining)
    return response


# Request id for log correlation
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(admin_router)


@app.get("/health")
def health():
    """Health check endpoint - no auth required."""
    return {"status": "ok"}


@app.get("/status", response_model=StatusResponse)
def status_info():
    """API status and configuration info."""
    return StatusResponse(
        status="ok",
        version=VERSION,
        environment=settings.environment,
        auth_enabled=bool(settings.api_token),
        rate_limit={
            "requests": settings.rate_limit_requests,
            "window_seconds": settings.rate_limit_window,
        },
        supported_languages=[lang.value for lang in lexicon_store.languages],
        sensitivity_levels=SENSITIVITY_LEVELS,
        max_input_chars=settings.max_input_chars,
    )


@app.post(
    "/analyze",
    response_model=AnalyzeResponse,
    dependencies=[Depends(verify_api_token), Depends(check_rate_limit)],
)
def analyze_reviews(
    text: Optional[str] = Form(None, description="One or more reviews separated by blank lines"),
    sensitivity: float = Form(settings.default_sensitivity, description="Weight multiplier, usually 1-3"),
    mode: Optional[str] = Form(None),
):
    if not text or not text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Field 'text' is required. Please paste a review first.",
        )

    if len(text) > settings.max_input_chars:
        logger.warning("Rejected oversized input", chars=len(text), limit=settings.max_input_chars)
        raise HTTPException(
            status_code=413,
            detail=f"Field 'text' exceeds {settings.max_input_chars} characters.",
        )

    if not math.isfinite(sensitivity) or sensitivity <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Field 'sensitivity' must be a positive number.",
        )

    report = analyze(text, sensitivity=sensitivity, mode=mode)
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Nothing to analyze in field 'text'.",
        )

    return AnalyzeResponse(
        avg=report.avg,
        verdict=report.verdict,
        results=[BlockResultSchema(**result.to_dict()) for result in report.results],
        combined=list(report.combined),
        mode=report.mode,
    )
