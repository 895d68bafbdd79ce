"""
FastAPI Application

Main entry point for the IntroEngine API.
A thin stateless adapter: validates JSON, calls the engines, maps errors.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError

from introengine.config import settings
from introengine.utils.metrics import metrics
from introengine.utils.observability import configure_logging
from introengine.api.routes import (
    health_router,
    metrics_router,
    relationships_router,
    scoring_router,
    outreach_router,
    advisor_router,
    account_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.

    The engines are pure and hold no resources, so startup only
    configures logging.
    """
    configure_logging()
    logger.info(f"Starting IntroEngine API ({settings.environment})...")

    yield

    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    description="Intro routing, commercial scoring and outreach composition",
    version=settings.api_version,
    lifespan=lifespan
)


# ============================================
# ERROR HANDLING
# ============================================

def _error_details(errors) -> list:
    """Keep the JSON-safe part of pydantic error entries."""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in errors
    ]


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed JSON, missing required fields and type mismatches are caller errors."""
    logger.warning(f"Invalid request body on {request.url.path}: {len(exc.errors())} error(s)")
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request body",
            "details": _error_details(exc.errors())
        }
    )


@app.exception_handler(ValidationError)
async def model_validation_handler(request: Request, exc: ValidationError):
    logger.warning(f"Invalid input on {request.url.path}: {exc.error_count()} error(s)")
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid input",
            "details": _error_details(exc.errors())
        }
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"}
    )


# ============================================
# REQUEST METRICS
# ============================================

def _endpoint_label(request: Request) -> str:
    """Route template, so unknown paths share one series."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


@app.middleware("http")
async def count_requests(request: Request, call_next):
    try:
        response = await call_next(request)
    except Exception:
        # Rendered as a 500 by unexpected_error_handler further out
        metrics.requests_total.inc(endpoint=_endpoint_label(request), status="500")
        raise
    metrics.requests_total.inc(endpoint=_endpoint_label(request), status=str(response.status_code))
    return response


# Mount routers
app.include_router(health_router)
app.include_router(metrics_router)
app.include_router(relationships_router)
app.include_router(scoring_router)
app.include_router(outreach_router)
app.include_router(advisor_router)
app.include_router(account_router)
