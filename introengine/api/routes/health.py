"""
Health Endpoints

Liveness probe and API index.
"""
from fastapi import APIRouter

from introengine.config import settings

router = APIRouter(tags=["Health"])

SERVICE_NAME = "introengine"


@router.get("/health")
async def health_check():
    """
    Basic health check endpoint.

    Returns 200 if service is running.
    The engines hold no connections, so liveness is readiness.
    """
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": settings.api_version
    }


@router.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "service": settings.api_title,
        "version": settings.api_version,
        "endpoints": {
            "health": "/health",
            "metrics": "/metrics",
            "analyze_relationships": "/api/analyze-relationships (POST)",
            "calculate_scores": "/api/calculate-scores (POST)",
            "generate_outbound": "/api/generate-outbound (POST)",
            "generate_followups": "/api/generate-followups (POST)",
            "weekly_advisor": "/api/weekly-advisor (POST)",
            "analyze_account": "/api/analyze-account (POST)"
        }
    }
