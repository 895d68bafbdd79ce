"""
Metrics Endpoint

Prometheus-compatible metrics for observability.
"""
from fastapi import APIRouter
from fastapi.responses import Response
from loguru import logger

from introengine.utils.metrics import metrics

router = APIRouter(tags=["Metrics"])


@router.get("/metrics")
async def prometheus_metrics():
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text exposition format for scraping.
    Includes:
    - Engine invocation counts and durations
    - Routes surfaced by route type
    - Request counts by endpoint and status

    Content-Type: text/plain; version=0.0.4; charset=utf-8
    """
    try:
        output = metrics.export()

        return Response(
            content=output,
            media_type="text/plain; version=0.0.4; charset=utf-8"
        )

    except Exception as e:
        logger.exception(f"Failed to export metrics: {e}")
        return Response(
            content=f"# Error exporting metrics: {e}\n",
            media_type="text/plain",
            status_code=500
        )
