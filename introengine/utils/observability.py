"""
Structured Logging & Observability
Human-readable in development, machine-parseable JSON in production.
"""
import sys
from loguru import logger
from typing import Any, Dict
from introengine.config import get_settings


def configure_logging():
    """
    Configure loguru for the engines and the API boundary.

    In development: Human-readable colorized output
    In production: Structured JSON logs for ingestion (ELK, Datadog, etc.)
    """
    settings = get_settings()

    # Remove default handler
    logger.remove()

    if not settings.enable_structured_logging:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "{message}"
            ),
            level=settings.log_level,
            colorize=True,
        )
    else:
        logger.add(
            sys.stderr,
            format="{message}",
            level=settings.log_level,
            serialize=True,  # Output as JSON
        )

    logger.info(f"Logging configured: level={settings.log_level}, structured={settings.enable_structured_logging}")


def log_engine_execution(
    engine: str,
    action: str,
    duration_ms: float | None = None,
    **context
):
    """
    Structured logging for engine executions.

    Args:
        engine: Name of the engine (e.g., "RelationshipRouter")
        action: What was performed (e.g., "find_routes", "score")
        duration_ms: Execution time in milliseconds
        **context: Additional context (company_id, counts, scores, etc.)

    Example:
        >>> log_engine_execution(
        ...     engine="RelationshipRouter",
        ...     action="find_routes",
        ...     duration_ms=1.8,
        ...     targets=12,
        ...     opportunities=4
        ... )
    """
    log_data = {
        "engine": engine,
        "action": action,
    }

    if duration_ms is not None:
        log_data["duration_ms"] = round(duration_ms, 2)

    log_data.update(context)

    logger.bind(**log_data).info(f"{engine} | {action}")


def log_business_event(
    event_type: str,
    **details: Dict[str, Any]
):
    """
    Log business-relevant events for analytics.

    Examples:
        - Intro route found for a decision-maker
        - Account analysis fell back to cold outbound

    Args:
        event_type: Type of event (e.g., "route_found", "outbound_fallback")
        **details: Event-specific data
    """
    log_data = {
        "event_type": event_type,
        **details
    }

    logger.bind(**log_data).success(f"Business Event: {event_type}")
