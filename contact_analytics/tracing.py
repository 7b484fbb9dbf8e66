"""Logging and Arize observability setup.

Spans are created throughout the package with the OpenTelemetry API. They are
no-ops until ``setup_tracing`` registers an Arize tracer provider.
"""

import logging
import sys
from typing import Any

from .config import get_settings


def setup_logging(level: str | None = None) -> None:
    """Send log records to stderr; stdout carries the MCP stdio transport."""
    settings = get_settings()
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def setup_tracing() -> Any | None:
    """
    Initialize Arize tracing for the MCP tools.

    Returns the tracer_provider if successful, None otherwise.
    """
    logger = logging.getLogger(__name__)
    settings = get_settings()

    if not settings.arize_space_id or not settings.arize_api_key:
        logger.info("Arize tracing not configured - ARIZE_SPACE_ID and ARIZE_API_KEY required")
        return None

    try:
        from arize.otel import register

        tracer_provider = register(
            space_id=settings.arize_space_id,
            api_key=settings.arize_api_key,
            project_name=settings.arize_project_name,
            set_global_tracer_provider=True,
        )
        logger.info("Arize tracing enabled - project: %s", settings.arize_project_name)
        return tracer_provider

    except Exception as e:
        logger.warning("Failed to initialize Arize tracing: %s", e)
        return None
