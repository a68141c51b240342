"""
Sentry initialization for centralized error tracking.
Observes failures, never controls lookup logic.
"""
import logging
from typing import Any, Dict

import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from ecs_catalog.config import config
from ecs_catalog.logger import logger


def initialize_sentry():
    """Initialize Sentry SDK if DSN is configured."""
    if not config.has_sentry:
        logger.info("Sentry not configured, skipping initialization")
        return

    try:
        sentry_sdk.init(
            dsn=config.SENTRY_DSN,
            environment=config.ENVIRONMENT,
            integrations=[
                AsyncioIntegration(),
                # Breadcrumbs only; failures are sent by capture_lookup_failure
                LoggingIntegration(level=logging.INFO, event_level=None)
            ],
            traces_sample_rate=0.1,
            send_default_pii=False,
            before_send=_enrich_sentry_event
        )

        logger.info("Sentry initialized for error tracking")

    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}")


def _enrich_sentry_event(event: Dict[str, Any], hint: Dict[str, Any]) -> Dict[str, Any]:
    """Tag events with the system name and group them by exception type."""
    event.setdefault("tags", {})
    event["tags"]["system"] = "ecs-catalog"
    event["tags"]["environment"] = config.ENVIRONMENT

    exceptions = event.get("exception", {}).get("values", [])
    if exceptions:
        event["fingerprint"] = ["{{ default }}", exceptions[0].get("type", "Unknown")]

    return event


def capture_lookup_failure(operation: str, error: Exception, context: Dict[str, Any]):
    """Capture a failed catalog operation in Sentry."""
    if not config.has_sentry:
        return

    with sentry_sdk.new_scope() as scope:
        scope.set_tag("operation", operation)
        scope.set_tag("error_type", type(error).__name__)
        scope.set_extra("context", context)
        scope.set_level("error")

        sentry_sdk.capture_exception(error)
