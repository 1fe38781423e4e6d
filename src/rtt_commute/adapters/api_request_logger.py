"""Utility for logging API requests when request logging is switched on."""

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key"}


def _redact_sensitive_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact credentials from headers before logging."""
    return {
        k: "***REDACTED***" if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()
    }


def log_api_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    enabled: bool = False,
) -> None:
    """Log API request details if request logging is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL.
        headers: Request headers (sensitive headers are redacted).
        enabled: The configured RTT_LOG_REQUESTS switch.
    """
    if not enabled:
        return

    log_parts = [f"{method} {url}"]
    if headers:
        log_parts.append(f"Headers: {json.dumps(_redact_sensitive_headers(headers), indent=2)}")

    logger.info("API Request:\n" + "\n".join(log_parts))


def log_api_response(
    url: str, status: int, elapsed_seconds: float, body: Any = None, enabled: bool = False
) -> None:
    """Log a response summary, with a body snippet when request logging is enabled."""
    if elapsed_seconds > 10:
        logger.info(f"GET {url} completed in {elapsed_seconds:.2f}s status={status} (slow)")
    else:
        logger.debug(f"GET {url} completed in {elapsed_seconds:.2f}s status={status}")
    if body is not None and enabled:
        logger.info(f"API Response {status}: {str(body)[:300]}")
