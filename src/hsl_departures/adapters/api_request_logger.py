"""Utility for logging GraphQL requests when HSLW_LOG_REQUESTS is enabled."""

import json
import logging
import os

logger = logging.getLogger(__name__)

SENSITIVE_KEYS = {"authorization", "cookie", "digitransit-subscription-key"}
REDACTED = "***REDACTED***"


def should_log_requests() -> bool:
    """Check if request logging is enabled via HSLW_LOG_REQUESTS environment variable."""
    return os.getenv("HSLW_LOG_REQUESTS", "").lower() == "true"


def _build_url_with_params(url: str, params: dict[str, str] | None) -> str:
    """Build full URL with query parameters."""
    if not params:
        return url
    param_str = "&".join(f"{k}={v}" for k, v in sorted(params.items()))
    return f"{url}?{param_str}" if "?" not in url else f"{url}&{param_str}"


def _redact(values: dict[str, str]) -> dict[str, str]:
    """Redact secrets from headers or query parameters."""
    return {k: REDACTED if k.lower() in SENSITIVE_KEYS else v for k, v in values.items()}


def log_graphql_request(
    url: str,
    query: str,
    headers: dict[str, str] | None = None,
    params: dict[str, str] | None = None,
) -> None:
    """Log GraphQL request details if HSLW_LOG_REQUESTS is enabled.

    Args:
        url: Endpoint URL.
        query: GraphQL document.
        headers: Request headers (sensitive ones are redacted).
        params: Query parameters (the subscription key is redacted).
    """
    if not should_log_requests():
        return

    full_url = _build_url_with_params(url, _redact(params) if params else None)
    log_parts = [f"POST {full_url}"]

    if headers:
        log_parts.append(f"Headers: {json.dumps(_redact(headers), indent=2)}")

    log_parts.append(f"Query:\n{query.strip()}")

    logger.info("GraphQL Request:\n" + "\n".join(log_parts))
