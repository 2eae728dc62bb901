"""HTTP client for the Digitransit GraphQL API.

API documentation: https://digitransit.fi/en/developers/apis/1-routing-api/
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from hsl_departures.adapters.api_rate_limiter import ApiRateLimiter
from hsl_departures.adapters.api_request_logger import log_graphql_request
from hsl_departures.adapters.digitransit_api.constants import (
    DIGITRANSIT_ROUTING_URL,
    SUBSCRIPTION_KEY_PARAM,
)

if TYPE_CHECKING:
    from aiohttp import ClientSession

logger = logging.getLogger(__name__)


class DigitransitApiError(RuntimeError):
    """Raised when the API answers with an error status or GraphQL errors."""


class DigitransitGraphQLClient:
    """Posts GraphQL documents and returns the decoded JSON body."""

    def __init__(
        self,
        session: ClientSession,
        api_key: str | None = None,
        url: str = DIGITRANSIT_ROUTING_URL,
        language: str = "fi",
        timeout_seconds: float = 10.0,
        rate_limiter: ApiRateLimiter | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            session: Shared aiohttp session.
            api_key: Digitransit subscription key.
            url: GraphQL endpoint.
            language: Accept-Language for translated names (fi, sv or en).
            timeout_seconds: Total timeout per request.
            rate_limiter: Limiter shared by all requests of this client.
        """
        self._session = session
        self._api_key = api_key
        self._url = url
        self._language = language
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._rate_limiter = rate_limiter or ApiRateLimiter("digitransit")

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/graphql",
            "Accept": "application/json",
            "Accept-Language": self._language,
        }

    def _params(self) -> dict[str, str]:
        return {SUBSCRIPTION_KEY_PARAM: self._api_key} if self._api_key else {}

    async def execute(self, query: str) -> dict[str, Any]:
        """Execute a GraphQL query.

        Returns:
            The decoded response body.

        Raises:
            DigitransitApiError: On non-200 status, non-object body or GraphQL errors.
            aiohttp.ClientError: On transport failures.
            asyncio.TimeoutError: When the request times out.
        """
        headers = self._headers()
        params = self._params()
        log_graphql_request(self._url, query, headers, params=params)

        async with self._rate_limiter:
            async with self._session.post(
                self._url,
                data=query.encode("utf-8"),
                headers=headers,
                params=params,
                timeout=self._timeout,
            ) as response:
                if response.status != 200:
                    response_text = await response.text()
                    raise DigitransitApiError(
                        f"Digitransit API returned status {response.status}: {response_text[:200]}"
                    )
                body = await response.json(content_type=None)

        if not isinstance(body, dict):
            raise DigitransitApiError("Digitransit API returned a non-object body")
        errors = body.get("errors")
        if errors:
            raise DigitransitApiError(f"GraphQL errors: {errors}")
        return body
