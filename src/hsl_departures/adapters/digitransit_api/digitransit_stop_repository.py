"""Digitransit stop repository adapter."""

import asyncio
import logging

import aiohttp
from pydantic import ValidationError

from hsl_departures.adapters.digitransit_api.constants import (
    HEADSIGN_SAMPLE_DEPARTURES,
    HEADSIGNS_QUERY,
    STOPS_QUERY,
)
from hsl_departures.adapters.digitransit_api.graphql_client import (
    DigitransitApiError,
    DigitransitGraphQLClient,
)
from hsl_departures.adapters.digitransit_api.response_parser import (
    parse_headsigns,
    parse_stops,
)
from hsl_departures.domain.models.stop import Stop
from hsl_departures.domain.ports.stop_repository import StopRepository

logger = logging.getLogger(__name__)


class DigitransitStopRepository(StopRepository):
    """Fetches the stop directory and headsigns from the HSL routing API.

    Failures are logged and reported as empty results.
    """

    def __init__(self, client: DigitransitGraphQLClient) -> None:
        """Initialize with a GraphQL client."""
        self._client = client

    async def fetch_all_stops(self) -> list[Stop]:
        """Fetch all stops, merged by stop code."""
        try:
            body = await self._client.execute(STOPS_QUERY)
            return parse_stops(body)
        except (aiohttp.ClientError, asyncio.TimeoutError, DigitransitApiError) as e:
            logger.warning(f"Error requesting stops: {e}")
        except (ValidationError, ValueError) as e:
            logger.warning(f"Failed to decode stops response: {e}")
        return []

    async def fetch_headsigns(self, stop_id: str) -> list[str]:
        """Fetch up to three unique headsigns served from a stop ID."""
        query = HEADSIGNS_QUERY % {"stop_id": stop_id, "count": HEADSIGN_SAMPLE_DEPARTURES}
        try:
            body = await self._client.execute(query)
            return parse_headsigns(body)
        except (aiohttp.ClientError, asyncio.TimeoutError, DigitransitApiError) as e:
            logger.debug(f"Error fetching headsigns for stop {stop_id}: {e}")
        except (ValidationError, ValueError) as e:
            logger.debug(f"Failed to decode headsigns for stop {stop_id}: {e}")
        return []
