"""Digitransit departure repository adapter."""

import asyncio
import logging

import aiohttp
from pydantic import ValidationError

from hsl_departures.adapters.digitransit_api.constants import DEPARTURES_QUERY
from hsl_departures.adapters.digitransit_api.graphql_client import (
    DigitransitApiError,
    DigitransitGraphQLClient,
)
from hsl_departures.adapters.digitransit_api.response_parser import parse_departures
from hsl_departures.domain.models.departure import Departure
from hsl_departures.domain.ports.departure_repository import DepartureRepository

logger = logging.getLogger(__name__)


class DigitransitDepartureRepository(DepartureRepository):
    """Fetches stop departures from the HSL routing API.

    Transport and decoding failures are logged and reported as no departures.
    """

    def __init__(self, client: DigitransitGraphQLClient) -> None:
        """Initialize with a GraphQL client."""
        self._client = client

    async def fetch_departures(self, stop_id: str, max_results: int = 12) -> list[Departure]:
        """Fetch upcoming departures for a stop, unsorted."""
        query = DEPARTURES_QUERY % {"stop_id": stop_id, "count": max_results}
        try:
            body = await self._client.execute(query)
            departures = parse_departures(body)
        except (aiohttp.ClientError, asyncio.TimeoutError, DigitransitApiError) as e:
            logger.warning(f"Error fetching departures for stop {stop_id}: {e}")
            return []
        except (ValidationError, ValueError) as e:
            logger.warning(f"Failed to decode departures for stop {stop_id}: {e}")
            return []

        for departure in departures:
            logger.debug(
                f"{departure.route_short_name} scheduled={departure.departure_time:%H:%M:%S} "
                f"realtime={departure.realtime_departure_time:%H:%M:%S} "
                f"delay={departure.delay_seconds}s realtime_state={departure.realtime_state}"
            )
        logger.debug(f"Fetched {len(departures)} departures for stop {stop_id}")
        return departures
