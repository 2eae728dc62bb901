"""Conversion of Digitransit GraphQL responses into domain models."""

import logging
from collections import Counter
from datetime import UTC, datetime
from typing import Any

from hsl_departures.adapters.digitransit_api.constants import (
    MAX_HEADSIGNS_PER_STOP_ID,
    MISSING_HEADSIGN,
)
from hsl_departures.adapters.digitransit_api.response_models import (
    DepartureTimesQueryResponse,
    HeadsignsQueryResponse,
    StopsQueryResponse,
)
from hsl_departures.domain.models.departure import Departure
from hsl_departures.domain.models.stop import Stop

logger = logging.getLogger(__name__)


def _timestamp(service_day: int, seconds: int) -> datetime:
    return datetime.fromtimestamp(service_day + seconds, tz=UTC)


def primary_mode(route_counts: Counter[str]) -> str | None:
    """Mode served by the most routes; ties go to the alphabetically first mode."""
    if not route_counts:
        return None
    return min(route_counts.items(), key=lambda item: (-item[1], item[0]))[0]


def parse_departures(body: dict[str, Any]) -> list[Departure]:
    """Parse a departures query response.

    The scheduled time is the departure time; the realtime prediction is kept
    separately. Raises pydantic ``ValidationError`` on malformed bodies.
    """
    response = DepartureTimesQueryResponse.model_validate(body)
    if response.data.stop is None:
        return []

    departures = []
    for stoptime in response.data.stop.stoptimesWithoutPatterns:
        departures.append(
            Departure(
                departure_time=_timestamp(stoptime.serviceDay, stoptime.scheduledDeparture),
                route_short_name=stoptime.trip.route.shortName,
                headsign=stoptime.headsign or MISSING_HEADSIGN,
                mode=stoptime.trip.route.mode,
                delay_seconds=stoptime.departureDelay,
                realtime_departure_time=_timestamp(
                    stoptime.serviceDay, stoptime.realtimeDeparture
                ),
                platform_code=stoptime.stop.platformCode if stoptime.stop else None,
                has_realtime_data=stoptime.realtime,
                realtime_state=stoptime.realtimeState,
            )
        )
    return departures


def parse_headsigns(body: dict[str, Any], limit: int = MAX_HEADSIGNS_PER_STOP_ID) -> list[str]:
    """Parse a headsigns query response into unique non-empty headsigns, first-seen order."""
    response = HeadsignsQueryResponse.model_validate(body)
    if response.data.stop is None:
        return []
    headsigns = [st.headsign for st in response.data.stop.stoptimesWithoutPatterns if st.headsign]
    return list(dict.fromkeys(headsigns))[:limit]


def parse_stops(body: dict[str, Any]) -> list[Stop]:
    """Parse the stop directory, merging platforms that share a stop code.

    Stops without a code are skipped. A merged stop keeps the latest ID and
    name, collects every platform ID in ``all_stop_ids``, unions vehicle
    modes and derives ``primary_mode`` from route counts per mode.
    """
    response = StopsQueryResponse.model_validate(body)
    logger.debug(f"Received {len(response.data.stops)} stops from API")

    stops_by_code: dict[str, Stop] = {}
    route_counts_by_code: dict[str, Counter[str]] = {}

    for info in response.data.stops:
        if not info.code:
            continue
        code = info.code

        counts = route_counts_by_code.setdefault(code, Counter())
        modes = {route.mode for route in info.routes or []}
        counts.update(route.mode for route in info.routes or [])

        existing = stops_by_code.get(code)
        if existing is None:
            stops_by_code[code] = Stop(
                id=info.gtfsId,
                name=info.name,
                code=code,
                latitude=info.lat,
                longitude=info.lon,
                vehicle_modes=frozenset(modes) if modes else None,
                all_stop_ids=[info.gtfsId],
                primary_mode=primary_mode(counts),
            )
            continue

        merged_modes = set(existing.vehicle_modes or ()) | modes
        all_ids = [*(existing.all_stop_ids or [existing.id]), info.gtfsId]
        stops_by_code[code] = Stop(
            id=info.gtfsId,
            name=info.name,
            code=code,
            latitude=info.lat if info.lat is not None else existing.latitude,
            longitude=info.lon if info.lon is not None else existing.longitude,
            vehicle_modes=frozenset(merged_modes) if merged_modes else None,
            all_stop_ids=all_ids,
            primary_mode=primary_mode(counts),
        )
        logger.debug(f"Merging {code}: collected IDs {all_ids}")

    result = list(stops_by_code.values())
    logger.debug(f"Returning {len(result)} stops after deduplication")
    return result
