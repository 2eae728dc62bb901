"""Tests for the Digitransit departure and stop repositories."""

import asyncio
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from hsl_departures.adapters.digitransit_api import (
    DigitransitApiError,
    DigitransitDepartureRepository,
    DigitransitStopRepository,
)

SERVICE_DAY = int(datetime(2024, 5, 14, tzinfo=UTC).timestamp())

DEPARTURES_BODY = {
    "data": {
        "stop": {
            "stoptimesWithoutPatterns": [
                {
                    "scheduledDeparture": 30000,
                    "realtimeDeparture": 30060,
                    "realtime": True,
                    "realtimeState": "UPDATED",
                    "serviceDay": SERVICE_DAY,
                    "departureDelay": 60,
                    "headsign": "Kamppi",
                    "stop": {"platformCode": None},
                    "trip": {"route": {"mode": "BUS", "shortName": "55"}},
                }
            ]
        }
    }
}


def _client(result: object = None, error: BaseException | None = None) -> MagicMock:
    client = MagicMock()
    client.execute = AsyncMock(return_value=result, side_effect=error)
    return client


@pytest.mark.asyncio
async def test_fetch_departures_queries_stop_and_count() -> None:
    """Given a stop ID, when fetching departures, then the query names it and the count."""
    client = _client(DEPARTURES_BODY)

    departures = await DigitransitDepartureRepository(client).fetch_departures("HSL:1020453", 5)

    query = client.execute.call_args[0][0]
    assert 'stop(id: "HSL:1020453")' in query
    assert "numberOfDepartures: 5" in query
    assert [d.route_short_name for d in departures] == ["55"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        aiohttp.ClientError("connection reset"),
        asyncio.TimeoutError(),
        DigitransitApiError("status 500"),
    ],
)
async def test_fetch_departures_failures_yield_empty_list(error: BaseException) -> None:
    """Given a transport failure, when fetching departures, then an empty list."""
    repository = DigitransitDepartureRepository(_client(error=error))

    assert await repository.fetch_departures("HSL:1") == []


@pytest.mark.asyncio
async def test_fetch_departures_malformed_body_yields_empty_list() -> None:
    """Given a malformed body, when fetching departures, then an empty list."""
    repository = DigitransitDepartureRepository(_client({"data": {"stop": {"oops": 1}}}))

    assert await repository.fetch_departures("HSL:1") == []


@pytest.mark.asyncio
async def test_fetch_all_stops_parses_directory() -> None:
    """Given a stops body, when fetching, then merged stops are returned."""
    body = {
        "data": {
            "stops": [
                {"gtfsId": "HSL:1", "name": "Kamppi", "code": "H1", "lat": 60.1, "lon": 24.9},
                {"gtfsId": "HSL:2", "name": "Kamppi", "code": "H1", "lat": 60.1, "lon": 24.9},
            ]
        }
    }

    stops = await DigitransitStopRepository(_client(body)).fetch_all_stops()

    assert [s.all_stop_ids for s in stops] == [["HSL:1", "HSL:2"]]


@pytest.mark.asyncio
async def test_fetch_all_stops_failure_yields_empty_list() -> None:
    """Given a failing request, when fetching stops, then an empty list."""
    repository = DigitransitStopRepository(_client(error=aiohttp.ClientError("down")))

    assert await repository.fetch_all_stops() == []


@pytest.mark.asyncio
async def test_fetch_headsigns_samples_ten_departures() -> None:
    """Given a stop ID, when fetching headsigns, then ten departures are sampled."""
    body = {"data": {"stop": {"stoptimesWithoutPatterns": [{"headsign": "Pasila"}]}}}
    client = _client(body)

    headsigns = await DigitransitStopRepository(client).fetch_headsigns("HSL:1")

    assert headsigns == ["Pasila"]
    assert "numberOfDepartures: 10" in client.execute.call_args[0][0]


@pytest.mark.asyncio
async def test_fetch_headsigns_failure_yields_empty_list() -> None:
    """Given a GraphQL error, when fetching headsigns, then an empty list."""
    repository = DigitransitStopRepository(_client(error=DigitransitApiError("bad id")))

    assert await repository.fetch_headsigns("HSL:1") == []
