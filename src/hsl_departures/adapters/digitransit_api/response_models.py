"""Pydantic models of Digitransit GraphQL responses."""

from pydantic import BaseModel, ConfigDict


class _ApiModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class RouteMode(_ApiModel):
    mode: str


class StopInfo(_ApiModel):
    gtfsId: str  # noqa: N815
    name: str
    code: str | None = None
    lat: float | None = None
    lon: float | None = None
    routes: list[RouteMode] | None = None


class StopsData(_ApiModel):
    stops: list[StopInfo]


class StopsQueryResponse(_ApiModel):
    data: StopsData


class HeadsignStoptime(_ApiModel):
    headsign: str | None = None


class HeadsignStop(_ApiModel):
    stoptimesWithoutPatterns: list[HeadsignStoptime]  # noqa: N815


class HeadsignsData(_ApiModel):
    stop: HeadsignStop | None = None


class HeadsignsQueryResponse(_ApiModel):
    data: HeadsignsData


class Route(_ApiModel):
    mode: str | None = None
    shortName: str = ""  # noqa: N815


class Trip(_ApiModel):
    route: Route


class StoptimeStop(_ApiModel):
    platformCode: str | None = None  # noqa: N815


class Stoptime(_ApiModel):
    """One departure; times are seconds since the start of ``serviceDay``."""

    scheduledDeparture: int  # noqa: N815
    realtimeDeparture: int  # noqa: N815
    serviceDay: int  # noqa: N815
    departureDelay: int = 0  # noqa: N815
    realtime: bool = False
    realtimeState: str | None = None  # noqa: N815
    headsign: str | None = None
    stop: StoptimeStop | None = None
    trip: Trip


class DepartureStop(_ApiModel):
    stoptimesWithoutPatterns: list[Stoptime]  # noqa: N815


class DeparturesData(_ApiModel):
    stop: DepartureStop | None = None


class DepartureTimesQueryResponse(_ApiModel):
    data: DeparturesData
