"""Digitransit (HSL) GraphQL API adapters."""

from hsl_departures.adapters.digitransit_api.digitransit_departure_repository import (
    DigitransitDepartureRepository,
)
from hsl_departures.adapters.digitransit_api.digitransit_stop_repository import (
    DigitransitStopRepository,
)
from hsl_departures.adapters.digitransit_api.graphql_client import (
    DigitransitApiError,
    DigitransitGraphQLClient,
)

__all__ = [
    "DigitransitApiError",
    "DigitransitDepartureRepository",
    "DigitransitGraphQLClient",
    "DigitransitStopRepository",
]
