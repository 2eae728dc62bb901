"""Constants for the Digitransit (HSL) routing API."""

DIGITRANSIT_ROUTING_URL = "https://api.digitransit.fi/routing/v2/hsl/gtfs/v1"
SUBSCRIPTION_KEY_PARAM = "digitransit-subscription-key"

HEADSIGN_SAMPLE_DEPARTURES = 10
MAX_HEADSIGNS_PER_STOP_ID = 3
MISSING_HEADSIGN = "No headsign"

STOPS_QUERY = """
{
  stops {
    gtfsId
    name
    code
    lat
    lon
    routes {
      mode
    }
  }
}
"""

HEADSIGNS_QUERY = """
{
  stop(id: "%(stop_id)s") {
    stoptimesWithoutPatterns(numberOfDepartures: %(count)d) {
      headsign
    }
  }
}
"""

DEPARTURES_QUERY = """
{
  stop(id: "%(stop_id)s") {
    stoptimesWithoutPatterns(numberOfDepartures: %(count)d) {
      scheduledDeparture
      realtimeDeparture
      realtime
      realtimeState
      serviceDay
      departureDelay
      headsign
      stop {
        platformCode
      }
      trip {
        route {
          mode
          shortName
        }
      }
    }
  }
}
"""
