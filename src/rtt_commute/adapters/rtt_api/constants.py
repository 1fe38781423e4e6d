"""Constants for the Realtime Trains (RTT) API adapter.

API Documentation: https://www.realtimetrains.co.uk/about/developer/pull/docs/

Authentication: HTTP Basic with API credentials on every request.
"""

RTT_DEFAULT_BASE_URL = "https://api.rtt.io/api/v1"

# GET {base}/json/search/{origin}/to/{destination}/{yyyy}/{mm}/{dd}/{hhmm}
SEARCH_PATH = "/json/search/{origin}/to/{destination}/{date_path}/{hhmm}"
# GET {base}/json/service/{uid}/{yyyy}/{mm}/{dd}
SERVICE_PATH = "/json/service/{service_uid}/{date_path}"

DEFAULT_HEADERS = {
    "Accept": "application/json",
}

# Search hits and service detail share these location fields
BOOKED_ARRIVAL_FIELD = "gbttBookedArrival"
BOOKED_DEPARTURE_FIELD = "gbttBookedDeparture"
REALTIME_ARRIVAL_FIELD = "realtimeArrival"
REALTIME_DEPARTURE_FIELD = "realtimeDeparture"
REALTIME_ARRIVAL_ACTUAL_FIELD = "realtimeArrivalActual"
REALTIME_DEPARTURE_ACTUAL_FIELD = "realtimeDepartureActual"

# displayAs values marking a cancelled call
CANCELLED_DISPLAY_VALUES = {"CANCELLED_CALL", "CANCELLED_PASS"}
