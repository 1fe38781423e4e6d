"""RTT API adapters for Realtime Trains."""

from rtt_commute.adapters.rtt_api.http_client import RttHttpClient
from rtt_commute.adapters.rtt_api.rtt_timetable_repository import RttTimetableRepository
from rtt_commute.adapters.rtt_api.service_parser import RttServiceParser

__all__ = ["RttHttpClient", "RttServiceParser", "RttTimetableRepository"]
