"""Timetable repository adapter for the Realtime Trains (RTT) API.

API Documentation: https://www.realtimetrains.co.uk/about/developer/pull/docs/
"""

import logging
from datetime import date

from rtt_commute.adapters.rtt_api.http_client import RttHttpClient
from rtt_commute.adapters.rtt_api.service_parser import RttServiceParser
from rtt_commute.domain.civil_clock import shift_date
from rtt_commute.domain.errors import NotFoundError
from rtt_commute.domain.models.service import Service, ServiceCandidate
from rtt_commute.domain.ports.timetable_repository import TimetableRepository

logger = logging.getLogger(__name__)

# Offsets tried, in order, when a service is not found on the requested date
DETAIL_DATE_OFFSETS = (0, -1, 1)


class RttTimetableRepository(TimetableRepository):
    """Adapter for timetable lookups using the RTT pull API."""

    def __init__(self, http_client: RttHttpClient) -> None:
        """Initialize with an RTT HTTP client.

        Args:
            http_client: Client performing authenticated requests.
        """
        self._http_client = http_client

    async def search(
        self, origin: str, destination: str, day: date, hhmm: str
    ) -> list[ServiceCandidate]:
        """Search services from origin to destination departing around hhmm.

        A not-found response is an empty result.
        """
        try:
            data = await self._http_client.search_services(origin, destination, day, hhmm)
        except NotFoundError:
            logger.debug(f"No services {origin}->{destination} on {day} around {hhmm}")
            return []

        candidates = RttServiceParser.parse_candidates(data)
        logger.debug(
            f"Search {origin}->{destination} on {day} from {hhmm}: {len(candidates)} service(s)"
        )
        return candidates

    async def detail(self, service_id: str, day: date) -> Service:
        """Fetch the calls of one service run.

        Services that run over midnight are indexed by the provider under
        their start date, so a not-found on the requested date is retried on
        the previous and then the next day. Other errors are not retried.

        Raises:
            NotFoundError: The service is unknown on all three dates.
        """
        tried: list[date] = []
        for offset in DETAIL_DATE_OFFSETS:
            candidate_date = shift_date(day, offset)
            try:
                data = await self._http_client.service_detail(service_id, candidate_date)
            except NotFoundError:
                logger.debug(f"Service {service_id} not found on {candidate_date}")
                tried.append(candidate_date)
                continue

            if candidate_date != day:
                logger.info(f"Service {service_id} found on {candidate_date} instead of {day}")
            return RttServiceParser.parse_service(data, candidate_date)

        raise NotFoundError(
            f"Service {service_id} not found on " + ", ".join(str(d) for d in tried)
        )
