"""Lookup and classification of a single booked service."""

import logging
from datetime import date
from typing import TYPE_CHECKING

from rtt_commute.application.services.status_classifier import StatusClassifier
from rtt_commute.domain.errors import ProviderError
from rtt_commute.domain.models.service import ServiceCandidate
from rtt_commute.domain.models.status import StatusResult

if TYPE_CHECKING:
    from rtt_commute.domain.ports import TimetableRepository

logger = logging.getLogger(__name__)


class ServiceStatusService:
    """Finds the service booked at a given time and classifies its running."""

    def __init__(
        self,
        repository: "TimetableRepository",
        classifier: StatusClassifier,
        max_candidates: int = 3,
    ) -> None:
        """Initialize with a timetable repository and classifier.

        Args:
            repository: Remote timetable lookups.
            classifier: Status classifier.
            max_candidates: Search hits to try before giving up with not_found.
        """
        self._repository = repository
        self._classifier = classifier
        self._max_candidates = max_candidates

    @staticmethod
    def order_candidates(
        candidates: list[ServiceCandidate], booked_departure: str
    ) -> list[ServiceCandidate]:
        """Put candidates booked exactly at the requested time first, keeping provider order."""
        exact = [c for c in candidates if c.booked_departure == booked_departure]
        rest = [c for c in candidates if c.booked_departure != booked_departure]
        return exact + rest

    async def resolve(
        self, origin: str, destination: str, day: date, booked_departure: str
    ) -> StatusResult:
        """Search, fetch detail and classify the booked service on one date.

        Provider failures on the search propagate. A failed or unsuitable
        detail lookup only skips that candidate.

        Returns:
            The classified result, or a not_found result if no candidate
            calls at the destination after the origin.
        """
        candidates = await self._repository.search(origin, destination, day, booked_departure)
        if not candidates:
            logger.info(f"No services found {origin}->{destination} on {day} at {booked_departure}")
            return StatusResult.not_found()

        ordered = self.order_candidates(candidates, booked_departure)
        for candidate in ordered[: self._max_candidates]:
            run_date = candidate.run_date or day
            try:
                service = await self._repository.detail(candidate.service_id, run_date)
            except ProviderError as e:
                logger.warning(f"Skipping {candidate.service_id} on {run_date}: {e}")
                continue

            if not service.reaches(origin, destination):
                logger.debug(f"Service {service.service_id} does not reach {destination}")
                continue

            origin_call = service.call_at(origin)
            destination_call = service.call_at(destination)
            status = self._classifier.classify(origin_call, destination_call)
            logger.info(
                f"Service {service.service_id} on {service.run_date} "
                f"{origin}->{destination}: {status}"
            )
            return StatusResult(
                status=status,
                origin_call=origin_call,
                destination_call=destination_call,
                service_id=service.service_id,
                run_date=service.run_date,
            )

        logger.info(f"No candidate for {origin}->{destination} on {day} reaches the destination")
        return StatusResult.not_found()
