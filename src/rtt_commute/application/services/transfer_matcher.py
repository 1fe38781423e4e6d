"""Transfer matching for a fixed origin -> interchange -> destination chain."""

import asyncio
import logging
from datetime import date
from typing import TYPE_CHECKING

from rtt_commute.application.services.service_status_service import ServiceStatusService
from rtt_commute.application.services.status_classifier import StatusClassifier
from rtt_commute.domain.civil_clock import (
    MINUTES_PER_DAY,
    from_minutes,
    minutes_between,
    to_minutes,
)
from rtt_commute.domain.errors import ProviderError
from rtt_commute.domain.models.service import Service, ServiceCandidate
from rtt_commute.domain.models.tracker_configuration import TransferConfiguration
from rtt_commute.domain.models.transfer import FirstLegOption, Leg, TransferBoard, TransferOption

if TYPE_CHECKING:
    from rtt_commute.domain.ports import TimetableRepository

logger = logging.getLogger(__name__)


def _departure_minutes(candidate: ServiceCandidate) -> int | None:
    try:
        return to_minutes(candidate.booked_departure) if candidate.booked_departure else None
    except ValueError:
        return None


class TransferMatcher:
    """Builds the transfer board for one operative date.

    First legs are taken in ascending booked departure within the window.
    Each is paired with the earliest feasible onward legs at the interchange.
    Provider order after sorting is kept; no other ranking is applied. A
    failed lookup only drops the leg, connection or direct option it belongs to.
    """

    def __init__(
        self,
        repository: "TimetableRepository",
        classifier: StatusClassifier,
        config: TransferConfiguration,
        status_service: ServiceStatusService | None = None,
    ) -> None:
        """Initialize the matcher.

        Args:
            repository: Remote timetable lookups.
            classifier: Status classifier for each leg.
            config: The transfer chain and its connection bounds.
            status_service: Used for the optional direct service lookup.
        """
        self._repository = repository
        self._classifier = classifier
        self._config = config
        self._status_service = status_service or ServiceStatusService(repository, classifier)

    async def build_board(self, day: date) -> TransferBoard:
        """Find the direct option and the first legs with their connections."""
        direct, first_leg_candidates = await asyncio.gather(
            self._direct_leg(day), self._first_leg_candidates(day)
        )
        options = await asyncio.gather(
            *(self._first_leg_option(candidate, day) for candidate in first_leg_candidates)
        )
        first_legs = tuple(option for option in options if option is not None)
        logger.info(
            f"Transfer board for {day}: {len(first_legs)} first leg(s), "
            f"{sum(len(o.connections) for o in first_legs)} connection(s), "
            f"direct={'yes' if direct else 'no'}"
        )
        return TransferBoard(date=day, direct=direct, first_legs=first_legs)

    async def _direct_leg(self, day: date) -> Leg | None:
        cfg = self._config
        if not cfg.direct_anchor:
            return None
        try:
            result = await self._status_service.resolve(
                cfg.origin_code, cfg.destination_code, day, cfg.direct_anchor
            )
        except ProviderError as e:
            logger.warning(f"Direct option lookup failed, skipping: {e}")
            return None
        if not result.found or result.service_id is None or result.run_date is None:
            return None
        return Leg(
            service_id=result.service_id,
            run_date=result.run_date,
            departure_call=result.origin_call,
            arrival_call=result.destination_call,
            status=result.status,
        )

    async def _first_leg_candidates(self, day: date) -> list[ServiceCandidate]:
        cfg = self._config
        candidates = await self._repository.search(
            cfg.origin_code, cfg.interchange_code, day, cfg.window_start
        )
        window_start = to_minutes(cfg.window_start)
        window_end = to_minutes(cfg.window_end)

        in_window = [
            (minutes, candidate)
            for candidate in candidates
            if (minutes := _departure_minutes(candidate)) is not None
            and window_start < minutes <= window_end
        ]
        in_window.sort(key=lambda item: item[0])
        kept = [candidate for _, candidate in in_window[: cfg.max_first_legs]]
        logger.debug(
            f"First legs {cfg.origin_code}->{cfg.interchange_code}: "
            f"{len(candidates)} found, {len(in_window)} in window, {len(kept)} kept"
        )
        return kept

    def _leg(self, service: Service, from_code: str, to_code: str) -> Leg:
        departure_call = service.call_at(from_code)
        arrival_call = service.call_at(to_code)
        return Leg(
            service_id=service.service_id,
            run_date=service.run_date,
            departure_call=departure_call,
            arrival_call=arrival_call,
            status=self._classifier.classify(departure_call, arrival_call),
        )

    async def _first_leg_option(
        self, candidate: ServiceCandidate, day: date
    ) -> FirstLegOption | None:
        cfg = self._config
        run_date = candidate.run_date or day
        try:
            service = await self._repository.detail(candidate.service_id, run_date)
        except ProviderError as e:
            logger.warning(f"Skipping first leg {candidate.service_id} on {run_date}: {e}")
            return None

        if not service.reaches(cfg.origin_code, cfg.interchange_code):
            logger.info(f"First leg {service.service_id} does not call at {cfg.interchange_code}")
            return None

        leg = self._leg(service, cfg.origin_code, cfg.interchange_code)
        if leg.arrival is None:
            logger.info(f"First leg {service.service_id} has no arrival time at the interchange")
            return FirstLegOption(leg=leg)

        try:
            connections = await self._connections(leg, day)
        except ProviderError as e:
            logger.warning(f"Onward search after {service.service_id} failed, skipping: {e}")
            connections = ()
        return FirstLegOption(leg=leg, connections=connections)

    def _wait_is_feasible(self, wait: int | None) -> bool:
        cfg = self._config
        return wait is not None and cfg.min_connection_minutes <= wait <= cfg.max_connection_minutes

    async def _connections(self, first_leg: Leg, day: date) -> tuple[TransferOption, ...]:
        cfg = self._config
        arrival = first_leg.arrival
        if arrival is None:
            return ()

        earliest = to_minutes(arrival) + cfg.min_connection_minutes
        if earliest >= MINUTES_PER_DAY:
            logger.info(f"Connection after {first_leg.service_id} would run past midnight")
            return ()

        candidates = await self._repository.search(
            cfg.interchange_code, cfg.destination_code, day, from_minutes(earliest)
        )

        feasible: list[tuple[int, ServiceCandidate]] = []
        for candidate in candidates:
            departure = candidate.effective_departure
            try:
                wait = minutes_between(arrival, departure) if departure else None
            except ValueError:
                wait = None
            if wait is not None and self._wait_is_feasible(wait):
                feasible.append((wait, candidate))
        feasible.sort(key=lambda item: item[0])

        accepted: list[TransferOption] = []
        for _, candidate in feasible:
            if len(accepted) >= cfg.max_second_legs:
                break
            run_date = candidate.run_date or day
            try:
                service = await self._repository.detail(candidate.service_id, run_date)
            except ProviderError as e:
                logger.warning(f"Skipping connection {candidate.service_id} on {run_date}: {e}")
                continue
            if not service.reaches(cfg.interchange_code, cfg.destination_code):
                logger.debug(
                    f"Connection {service.service_id} does not reach {cfg.destination_code}"
                )
                continue

            option = TransferOption(
                first_leg=first_leg,
                second_leg=self._leg(service, cfg.interchange_code, cfg.destination_code),
            )
            if not self._wait_is_feasible(option.wait_minutes):
                logger.debug(
                    f"Connection {service.service_id} rejected, wait {option.wait_minutes} min"
                )
                continue
            accepted.append(option)

        return tuple(accepted)
