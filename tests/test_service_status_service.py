"""Tests for the booked service status lookup."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from rtt_commute.application.services import ServiceStatusService, StatusClassifier
from rtt_commute.domain.errors import NotFoundError, TransientProviderError
from rtt_commute.domain.models import Service, ServiceCandidate, ServiceStatus, StopCall

DAY = date(2024, 3, 15)


def _service(service_id: str, *calls: StopCall, run_date: date = DAY) -> Service:
    return Service(service_id=service_id, run_date=run_date, calls=calls)


def _rdg_pad(service_id: str, observed_arrival: str | None = None) -> Service:
    return _service(
        service_id,
        StopCall(location_code="RDG", booked_departure="0744"),
        StopCall(location_code="PAD", booked_arrival="0820", observed_arrival=observed_arrival),
    )


def _repository(
    candidates: list[ServiceCandidate], services: dict[str, Service | Exception]
) -> AsyncMock:
    repository = AsyncMock()
    repository.search.return_value = candidates

    async def detail(service_id: str, day: date) -> Service:  # noqa: ARG001
        result = services[service_id]
        if isinstance(result, Exception):
            raise result
        return result

    repository.detail.side_effect = detail
    return repository


class TestServiceStatusService:
    """Tests for ServiceStatusService.resolve."""

    @pytest.mark.asyncio
    async def test_classifies_the_booked_service(self) -> None:
        """Given a matching service arriving 5 minutes late, then it is delayed."""
        repository = _repository(
            [ServiceCandidate("W1", "0744")], {"W1": _rdg_pad("W1", observed_arrival="0825")}
        )
        service = ServiceStatusService(repository, StatusClassifier())

        result = await service.resolve("RDG", "PAD", DAY, "0744")

        assert result.status is ServiceStatus.DELAYED
        assert result.service_id == "W1"
        assert result.run_date == DAY
        assert result.destination_call is not None
        assert result.destination_call.arrival_delay_minutes == 5
        repository.search.assert_awaited_once_with("RDG", "PAD", DAY, "0744")

    @pytest.mark.asyncio
    async def test_empty_search_is_not_found(self) -> None:
        """Given no search results, when resolving, then the result is not_found."""
        repository = _repository([], {})
        service = ServiceStatusService(repository, StatusClassifier())

        result = await service.resolve("RDG", "PAD", DAY, "0744")

        assert result.status is ServiceStatus.NOT_FOUND
        repository.detail.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_prefers_exact_booked_time(self) -> None:
        """Given an earlier hit and one booked at the exact time, then the exact one is used."""
        repository = _repository(
            [ServiceCandidate("W0", "0740"), ServiceCandidate("W1", "0744")],
            {"W0": _rdg_pad("W0"), "W1": _rdg_pad("W1", observed_arrival="0825")},
        )
        service = ServiceStatusService(repository, StatusClassifier())

        result = await service.resolve("RDG", "PAD", DAY, "0744")

        assert result.service_id == "W1"

    @pytest.mark.asyncio
    async def test_skips_service_not_reaching_destination(self) -> None:
        """Given a first hit that terminates short, then the next hit is used."""
        short = _service("W1", StopCall(location_code="RDG"), StopCall(location_code="TWY"))
        repository = _repository(
            [ServiceCandidate("W1", "0744"), ServiceCandidate("W2", "0744")],
            {"W1": short, "W2": _rdg_pad("W2")},
        )
        service = ServiceStatusService(repository, StatusClassifier())

        result = await service.resolve("RDG", "PAD", DAY, "0744")

        assert result.service_id == "W2"
        assert result.status is ServiceStatus.ON_TIME

    @pytest.mark.asyncio
    async def test_skips_failed_detail_lookup(self) -> None:
        """Given a failing detail lookup for the first hit, then the next hit is used."""
        repository = _repository(
            [ServiceCandidate("W1", "0744"), ServiceCandidate("W2", "0744")],
            {"W1": TransientProviderError("HTTP 500"), "W2": _rdg_pad("W2")},
        )
        service = ServiceStatusService(repository, StatusClassifier())

        result = await service.resolve("RDG", "PAD", DAY, "0744")

        assert result.service_id == "W2"

    @pytest.mark.asyncio
    async def test_gives_up_after_max_candidates(self) -> None:
        """Given more failing hits than the limit, then it is not_found after the limit."""
        candidates = [ServiceCandidate(f"W{i}", "0744") for i in range(5)]
        repository = _repository(
            candidates, {c.service_id: NotFoundError("gone") for c in candidates}
        )
        service = ServiceStatusService(repository, StatusClassifier(), max_candidates=2)

        result = await service.resolve("RDG", "PAD", DAY, "0744")

        assert result.status is ServiceStatus.NOT_FOUND
        assert repository.detail.await_count == 2

    @pytest.mark.asyncio
    async def test_uses_candidate_run_date(self) -> None:
        """Given a hit with its own run date, then the detail lookup uses that date."""
        previous_day = date(2024, 3, 14)
        repository = _repository(
            [ServiceCandidate("W1", "0744", run_date=previous_day)],
            {"W1": _rdg_pad("W1")},
        )
        service = ServiceStatusService(repository, StatusClassifier())

        await service.resolve("RDG", "PAD", DAY, "0744")

        repository.detail.assert_awaited_once_with("W1", previous_day)

    @pytest.mark.asyncio
    async def test_search_failure_propagates(self) -> None:
        """Given a failing search, when resolving, then the error propagates."""
        repository = AsyncMock()
        repository.search.side_effect = TransientProviderError("HTTP 503", status_code=503)
        service = ServiceStatusService(repository, StatusClassifier())

        with pytest.raises(TransientProviderError):
            await service.resolve("RDG", "PAD", DAY, "0744")

    def test_order_candidates_keeps_provider_order(self) -> None:
        """Given several hits, then exact matches come first in provider order."""
        candidates = [
            ServiceCandidate("A", "0740"),
            ServiceCandidate("B", "0744"),
            ServiceCandidate("C", "0750"),
            ServiceCandidate("D", "0744"),
        ]

        ordered = ServiceStatusService.order_candidates(candidates, "0744")

        assert [c.service_id for c in ordered] == ["B", "D", "A", "C"]
