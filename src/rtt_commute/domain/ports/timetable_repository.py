"""Timetable repository port."""

from datetime import date
from typing import Protocol

from rtt_commute.domain.models.service import Service, ServiceCandidate


class TimetableRepository(Protocol):
    """Port for looking up services from a remote timetable provider."""

    async def search(
        self, origin: str, destination: str, day: date, hhmm: str
    ) -> list[ServiceCandidate]:
        """Search services leaving origin around a time, in provider order."""
        ...

    async def detail(self, service_id: str, day: date) -> Service:
        """Get the full call pattern of one service."""
        ...
