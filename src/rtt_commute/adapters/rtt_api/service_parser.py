"""Parser for Realtime Trains search and service responses."""

import logging
from datetime import date
from typing import Any

from rtt_commute.adapters.rtt_api.constants import (
    BOOKED_ARRIVAL_FIELD,
    BOOKED_DEPARTURE_FIELD,
    CANCELLED_DISPLAY_VALUES,
    REALTIME_ARRIVAL_ACTUAL_FIELD,
    REALTIME_ARRIVAL_FIELD,
    REALTIME_DEPARTURE_ACTUAL_FIELD,
    REALTIME_DEPARTURE_FIELD,
)
from rtt_commute.domain.models.service import Service, ServiceCandidate
from rtt_commute.domain.models.stop_call import StopCall

logger = logging.getLogger(__name__)


class RttServiceParser:
    """Parses RTT JSON responses into domain objects."""

    @staticmethod
    def parse_candidates(data: dict[str, Any]) -> list[ServiceCandidate]:
        """Parse a search response into candidates, keeping provider order."""
        services = data.get("services") or []
        if not isinstance(services, list):
            return []

        candidates = []
        for entry in services:
            if not isinstance(entry, dict):
                continue
            candidate = RttServiceParser._parse_candidate(entry)
            if candidate:
                candidates.append(candidate)
        return candidates

    @staticmethod
    def _parse_candidate(entry: dict[str, Any]) -> ServiceCandidate | None:
        service_uid = entry.get("serviceUid")
        if not service_uid:
            return None

        location = entry.get("locationDetail") or {}
        booked = location.get(BOOKED_DEPARTURE_FIELD) or entry.get(BOOKED_DEPARTURE_FIELD)
        return ServiceCandidate(
            service_id=str(service_uid),
            booked_departure=RttServiceParser.normalize_time(booked),
            observed_departure=RttServiceParser.normalize_time(
                location.get(REALTIME_DEPARTURE_FIELD)
            ),
            run_date=RttServiceParser.parse_date(entry.get("runDate")),
            origin_name=RttServiceParser._first_description(location.get("origin")),
            destination_name=RttServiceParser._first_description(location.get("destination")),
            operator=entry.get("atocName") or entry.get("atocCode"),
        )

    @staticmethod
    def parse_service(data: dict[str, Any], requested_date: date) -> Service:
        """Parse a service detail response.

        The provider's run date wins over the requested one when present.
        A service-level cancellation marks every call cancelled.
        """
        is_cancelled = bool(data.get("isCancelled"))
        locations = data.get("locations") or data.get("stops") or []
        calls = tuple(
            call
            for loc in locations
            if isinstance(loc, dict)
            and (call := RttServiceParser._parse_call(loc, is_cancelled)) is not None
        )
        return Service(
            service_id=str(data.get("serviceUid") or ""),
            run_date=RttServiceParser.parse_date(data.get("runDate")) or requested_date,
            calls=calls,
            is_cancelled=is_cancelled,
        )

    @staticmethod
    def _parse_call(location: dict[str, Any], service_cancelled: bool) -> StopCall | None:
        fields = {**location, **(location.get("locationDetail") or {})}
        code = fields.get("crs") or fields.get("locationCode") or fields.get("tiploc")
        if not code:
            return None

        observed_arrival, arrival_actual = RttServiceParser._observed(fields, "Arrival")
        observed_departure, departure_actual = RttServiceParser._observed(fields, "Departure")
        platform = fields.get("platform")

        return StopCall(
            location_code=str(code),
            booked_arrival=RttServiceParser.normalize_time(fields.get(BOOKED_ARRIVAL_FIELD)),
            booked_departure=RttServiceParser.normalize_time(fields.get(BOOKED_DEPARTURE_FIELD)),
            observed_arrival=observed_arrival,
            observed_departure=observed_departure,
            observed_arrival_actual=arrival_actual,
            observed_departure_actual=departure_actual,
            platform=str(platform) if platform not in (None, "") else None,
            is_cancelled=service_cancelled or RttServiceParser._is_cancelled(fields),
            cancel_reason=(
                fields.get("cancelReasonShortText")
                or fields.get("cancelReasonLongText")
                or fields.get("cancelReason")
                or fields.get("cancelReasonCode")
            ),
        )

    @staticmethod
    def _observed(fields: dict[str, Any], kind: str) -> tuple[str | None, bool]:
        """Best observed time: a confirmed actual, then a realtime estimate.

        Returns the time and whether it is a confirmed actual.
        """
        actual = RttServiceParser.normalize_time(fields.get(f"actual{kind}"))
        if actual:
            return actual, True

        realtime_field = REALTIME_ARRIVAL_FIELD if kind == "Arrival" else REALTIME_DEPARTURE_FIELD
        actual_flag = (
            REALTIME_ARRIVAL_ACTUAL_FIELD if kind == "Arrival" else REALTIME_DEPARTURE_ACTUAL_FIELD
        )
        realtime = RttServiceParser.normalize_time(fields.get(realtime_field))
        if realtime:
            return realtime, bool(fields.get(actual_flag))
        return None, False

    @staticmethod
    def _is_cancelled(fields: dict[str, Any]) -> bool:
        return bool(
            fields.get("isCancelled")
            or fields.get("displayAs") in CANCELLED_DISPLAY_VALUES
            or fields.get("cancelReasonCode")
        )

    @staticmethod
    def _first_description(entries: Any) -> str | None:
        if isinstance(entries, list) and entries and isinstance(entries[0], dict):
            return entries[0].get("description")
        return None

    @staticmethod
    def normalize_time(value: Any) -> str | None:
        """Normalize "HHMM", "HH:MM" or "HHMMss" to "HHMM".

        Anything else, including out-of-range clock times, is None.
        """
        if not isinstance(value, str):
            return None
        text = value.strip().replace(":", "")
        if len(text) == 6 and text.isdigit():
            text = text[:4]
        if len(text) == 4 and text.isdigit() and int(text[:2]) < 24 and int(text[2:]) < 60:
            return text
        if text:
            logger.debug(f"Ignoring malformed time value {value!r}")
        return None

    @staticmethod
    def parse_date(value: Any) -> date | None:
        """Parse an ISO "YYYY-MM-DD" date, or None."""
        if not isinstance(value, str):
            return None
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
