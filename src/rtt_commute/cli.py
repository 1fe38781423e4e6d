"""CLI helpers for finding services and station codes to configure."""

import argparse
import asyncio
import json
import sys
from datetime import date
from typing import Any

import aiohttp

from rtt_commute.adapters.config import AppConfig, TrackerConfigurationLoader
from rtt_commute.adapters.rtt_api import RttHttpClient, RttTimetableRepository
from rtt_commute.domain.civil_clock import CivilClock, from_minutes, to_minutes
from rtt_commute.domain.models.service import Service, ServiceCandidate
from rtt_commute.domain.models.stop_call import StopCall


def _candidate_to_dict(candidate: ServiceCandidate) -> dict[str, Any]:
    """Convert a search hit to CLI format."""
    return {
        "service_uid": candidate.service_id,
        "run_date": candidate.run_date.isoformat() if candidate.run_date else None,
        "booked_departure": candidate.booked_departure,
        "observed_departure": candidate.observed_departure,
        "origin": candidate.origin_name,
        "destination": candidate.destination_name,
        "operator": candidate.operator,
    }


def _call_to_dict(call: StopCall) -> dict[str, Any]:
    return {
        "crs": call.location_code,
        "booked_arrival": call.booked_arrival,
        "booked_departure": call.booked_departure,
        "observed_arrival": call.observed_arrival,
        "observed_departure": call.observed_departure,
        "platform": call.platform,
        "is_cancelled": call.is_cancelled,
    }


def _service_to_dict(service: Service) -> dict[str, Any]:
    return {
        "service_uid": service.service_id,
        "run_date": service.run_date.isoformat(),
        "is_cancelled": service.is_cancelled,
        "calls": [_call_to_dict(call) for call in service.calls],
    }


def _format_time(hhmm: str | None) -> str:
    """Format HHMM as HH:MM, or a placeholder when unknown."""
    return f"{hhmm[:2]}:{hhmm[2:]}" if hhmm else "--:--"


def _build_repository(session: aiohttp.ClientSession) -> RttTimetableRepository:
    provider = TrackerConfigurationLoader.load_provider(AppConfig())
    return RttTimetableRepository(RttHttpClient(provider, session=session))


def _today() -> date:
    return CivilClock(AppConfig().timezone).now().date


async def _handle_search_command(
    origin: str, destination: str, day: date | None, hhmm: str | None, output_json: bool
) -> None:
    """Handle the search command."""
    async with aiohttp.ClientSession() as session:
        repository = _build_repository(session)
        search_day = day or _today()
        search_time = from_minutes(to_minutes(hhmm)) if hhmm else "0000"
        candidates = await repository.search(
            origin.upper(), destination.upper(), search_day, search_time
        )

    if output_json:
        print(json.dumps([_candidate_to_dict(c) for c in candidates], indent=2))
        return

    if not candidates:
        print(f"No services found {origin.upper()} -> {destination.upper()}", file=sys.stderr)
        sys.exit(1)

    print(f"\nFound {len(candidates)} service(s) on {search_day} from {search_time}:\n")
    for candidate in candidates:
        print(
            f"  {_format_time(candidate.booked_departure)}  "
            f"{candidate.origin_name or '?'} -> {candidate.destination_name or '?'}"
        )
        print(f"    UID: {candidate.service_id}  Operator: {candidate.operator or 'Unknown'}")
        print()


async def _handle_service_command(service_uid: str, day: date, output_json: bool) -> None:
    """Handle the service command."""
    async with aiohttp.ClientSession() as session:
        repository = _build_repository(session)
        service = await repository.detail(service_uid, day)

    if output_json:
        print(json.dumps(_service_to_dict(service), indent=2))
        return

    print(f"\nService {service.service_id} on {service.run_date}")
    if service.is_cancelled:
        print("  CANCELLED")
    print("\n  CRS   Arr    Dep    Plat")
    print("  " + "-" * 28)
    for call in service.calls:
        arrival = _format_time(call.booked_arrival)
        departure = _format_time(call.booked_departure)
        platform = call.platform or "-"
        marker = "  cancelled" if call.is_cancelled else ""
        print(f"  {call.location_code:<5} {arrival}  {departure}  {platform:<4}{marker}")


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from e


def _setup_argparse() -> argparse.ArgumentParser:
    """Set up argument parser."""
    parser = argparse.ArgumentParser(
        description="Find RTT services and station codes for the commute tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Services from Reading to London Paddington this morning
  rtt-commute-config search RDG PAD --time 0700

  # Call pattern of one service
  rtt-commute-config service W12345 2024-03-15

Credentials are read from RTT_USERNAME and RTT_PASSWORD.
API: https://www.realtimetrains.co.uk/about/developer/pull/docs/
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    search_parser = subparsers.add_parser("search", help="Search services between stations")
    search_parser.add_argument("origin", help="Origin CRS code (e.g., RDG)")
    search_parser.add_argument("destination", help="Destination CRS code (e.g., PAD)")
    search_parser.add_argument("--date", type=_parse_date, help="Date (YYYY-MM-DD), default today")
    search_parser.add_argument("--time", help="Departures from this time (HHMM)")
    search_parser.add_argument("--json", action="store_true", help="Output as JSON")

    service_parser = subparsers.add_parser("service", help="Show the calls of one service")
    service_parser.add_argument("service_uid", help="Service UID (e.g., W12345)")
    service_parser.add_argument("date", type=_parse_date, help="Run date (YYYY-MM-DD)")
    service_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


async def _execute_command(args: Any) -> None:
    """Execute the appropriate command based on args."""
    if args.command == "search":
        await _handle_search_command(
            args.origin, args.destination, args.date, args.time, args.json
        )
    elif args.command == "service":
        await _handle_service_command(args.service_uid, args.date, args.json)


async def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _setup_argparse()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        await _execute_command(args)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
