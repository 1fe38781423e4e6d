"""Main entry point for the RTT commute tracker."""

import argparse
import asyncio
import logging
import sys

import aiohttp
from pydantic import ValidationError

from rtt_commute.adapters.config import AppConfig, TrackerConfigurationLoader
from rtt_commute.adapters.output import JsonlAuditLog, JsonSnapshotWriter
from rtt_commute.adapters.rtt_api import RttHttpClient, RttTimetableRepository
from rtt_commute.application.services import TrackerService
from rtt_commute.domain.civil_clock import CivilClock
from rtt_commute.domain.errors import ConfigurationError
from rtt_commute.domain.models.tracker_configuration import TrackerConfiguration

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)

JOBS = ("status", "transfers", "all")

# Exit status for an unusable configuration
CONFIG_ERROR_EXIT_CODE = 2


def _setup_argparse() -> argparse.ArgumentParser:
    """Set up argument parser."""
    parser = argparse.ArgumentParser(
        description="Write status and transfer snapshots for a daily rail commute",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Refresh both snapshots
  rtt-commute

  # Only the booked service status
  rtt-commute status

  # Read tracked services from a TOML file
  rtt-commute transfers --config-file commute.toml

Configuration is read from the environment and .env (RTT_USERNAME, RTT_PASSWORD,
ORIGIN_CRS, ...). Exits with status 2 if the configuration is unusable.
        """,
    )
    parser.add_argument(
        "job", nargs="?", choices=JOBS, default="all", help="Snapshot(s) to refresh"
    )
    parser.add_argument("--config-file", help="TOML file overriding CONFIG_FILE")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def load_configuration(config_file: str | None = None) -> TrackerConfiguration:
    """Read and validate the configuration.

    Raises:
        ConfigurationError: The configuration is missing or invalid.
    """
    try:
        app_config = AppConfig()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    if config_file:
        app_config.config_file = config_file
    return TrackerConfigurationLoader.load(app_config)


def build_tracker(
    config: TrackerConfiguration, session: aiohttp.ClientSession, log_requests: bool | None = None
) -> TrackerService:
    """Wire adapters and services for one run."""
    http_client = RttHttpClient(config.provider, session=session, log_requests=log_requests)
    return TrackerService(
        config,
        RttTimetableRepository(http_client),
        JsonSnapshotWriter(),
        CivilClock(config.timezone),
        audit_log=JsonlAuditLog(config.audit_log_path) if config.audit_log_path else None,
    )


async def run_job(tracker: TrackerService, job: str) -> None:
    """Run one job; failures are already written as error snapshots."""
    if job == "status":
        await tracker.run_status()
    elif job == "transfers":
        await tracker.run_transfers()
    else:
        await tracker.run_all()


async def main(argv: list[str] | None = None) -> None:
    """Main application entry point."""
    parser = _setup_argparse()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_configuration(args.config_file)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(CONFIG_ERROR_EXIT_CODE)

    if args.job == "status" and config.status is None:
        logger.error("No booked service configured (ORIGIN_CRS, DESTINATION_CRS, ...)")
        sys.exit(CONFIG_ERROR_EXIT_CODE)
    if args.job == "transfers" and config.transfer is None:
        logger.error("No transfer chain configured (TRANSFER_ORIGIN_CRS, INTERCHANGE_CRS, ...)")
        sys.exit(CONFIG_ERROR_EXIT_CODE)

    # Create aiohttp session for efficient HTTP connections
    async with aiohttp.ClientSession() as session:
        tracker = build_tracker(config, session)
        await run_job(tracker, args.job)


def cli_main() -> None:
    """Synchronous entry point for the tracker command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
