"""Tracker configuration loader."""

import logging
import tomllib
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rtt_commute.adapters.config.app_config import AppConfig
from rtt_commute.domain.civil_clock import from_minutes, to_minutes
from rtt_commute.domain.errors import ConfigurationError
from rtt_commute.domain.models.status import EarlyStatusPolicy
from rtt_commute.domain.models.tracker_configuration import (
    ProviderConfiguration,
    RolloverConfiguration,
    RolloverPolicyName,
    StatusConfiguration,
    TrackerConfiguration,
    TransferConfiguration,
)

logger = logging.getLogger(__name__)


def _hhmm(value: str, name: str) -> str:
    """Validate and normalize an HHMM setting."""
    try:
        return from_minutes(to_minutes(value))
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a 24h time as HHMM, got {value!r}") from e


def _positive(value: int, name: str, minimum: int = 1) -> int:
    if value < minimum:
        raise ConfigurationError(f"{name} must be at least {minimum}, got {value}")
    return value


class TrackerConfigurationLoader:
    """Loads the immutable tracker configuration from app config."""

    @staticmethod
    def load(config: AppConfig) -> TrackerConfiguration:
        """Validate app config and build the tracker configuration.

        Raises:
            ConfigurationError: Credentials, codes or times are missing or invalid.
        """
        try:
            config.load_toml_overrides()
        except (OSError, ValueError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Cannot read config file {config.config_file}: {e}") from e

        provider = TrackerConfigurationLoader.load_provider(config)

        try:
            ZoneInfo(config.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(f"Unknown timezone {config.timezone!r}") from e

        status = TrackerConfigurationLoader.load_status(config)
        transfer = TrackerConfigurationLoader.load_transfer(config)
        if status is None and transfer is None:
            raise ConfigurationError(
                "Nothing to track: set ORIGIN_CRS/DESTINATION_CRS/BOOKED_DEPARTURE_HHMM "
                "and/or TRANSFER_ORIGIN_CRS/INTERCHANGE_CRS/TRANSFER_DESTINATION_CRS"
            )

        tracker_config = TrackerConfiguration(
            timezone=config.timezone,
            provider=provider,
            status=status,
            transfer=transfer,
            rollover=RolloverConfiguration(
                policy=RolloverPolicyName(config.rollover_policy),
                grace_minutes=_positive(
                    config.rollover_grace_minutes, "ROLLOVER_GRACE_MINUTES", minimum=0
                ),
                cutover=_hhmm(config.cutover_local_time, "CUTOVER_LOCAL_TIME"),
            ),
            early_status=EarlyStatusPolicy(config.early_status),
            status_output_path=config.status_output_path,
            transfer_output_path=config.transfer_output_path,
            audit_log_path=config.audit_log_path,
        )
        logger.info(
            f"Loaded configuration: status={'on' if status else 'off'}, "
            f"transfers={'on' if transfer else 'off'}, timezone={config.timezone}"
        )
        return tracker_config

    @staticmethod
    def load_provider(config: AppConfig) -> ProviderConfiguration:
        """Build the provider settings; credentials are mandatory."""
        if not config.rtt_username or not config.rtt_password:
            raise ConfigurationError("RTT_USERNAME and RTT_PASSWORD must be set")

        return ProviderConfiguration(
            username=config.rtt_username,
            password=config.rtt_password,
            base_url=config.rtt_base_url.rstrip("/"),
            timeout_seconds=config.rtt_timeout_seconds,
            max_concurrent_requests=_positive(
                config.rtt_max_concurrent_requests, "RTT_MAX_CONCURRENT_REQUESTS"
            ),
            min_request_interval_seconds=max(0, config.rtt_min_request_interval_ms) / 1000,
            log_requests=config.rtt_log_requests,
        )

    @staticmethod
    def load_status(config: AppConfig) -> StatusConfiguration | None:
        """Build the booked service settings, or None when none are given."""
        values = (config.origin_crs, config.destination_crs, config.booked_departure_hhmm)
        if not any(values):
            return None
        if not all(values):
            raise ConfigurationError(
                "ORIGIN_CRS, DESTINATION_CRS and BOOKED_DEPARTURE_HHMM must be set together"
            )

        return StatusConfiguration(
            origin_code=config.origin_crs or "",
            destination_code=config.destination_crs or "",
            booked_departure=_hhmm(config.booked_departure_hhmm or "", "BOOKED_DEPARTURE_HHMM"),
            max_candidates=_positive(config.max_status_candidates, "MAX_STATUS_CANDIDATES"),
        )

    @staticmethod
    def load_transfer(config: AppConfig) -> TransferConfiguration | None:
        """Build the transfer chain settings, or None when none are given."""
        codes = (
            config.transfer_origin_crs,
            config.interchange_crs,
            config.transfer_destination_crs,
        )
        if not any(codes):
            return None
        if not all(codes):
            raise ConfigurationError(
                "TRANSFER_ORIGIN_CRS, INTERCHANGE_CRS and TRANSFER_DESTINATION_CRS "
                "must be set together"
            )
        if not config.window_start or not config.window_end:
            raise ConfigurationError("WINDOW_START and WINDOW_END must be set for transfers")

        window_start = _hhmm(config.window_start, "WINDOW_START")
        window_end = _hhmm(config.window_end, "WINDOW_END")
        if to_minutes(window_start) >= to_minutes(window_end):
            raise ConfigurationError(
                f"WINDOW_START ({window_start}) must be before WINDOW_END ({window_end})"
            )

        min_connection = _positive(config.min_connection_minutes, "MIN_CONNECTION_MINUTES", 0)
        max_connection = _positive(
            config.max_connection_minutes, "MAX_CONNECTION_MINUTES", min_connection
        )

        return TransferConfiguration(
            origin_code=config.transfer_origin_crs or "",
            interchange_code=config.interchange_crs or "",
            destination_code=config.transfer_destination_crs or "",
            window_start=window_start,
            window_end=window_end,
            direct_anchor=(
                _hhmm(config.direct_anchor_hhmm, "DIRECT_ANCHOR_HHMM")
                if config.direct_anchor_hhmm
                else None
            ),
            min_connection_minutes=min_connection,
            max_connection_minutes=max_connection,
            max_first_legs=_positive(config.max_first_legs, "MAX_FIRST_LEGS"),
            max_second_legs=_positive(config.max_second_legs, "MAX_SECOND_LEGS"),
        )
