"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# TOML table -> {TOML key: AppConfig field}
TOML_FIELDS: dict[str, dict[str, str]] = {
    "provider": {
        "base_url": "rtt_base_url",
        "timeout_seconds": "rtt_timeout_seconds",
        "max_concurrent_requests": "rtt_max_concurrent_requests",
        "min_request_interval_ms": "rtt_min_request_interval_ms",
    },
    "status": {
        "origin_crs": "origin_crs",
        "destination_crs": "destination_crs",
        "booked_departure": "booked_departure_hhmm",
        "max_candidates": "max_status_candidates",
    },
    "transfer": {
        "origin_crs": "transfer_origin_crs",
        "interchange_crs": "interchange_crs",
        "destination_crs": "transfer_destination_crs",
        "direct_anchor": "direct_anchor_hhmm",
        "window_start": "window_start",
        "window_end": "window_end",
        "min_connection_minutes": "min_connection_minutes",
        "max_connection_minutes": "max_connection_minutes",
        "max_first_legs": "max_first_legs",
        "max_second_legs": "max_second_legs",
    },
    "rollover": {
        "policy": "rollover_policy",
        "grace_minutes": "rollover_grace_minutes",
        "cutover": "cutover_local_time",
        "early_status": "early_status",
    },
    "output": {
        "status_path": "status_output_path",
        "transfer_path": "transfer_output_path",
        "audit_log_path": "audit_log_path",
    },
}


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # RTT API configuration
    rtt_username: str | None = Field(default=None, description="RTT API username")
    rtt_password: str | None = Field(default=None, description="RTT API password")
    rtt_base_url: str = Field(
        default="https://api.rtt.io/api/v1", description="Base URL of the RTT pull API"
    )
    rtt_timeout_seconds: float = Field(
        default=10.0, description="Timeout for RTT API requests in seconds"
    )
    rtt_max_concurrent_requests: int = Field(
        default=4, description="Maximum number of RTT requests in flight"
    )
    rtt_min_request_interval_ms: int = Field(
        default=0,
        description="Minimum time in milliseconds between RTT request starts",
    )
    rtt_log_requests: bool = Field(
        default=False, description="Log every RTT request and a response snippet"
    )

    timezone: str = Field(
        default="Europe/London",
        description="Civil timezone of the timetable (IANA timezone name)",
    )

    # Booked service status
    origin_crs: str | None = Field(default=None, description="Origin station CRS code")
    destination_crs: str | None = Field(default=None, description="Destination station CRS code")
    booked_departure_hhmm: str | None = Field(
        default=None, description="Booked departure from the origin (HHMM)"
    )
    max_status_candidates: int = Field(
        default=3, description="Search hits to try before reporting not_found"
    )

    # Day rollover and status mapping
    rollover_policy: str = Field(
        default="grace", description="Day rollover policy: 'grace', 'cutover' or 'today'"
    )
    rollover_grace_minutes: int = Field(
        default=2, description="Minutes after today's departure before showing tomorrow"
    )
    cutover_local_time: str = Field(
        default="0900", description="Local time (HHMM) at which the cutover policy rolls"
    )
    early_status: str = Field(
        default="distinct",
        description="How early running is reported: 'distinct' or 'on_time'",
    )

    # Transfer board
    transfer_origin_crs: str | None = Field(default=None, description="First leg origin CRS")
    interchange_crs: str | None = Field(default=None, description="Interchange CRS")
    transfer_destination_crs: str | None = Field(
        default=None, description="Second leg destination CRS"
    )
    direct_anchor_hhmm: str | None = Field(
        default=None, description="Booked departure (HHMM) of the direct service, if any"
    )
    window_start: str | None = Field(
        default=None, description="First leg window start (HHMM, exclusive)"
    )
    window_end: str | None = Field(default=None, description="First leg window end (HHMM)")
    min_connection_minutes: int = Field(default=1, description="Minimum interchange time")
    max_connection_minutes: int = Field(default=45, description="Maximum interchange time")
    max_first_legs: int = Field(default=3, description="First legs to show")
    max_second_legs: int = Field(default=2, description="Connections to show per first leg")

    # Output
    status_output_path: str = Field(default="status.json", description="Status snapshot file")
    transfer_output_path: str = Field(default="xfer.json", description="Transfer snapshot file")
    audit_log_path: str | None = Field(
        default="runs.log.jsonl", description="Append-only run log (empty to disable)"
    )

    # TOML config file path
    config_file: str | None = Field(
        default=None,
        description="Optional TOML file overriding the tracked services and limits",
    )

    @field_validator(
        "origin_crs",
        "destination_crs",
        "transfer_origin_crs",
        "interchange_crs",
        "transfer_destination_crs",
    )
    @classmethod
    def validate_crs(cls, v: str | None) -> str | None:
        """Normalize CRS codes to upper case; blank means unset."""
        if v is None or not v.strip():
            return None
        return v.strip().upper()

    @field_validator(
        "booked_departure_hhmm",
        "direct_anchor_hhmm",
        "window_start",
        "window_end",
        "audit_log_path",
        "config_file",
    )
    @classmethod
    def blank_is_unset(cls, v: str | None) -> str | None:
        """Treat empty strings from the environment as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("rollover_policy")
    @classmethod
    def validate_rollover_policy(cls, v: str) -> str:
        """Validate rollover policy is 'grace', 'cutover' or 'today'."""
        if v.lower() not in ("grace", "cutover", "today"):
            raise ValueError("rollover_policy must be either 'grace', 'cutover' or 'today'")
        return v.lower()

    @field_validator("early_status")
    @classmethod
    def validate_early_status(cls, v: str) -> str:
        """Validate early status mapping is 'distinct' or 'on_time'."""
        if v.lower() not in ("distinct", "on_time"):
            raise ValueError("early_status must be either 'distinct' or 'on_time'")
        return v.lower()

    def load_toml_overrides(self) -> dict[str, Any]:
        """Load the TOML file and apply its settings over the environment values.

        Credentials are only ever read from the environment.

        Returns:
            The parsed TOML data, or an empty dict when no file is configured.
        """
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        for section, fields in TOML_FIELDS.items():
            table = toml_data.get(section, {})
            if not isinstance(table, dict):
                raise ValueError(f"TOML config '{section}' must be a table")
            for key, field_name in fields.items():
                if key in table:
                    setattr(self, field_name, table[key])

        return toml_data
