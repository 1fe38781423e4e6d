"""Error taxonomy shared by all layers."""


class TrackerError(Exception):
    """Base class for all tracker errors."""


class ConfigurationError(TrackerError):
    """Configuration is missing or invalid. Raised before any network activity."""


class ProviderError(TrackerError):
    """A timetable provider lookup failed."""

    def __init__(
        self, message: str, status_code: int | None = None, url: str | None = None
    ) -> None:
        """Initialize with a message and optional HTTP details.

        Args:
            message: Human readable description.
            status_code: HTTP status code, if the provider answered.
            url: The URL that was requested.
        """
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class NotFoundError(ProviderError):
    """The provider has no matching service for the requested date."""


class TransientProviderError(ProviderError):
    """The provider failed, timed out or returned an unusable response."""
