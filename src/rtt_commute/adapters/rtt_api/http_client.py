"""HTTP client for Realtime Trains API requests."""

import logging
import time
from datetime import date
from typing import TYPE_CHECKING, Any

import aiohttp

from rtt_commute.adapters.api_request_logger import log_api_request, log_api_response
from rtt_commute.adapters.request_limiter import RequestLimiter
from rtt_commute.adapters.rtt_api.constants import DEFAULT_HEADERS, SEARCH_PATH, SERVICE_PATH
from rtt_commute.domain.errors import NotFoundError, TransientProviderError
from rtt_commute.domain.models.tracker_configuration import ProviderConfiguration

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


def date_path(day: date) -> str:
    """Format a date as the yyyy/mm/dd path segment RTT expects."""
    return f"{day.year:04d}/{day.month:02d}/{day.day:02d}"


class RttHttpClient:
    """HTTP client for the RTT pull API.

    Maps provider responses onto the error taxonomy: HTTP 404 or an error
    body means "not found for this date"; anything else that fails,
    including timeouts, is a transient provider error. Nothing is retried here.
    """

    def __init__(
        self,
        config: ProviderConfiguration,
        session: "ClientSession | None" = None,
        limiter: RequestLimiter | None = None,
        log_requests: bool | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Provider credentials, base URL and limits.
            session: aiohttp session shared for the run.
            limiter: Request limiter; one is built from config when omitted.
            log_requests: Overrides the configured request logging switch when given.
        """
        self._config = config
        self._session = session
        self._limiter = limiter or RequestLimiter(
            "rtt_api",
            max_concurrent=config.max_concurrent_requests,
            min_delay_seconds=config.min_request_interval_seconds,
        )
        self._log_requests = config.log_requests if log_requests is None else log_requests
        self._auth = aiohttp.BasicAuth(config.username, config.password)
        self._timeout = aiohttp.ClientTimeout(total=config.timeout_seconds)
        self._headers = {**DEFAULT_HEADERS, "User-Agent": config.user_agent}

    async def search_services(
        self, origin: str, destination: str, day: date, hhmm: str
    ) -> dict[str, Any]:
        """Fetch the raw search response for services between two locations."""
        path = SEARCH_PATH.format(
            origin=origin, destination=destination, date_path=date_path(day), hhmm=hhmm
        )
        return await self.get_json(path)

    async def service_detail(self, service_uid: str, day: date) -> dict[str, Any]:
        """Fetch the raw detail response for one service on one date."""
        path = SERVICE_PATH.format(service_uid=service_uid, date_path=date_path(day))
        return await self.get_json(path)

    async def _read_body(self, response: "ClientResponse", url: str) -> dict[str, Any]:
        """Decode the JSON body of a successful response."""
        try:
            data = await response.json(content_type=None)
        except ValueError as e:
            raise TransientProviderError(
                f"Invalid JSON from {url}: {e}", status_code=response.status, url=url
            ) from e

        if not isinstance(data, dict):
            raise TransientProviderError(
                f"Unexpected response shape from {url}", status_code=response.status, url=url
            )
        if data.get("error"):
            raise NotFoundError(str(data["error"]), status_code=response.status, url=url)
        return data

    async def _handle_response(self, response: "ClientResponse", url: str) -> dict[str, Any]:
        if response.status == 404:
            raise NotFoundError(f"HTTP 404 Not Found for {url}", status_code=404, url=url)

        if response.status < 200 or response.status >= 300:
            error_text = await response.text()
            error_body = error_text[:300] if error_text else "(empty response body)"
            logger.error(f"RTT API returned status {response.status} for {url}: {error_body}")
            reason = f" {response.reason}" if response.reason else ""
            raise TransientProviderError(
                f"HTTP {response.status}{reason} for {url}",
                status_code=response.status,
                url=url,
            )

        return await self._read_body(response, url)

    async def get_json(self, path: str) -> dict[str, Any]:
        """GET a path below the base URL and decode the JSON body.

        Raises:
            NotFoundError: The provider has nothing for this request.
            TransientProviderError: Any other failure, including timeouts.
        """
        if not self._session:
            raise RuntimeError("RTT API requires an aiohttp session")

        url = f"{self._config.base_url.rstrip('/')}{path}"
        log_api_request("GET", url, headers=self._headers, enabled=self._log_requests)

        async with self._limiter:
            started = time.perf_counter()
            try:
                async with self._session.get(
                    url, auth=self._auth, headers=self._headers, timeout=self._timeout
                ) as response:
                    data = await self._handle_response(response, url)
                    log_api_response(
                        url,
                        response.status,
                        time.perf_counter() - started,
                        data,
                        enabled=self._log_requests,
                    )
                    return data
            except TimeoutError as e:
                elapsed = time.perf_counter() - started
                logger.warning(f"Timeout after {elapsed:.2f}s for {url}")
                raise TransientProviderError(
                    f"Timed out after {elapsed:.1f}s for {url}", url=url
                ) from e
            except aiohttp.ClientError as e:
                logger.warning(f"Error fetching {url}: {e}")
                raise TransientProviderError(f"Request failed for {url}: {e}", url=url) from e
