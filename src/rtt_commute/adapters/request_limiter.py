"""Limiter for outgoing timetable API requests.

Bounds how many requests are in flight at once and optionally enforces a
minimum delay between request starts, to be nice to the provider.
"""

from __future__ import annotations

import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class RequestLimiter:
    """Concurrency and spacing limiter for one API.

    Async-safe: the in-flight bound is a semaphore and request starts are
    serialised through an asyncio.Lock.
    """

    def __init__(
        self, api_name: str, max_concurrent: int = 4, min_delay_seconds: float = 0.0
    ) -> None:
        """Initialize the limiter.

        Args:
            api_name: Name of the API (for logging).
            max_concurrent: Maximum number of requests in flight.
            min_delay_seconds: Minimum delay between request starts in seconds.
        """
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.api_name = api_name
        self.max_concurrent = max_concurrent
        self.min_delay_seconds = min_delay_seconds
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._lock = asyncio.Lock()
        self._last_request_time: float = 0.0

    async def _wait_for_spacing(self) -> None:
        if self.min_delay_seconds <= 0:
            return
        async with self._lock:
            elapsed = time.monotonic() - self._last_request_time
            wait_time = self.min_delay_seconds - elapsed
            if wait_time > 0:
                logger.debug(f"{self.api_name}: waiting {wait_time:.2f}s before next request")
                await asyncio.sleep(wait_time)
            self._last_request_time = time.monotonic()

    async def __aenter__(self) -> RequestLimiter:
        """Wait for a free slot and the minimum spacing."""
        await self._semaphore.acquire()
        try:
            await self._wait_for_spacing()
        except BaseException:
            self._semaphore.release()
            raise
        return self

    async def __aexit__(
        self, _exc_type: type | None, _exc_val: BaseException | None, _exc_tb: object
    ) -> None:
        """Release the slot."""
        self._semaphore.release()
