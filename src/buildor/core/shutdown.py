"""Graceful shutdown: count in-flight requests and let the lifespan wait on them."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.buildor.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    """Counts in-flight requests so shutdown can wait for them."""

    def __init__(self) -> None:
        self._in_flight = 0
        self._draining = False
        self._idle = asyncio.Condition()

    @property
    def is_shutting_down(self) -> bool:
        return self._draining

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        async with self._idle:
            self._in_flight += 1
        try:
            yield
        finally:
            async with self._idle:
                self._in_flight -= 1
                if not self._in_flight:
                    self._idle.notify_all()

    async def start_shutdown(self) -> None:
        """Flip into draining mode; /health reports 503 from here on."""
        self._draining = True
        if self._in_flight:
            logger.info("Waiting for in-flight requests", in_flight=self._in_flight)

    async def wait_for_drain(self, timeout: float) -> bool:
        """Wait until every in-flight request finished.

        Returns:
            True if drained within timeout, False otherwise.
        """

        async def _drained() -> None:
            async with self._idle:
                await self._idle.wait_for(lambda: self._in_flight == 0)

        try:
            await asyncio.wait_for(_drained(), timeout=timeout)
        except TimeoutError:
            logger.warning("Shutdown drain timed out", timeout=timeout, in_flight=self._in_flight)
            return False
        return True

    def reset(self) -> None:
        """Reset tracker state. For testing only."""
        self._in_flight = 0
        self._draining = False
        self._idle = asyncio.Condition()


request_tracker = RequestTracker()
