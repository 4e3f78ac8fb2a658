"""
Rate limiting, inbound and outbound.

Inbound requests are limited per client IP with slowapi. Outbound calls to
quota-bound upstreams go through a RequestThrottle, which spaces calls at a
fixed minimum interval. Throttles are created by the app and injected into
routes, never shared through module globals.
"""
import asyncio
import time
from typing import Awaitable, Callable

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

# Rate limiter keyed on client IP
limiter = Limiter(key_func=get_remote_address)


class RequestThrottle:
    """
    Enforce a minimum interval between outbound calls.

    Callers are serialised through a lock, so two coroutines can never both
    read the same "last call" timestamp before either updates it.

    Args:
        min_interval: Minimum seconds between the start of two calls
        clock: Monotonic clock source
        sleep: Awaitable sleep used to suspend the caller
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_call: float | None = None
        self._lock = asyncio.Lock()

    async def wait(self) -> float:
        """
        Suspend until the next call is allowed, then record it.

        Returns:
            Seconds spent waiting (0.0 when no wait was needed)
        """
        async with self._lock:
            waited = 0.0
            if self._last_call is not None:
                remaining = self.min_interval - (self._clock() - self._last_call)
                if remaining > 0:
                    await self._sleep(remaining)
                    waited = remaining
            self._last_call = self._clock()
            return waited


def get_image_throttle(request: Request) -> RequestThrottle:
    """FastAPI dependency: throttle guarding exercise image fetches."""
    return request.app.state.image_throttle


def get_catalog_throttle(request: Request) -> RequestThrottle:
    """FastAPI dependency: throttle guarding exercise catalog lookups."""
    return request.app.state.catalog_throttle
