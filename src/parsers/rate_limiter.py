import asyncio


class RateLimiter:
    """Minimum-interval rate limiter for async HTTP clients.

    The analytics provider fans out several calls per refresh, so every
    client request goes through acquire() to keep the total under max_rps.
    """

    def __init__(self, max_rps: float) -> None:
        if max_rps <= 0:
            raise ValueError(f"max_rps must be positive, got {max_rps}")
        self._min_interval = 1.0 / max_rps
        self._last_request: float | None = None
        self._lock = asyncio.Lock()

    @property
    def min_interval(self) -> float:
        return self._min_interval

    async def acquire(self) -> None:
        async with self._lock:
            loop = asyncio.get_running_loop()
            if self._last_request is not None:
                wait = self._min_interval - (loop.time() - self._last_request)
                if wait > 0:
                    await asyncio.sleep(wait)
            self._last_request = loop.time()
