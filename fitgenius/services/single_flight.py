"""Per-consumer single-flight guard for cached remote fetches."""

from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from fitgenius.services.cache import ResultCache
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


class FlightState(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    COMPLETED = "completed"


def _identity(value: Any) -> Any:
    return value


class SingleFlightGuard(Generic[T]):
    """At most one in-flight fetch per consumer, plus a held result.

    Each consumer (a report panel, an insight panel, ...) owns its own guard;
    guards are not shared across the application. ``encode`` turns a result
    into a JSON-friendly cache value and ``decode`` turns a cached value back
    into a result. A ``decode`` error makes the cached value a miss.
    """

    def __init__(
        self,
        cache: ResultCache,
        encode: Callable[[T], Any] = _identity,
        decode: Callable[[Any], T] = _identity,
    ):
        self.cache = cache
        self.encode = encode
        self.decode = decode
        self.busy = False
        self.last_key: Optional[str] = None
        self.result: Optional[T] = None
        self._generation = 0

    @property
    def generation(self) -> int:
        """Bumped by every reset; a flight started under an older value is stale."""
        return self._generation

    @property
    def state(self) -> FlightState:
        if self.busy:
            return FlightState.IN_FLIGHT
        if self.last_key is not None:
            return FlightState.COMPLETED
        return FlightState.IDLE

    async def _cached(self, key: str) -> Optional[T]:
        cached = await self.cache.get(key)
        if cached is None:
            return None
        try:
            return self.decode(cached)
        except Exception as e:
            logger.warning(f"Cached value for {key} could not be decoded, refetching: {e}")
            return None

    async def run(self, key: str, fetch: Callable[[], Awaitable[T]]) -> Optional[T]:
        """Resolve ``key`` from held state, the cache, or a single fetch.

        Returns None when the call was skipped because another fetch is
        already in flight. Fetch errors propagate to the caller.
        """
        if self.last_key == key and self.result is not None:
            return self.result

        cached = await self._cached(key)
        if cached is not None:
            self.result = cached
            self.last_key = key
            return cached

        if self.busy:
            logger.debug(f"Fetch for {key} skipped, another request is in flight")
            return None

        self.busy = True
        generation = self._generation
        try:
            value = await fetch()
            await self.cache.set(key, self.encode(value))
            if generation == self._generation:
                self.result = value
                self.last_key = key
            else:
                logger.debug(f"Result for {key} arrived after reset; cached but not adopted")
            return value
        finally:
            if generation == self._generation:
                self.busy = False

    def reset(self) -> None:
        """Forget held state. A fetch still in flight completes into the cache only."""
        self._generation += 1
        self.busy = False
        self.last_key = None
        self.result = None
