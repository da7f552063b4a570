"""Retry with exponential backoff for rate-limited AI calls."""

import asyncio
import random
from typing import Any, Awaitable, Callable, Optional, TypeVar

from fitgenius.config.settings import settings
from fitgenius.services.errors import RateLimited
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")

RATE_LIMIT_STATUS = 429


def _is_429(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return int(value) == RATE_LIMIT_STATUS
    except (TypeError, ValueError):
        return False


def is_rate_limited(error: BaseException) -> bool:
    """True when ``error`` signals HTTP 429.

    Checks, in order: the error is already ``RateLimited``; a ``status_code``
    or ``status`` attribute (openai/anthropic SDK errors); a ``code``
    attribute; ``response.status_code`` (httpx); "429" in the message.
    """
    if isinstance(error, RateLimited):
        return True
    for attr in ("status_code", "status", "code"):
        if _is_429(getattr(error, attr, None)):
            return True
    response = getattr(error, "response", None)
    if response is not None and _is_429(getattr(response, "status_code", None)):
        return True
    return "429" in str(error)


def backoff_delay(
    attempt: int,
    base_delay: Optional[float] = None,
    max_jitter: Optional[float] = None,
    rng: Callable[[float, float], float] = random.uniform,
) -> float:
    """Seconds to wait after failed attempt ``attempt`` (counted from 0)."""
    base = settings.retry_base_delay if base_delay is None else base_delay
    jitter = settings.retry_max_jitter if max_jitter is None else max_jitter
    return (2 ** attempt) * base + rng(0, jitter)


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: Optional[int] = None,
    *,
    base_delay: Optional[float] = None,
    max_jitter: Optional[float] = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    rng: Callable[[float, float], float] = random.uniform,
) -> T:
    """Await ``operation()``, retrying only on rate limiting.

    Non-429 errors propagate on the first occurrence. When every attempt is
    rate limited, ``RateLimited`` is raised from the last error.
    """
    attempts = max(1, settings.ai_max_attempts if max_attempts is None else max_attempts)
    last_error: Optional[BaseException] = None

    for attempt in range(attempts):
        try:
            return await operation()
        except Exception as e:
            if not is_rate_limited(e):
                raise
            last_error = e
            if attempt + 1 >= attempts:
                break
            delay = backoff_delay(attempt, base_delay, max_jitter, rng)
            logger.warning(
                f"Rate limited (attempt {attempt + 1}/{attempts}), retrying in {delay:.1f}s"
            )
            await sleep(delay)

    logger.error(f"Rate limit persisted after {attempts} attempts")
    if isinstance(last_error, RateLimited):
        last_error.attempts = attempts
        raise last_error
    raise RateLimited(f"AI service rate limit reached after {attempts} attempts", attempts) from last_error
