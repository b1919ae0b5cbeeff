import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Sequence, TypeVar

from app.core.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_rate_limit_error(exc: BaseException) -> bool:
    """The hosted database answers bursts with a 'rate limit' message and nothing more specific."""
    return "rate limit" in str(exc).lower()


def never_retry(exc: BaseException) -> bool:
    return False


@dataclass
class RetryPolicy:
    max_attempts: int = 1
    # seconds to wait before attempt 2, 3, ...; the last value repeats
    backoff: Sequence[float] = (0.0,)
    retryable: Callable[[BaseException], bool] = never_retry
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if not self.backoff:
            raise ValueError("backoff schedule must not be empty")

    def delay_for(self, attempt: int) -> float:
        """Delay after the given failed attempt (1-based)."""
        index = min(attempt - 1, len(self.backoff) - 1)
        return self.backoff[index]

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        attempt = 1
        while True:
            try:
                return await operation()
            except Exception as e:
                if attempt >= self.max_attempts or not self.retryable(e):
                    raise
                delay = self.delay_for(attempt)
                logger.warning(f"retryable data store error (attempt {attempt}/{self.max_attempts}), "
                               f"retrying in {delay}s: {e}")
                await self.sleep(delay)
                attempt += 1

    @classmethod
    def no_retry(cls) -> "RetryPolicy":
        return cls(max_attempts=1)

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        settings = get_settings()
        return cls(
            max_attempts=settings.STORE_RETRY_MAX_ATTEMPTS,
            backoff=(settings.STORE_RETRY_BACKOFF_SECONDS,),
            retryable=is_rate_limit_error,
        )
