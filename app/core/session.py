import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, Optional

from app.core.config import get_settings
from app.core.identity import IdentityProvider, identity_provider
from app.schemas.auth import CurrentUser, TokenResponse

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Refreshes session tokens, at most once per ``min_interval`` seconds per user.

    A refresh that comes too soon waits out the remainder of the interval instead
    of failing. The last-refresh times live on the instance, keyed by user id.
    """

    def __init__(self, provider: IdentityProvider, min_interval: float = 5.0, refresh_window: int = 600,
                 clock: Callable[[], float] = time.monotonic,
                 wall_clock: Callable[[], float] = time.time,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.provider = provider
        self.min_interval = min_interval
        self.refresh_window = refresh_window
        self.clock = clock
        self.wall_clock = wall_clock
        self.sleep = sleep
        self._last_refresh: Dict[str, float] = {}

    def last_refresh_at(self, user_id: str) -> Optional[float]:
        return self._last_refresh.get(user_id)

    def needs_refresh(self, user: CurrentUser) -> bool:
        """True when the session is still valid but expires within the refresh window."""
        if user.expires_at is None:
            return False
        remaining = user.expires_at - self.wall_clock()
        return 0 < remaining < self.refresh_window

    async def refresh(self, user: CurrentUser) -> str:
        last = self._last_refresh.get(user.id)
        if last is not None:
            elapsed = self.clock() - last
            if elapsed < self.min_interval:
                wait = self.min_interval - elapsed
                logger.info(f"Session refresh for {user.id} rate limited, waiting {wait:.2f}s")
                await self.sleep(wait)
        self._last_refresh[user.id] = self.clock()
        return self.provider.issue_token(user.id, email=user.email, full_name=user.full_name)

    async def refresh_if_needed(self, user: CurrentUser, token: str, force: bool = False) -> TokenResponse:
        if not force and not self.needs_refresh(user):
            return TokenResponse(access_token=token, expires_at=user.expires_at, refreshed=False)
        new_token = await self.refresh(user)
        refreshed_user = self.provider.decode(new_token)
        return TokenResponse(access_token=new_token, expires_at=refreshed_user.expires_at, refreshed=True)


def _build_session_manager() -> SessionManager:
    settings = get_settings()
    return SessionManager(
        identity_provider,
        min_interval=settings.SESSION_REFRESH_MIN_INTERVAL_SECONDS,
        refresh_window=settings.SESSION_REFRESH_WINDOW_SECONDS
    )


session_manager = _build_session_manager()


def get_session_manager() -> SessionManager:
    return session_manager
