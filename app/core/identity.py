import logging
import time
from typing import Callable, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import get_settings
from app.core.exceptions import IdentityError
from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class IdentityProvider:
    """Reads the signed-in user from a bearer token carrying sub, email, name and exp."""

    def __init__(self, secret: str, algorithm: str = "HS256", lifetime_seconds: int = 3600,
                 clock: Callable[[], float] = time.time):
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime_seconds = lifetime_seconds
        self.clock = clock

    def issue_token(self, user_id: str, email: Optional[str] = None, full_name: Optional[str] = None) -> str:
        payload = {
            "sub": user_id,
            "email": email,
            "name": full_name,
            "exp": int(self.clock()) + self.lifetime_seconds,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: Optional[str]) -> CurrentUser:
        if not token:
            raise IdentityError()
        try:
            # expiry is checked below against the provider's own clock
            data = jwt.decode(token, self.secret, algorithms=[self.algorithm],
                              options={"verify_exp": False, "require": ["sub", "exp"]})
        except jwt.PyJWTError as e:
            logger.info(f"Rejected session token: {e}")
            raise IdentityError() from e
        user_id = data.get("sub")
        if not user_id:
            raise IdentityError()
        if data["exp"] <= self.clock():
            logger.info(f"Rejected expired session token for {user_id}")
            raise IdentityError()
        return CurrentUser(
            id=user_id,
            email=data.get("email"),
            full_name=data.get("name"),
            expires_at=data.get("exp")
        )


def _build_identity_provider() -> IdentityProvider:
    settings = get_settings()
    return IdentityProvider(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        lifetime_seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS
    )


identity_provider = _build_identity_provider()


def get_identity_provider() -> IdentityProvider:
    return identity_provider


async def get_current_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        provider: IdentityProvider = Depends(get_identity_provider)) -> CurrentUser:
    token = credentials.credentials if credentials else None
    return provider.decode(token)
