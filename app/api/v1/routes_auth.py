from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials

from app.core.identity import bearer_scheme, get_current_user
from app.core.session import SessionManager, get_session_manager
from app.schemas.auth import CurrentUser, TokenResponse


router = APIRouter(prefix="/auth")


@router.post("/refresh", response_model=TokenResponse)
async def refresh_session(
        force: bool = False,
        user: CurrentUser = Depends(get_current_user),
        credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
        manager: SessionManager = Depends(get_session_manager)):
    return await manager.refresh_if_needed(user, credentials.credentials, force=force)
