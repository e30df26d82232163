# anymessage/auth/dependencies.py
import logging
import secrets
from typing import Optional, Annotated
from fastapi import HTTPException, status, Header, Depends

from .errors import UserAuthTokenValidationError
from .models import AuthenticatedUser
from .token_manager import DefaultUserTokenManager, UserTokenManagerProtocol
from .user_store import UserStore
from ..dependencies import get_database
from ..settings import settings
from ..storage.storage_interfaces import AbstractDatabase

logger = logging.getLogger(__name__)


def get_user_store(db: Annotated[AbstractDatabase, Depends(get_database)]) -> UserStore:
    """Dependency provider for the user store."""
    return UserStore(db)


def get_user_token_manager_dependency() -> UserTokenManagerProtocol:
    """Dependency provider for the user token manager."""
    return DefaultUserTokenManager()


async def verify_host_app_secret(
    x_host_app_secret: Annotated[Optional[str], Header(alias="X-Host-App-Secret")] = None
) -> str:
    """
    Validates the host application secret from the X-Host-App-Secret header.

    Only authorized host applications can register users. Uses constant-time
    comparison to prevent timing attacks.
    """
    if not settings.host_app_registration_secret:
        logger.error("CRITICAL: HOST_APP_REGISTRATION_SECRET is not configured on the server. Cannot verify host app.")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Host application registration is not configured correctly (server-side)."
        )

    if not x_host_app_secret:
        logger.warning("Host App Auth: X-Host-App-Secret header missing.")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized: X-Host-App-Secret header missing.",
            headers={"WWW-Authenticate": 'Basic realm="AnyMessage Host App Registration"'}
        )

    if not secrets.compare_digest(x_host_app_secret, settings.host_app_registration_secret):
        logger.warning("Host App Auth: Invalid X-Host-App-Secret provided.")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Invalid X-Host-App-Secret.",
            headers={"WWW-Authenticate": 'Basic realm="AnyMessage Host App Registration"'}
        )

    return x_host_app_secret


async def get_current_user(
    user_store: Annotated[UserStore, Depends(get_user_store)],
    token_manager: Annotated[UserTokenManagerProtocol, Depends(get_user_token_manager_dependency)],
    authorization: Annotated[Optional[str], Header()] = None
) -> AuthenticatedUser:
    """
    Authenticates the caller from an ``Authorization: Bearer <token>`` header.

    The token is hashed and matched against stored hashes; the raw token is
    never looked up directly.
    """
    token: Optional[str] = None
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            token = credentials

    if not token:
        logger.warning("User Auth: No bearer token provided.")
        raise UserAuthTokenValidationError("Not authenticated: Missing or invalid auth token.")

    user = await user_store.get_by_token_hash(token_manager.hash_token(token))
    if not user:
        logger.warning("User Auth: Unknown bearer token.")
        raise UserAuthTokenValidationError()

    await user_store.update_last_used(user.id)
    logger.debug(f"User Auth: Successful for user {user.id} ({user.email}).")
    return AuthenticatedUser(id=user.id, email=user.email, team_id=user.team_id)
