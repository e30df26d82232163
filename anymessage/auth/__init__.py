"""
User authentication module initialization.

Registers users on behalf of the host application and resolves bearer tokens
into the authenticated identity used by tenant resolution.
"""

from .models import (
    UserRegistrationRequest,
    UserAuthTokenResponse,
    UserInDB,
    AuthenticatedUser
)
from .errors import (
    UserAuthError,
    UserAuthTokenGenerationError,
    UserAuthTokenValidationError
)
from .token_manager import UserTokenManagerProtocol, DefaultUserTokenManager
from .user_store import UserStore
from .dependencies import get_current_user, get_user_store, verify_host_app_secret
from .endpoints import auth_router

__all__ = [
    # Data models
    "UserRegistrationRequest",
    "UserAuthTokenResponse",
    "UserInDB",
    "AuthenticatedUser",

    # Exception classes
    "UserAuthError",
    "UserAuthTokenGenerationError",
    "UserAuthTokenValidationError",

    # Token management
    "UserTokenManagerProtocol",
    "DefaultUserTokenManager",

    # Storage and dependencies
    "UserStore",
    "get_current_user",
    "get_user_store",
    "verify_host_app_secret",

    # API endpoints
    "auth_router"
]
