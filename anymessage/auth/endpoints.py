# anymessage/auth/endpoints.py
import logging
from fastapi import APIRouter, Depends
from typing import Annotated

from .models import UserRegistrationRequest, UserAuthTokenResponse
from .errors import UserAuthTokenGenerationError
from .token_manager import UserTokenManagerProtocol
from .user_store import UserStore
from .dependencies import get_user_store, get_user_token_manager_dependency, verify_host_app_secret

logger = logging.getLogger(__name__)
auth_router = APIRouter(prefix="/auth", tags=["User Authentication"])


@auth_router.post(
    "/register-user",
    response_model=UserAuthTokenResponse,
    summary="Register a host application user and get a bearer token"
)
async def register_user_and_get_token(
    request_data: UserRegistrationRequest,
    user_store: Annotated[UserStore, Depends(get_user_store)],
    token_manager: Annotated[UserTokenManagerProtocol, Depends(get_user_token_manager_dependency)],
    _: Annotated[str, Depends(verify_host_app_secret)]
):
    """
    Registers a user by email and issues a new bearer token.

    If the user already exists, a new token replaces the previous one. The host
    application secret is verified by dependency before this handler runs.
    """
    email = request_data.email.strip().lower()
    logger.info(f"Attempting user registration for '{email}'.")

    try:
        auth_token, token_hash = token_manager.generate_token_and_hash()
        await user_store.save_token_hash(email, token_hash)
    except Exception as e:
        logger.error(f"Error during token generation/storage for user '{email}': {e}", exc_info=True)
        raise UserAuthTokenGenerationError(detail=f"Could not process user token: {str(e)}")

    logger.info(f"Successfully issued auth token for user '{email}'.")
    return UserAuthTokenResponse(auth_token=auth_token, email=email)
