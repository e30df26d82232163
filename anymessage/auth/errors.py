# anymessage/auth/errors.py
from typing import Dict, Optional
from fastapi import HTTPException, status


class UserAuthError(HTTPException):
    """Base exception class for user authentication errors."""

    def __init__(self, status_code: int, detail: str, headers: Optional[Dict[str, str]] = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class UserAuthTokenGenerationError(UserAuthError):
    """Raised when the system fails to generate or store a user auth token.

    This indicates an internal server error during token creation, typically
    due to storage failures rather than user input errors.
    """

    def __init__(self, detail: str = "Failed to generate or process user auth token."):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class UserAuthTokenValidationError(UserAuthError):
    """Raised when a provided bearer token is missing, unknown or revoked."""

    def __init__(self, detail: str = "Invalid or expired user auth token."):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )
