# anymessage/auth/models.py
from pydantic import BaseModel, Field
from typing import Optional


class UserRegistrationRequest(BaseModel):
    """Request model for registering a user on behalf of the host application."""
    email: str = Field(
        description="The user's email address, used to match team membership."
    )
    # host_app_secret is expected as an X-Host-App-Secret header


class UserAuthTokenResponse(BaseModel):
    """Response model containing the generated authentication token."""
    auth_token: str = Field(
        description="The generated bearer token for the user."
    )
    email: str
    message: str = "User token processed successfully."


class UserInDB(BaseModel):
    """Internal model for a user row."""
    id: int
    email: str
    team_id: Optional[int] = None
    token_hash: Optional[str] = None  # Only the hash of the token is stored
    created_at: str  # ISO format datetime string
    last_used_at: Optional[str] = None


class AuthenticatedUser(BaseModel):
    """Identity of the caller, resolved from the bearer token."""
    id: int
    email: str
    team_id: Optional[int] = None
