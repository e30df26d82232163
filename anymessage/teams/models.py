# anymessage/teams/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Team(BaseModel):
    """Immutable snapshot of a team row."""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    subdomain: str
    customer_id: Optional[str] = None  # External billing reference, can be null


class TeamContext(BaseModel):
    """Tenant resolved for the current request from its Origin host."""
    model_config = ConfigDict(frozen=True)

    id: int
    subdomain: str


class TeamResponse(BaseModel):
    """Model for team data in API responses."""
    id: int
    subdomain: str


class TeamDetailResponse(TeamResponse):
    customer_id: Optional[str] = None
    has_active_subscription: bool = Field(
        description="Whether the team's billing customer has an active subscription."
    )


class TeamAvailabilityResponse(BaseModel):
    subdomain: str
    available: bool
