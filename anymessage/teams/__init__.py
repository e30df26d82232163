"""
Team management module initialization.

Provides the team accessor, the tenant-resolution and team-name validation
dependencies, and the team API endpoints.
"""

from .models import Team, TeamContext, TeamResponse, TeamDetailResponse, TeamAvailabilityResponse
from .errors import (
    EmptyBodyHTTPError,
    TenantAccessDeniedError,
    TenantResolutionError,
    TeamNameValidationError
)
from .accessor import TeamAccessor, BoundTeam
from .middleware import (
    check_team_name,
    require_team,
    subdomain_from_origin,
    verify_subdomain,
    verify_team_name
)
from .endpoints import team_router

__all__ = [
    # Data models
    "Team",
    "TeamContext",
    "TeamResponse",
    "TeamDetailResponse",
    "TeamAvailabilityResponse",
    # HTTP errors raised by the dependencies
    "EmptyBodyHTTPError",
    "TenantAccessDeniedError",
    "TenantResolutionError",
    "TeamNameValidationError",
    # Accessor
    "TeamAccessor",
    "BoundTeam",
    # Request dependencies
    "check_team_name",
    "require_team",
    "subdomain_from_origin",
    "verify_subdomain",
    "verify_team_name",
    # API endpoints
    "team_router"
]
