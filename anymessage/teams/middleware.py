# anymessage/teams/middleware.py
"""
Request dependencies that run before team handlers.

``verify_subdomain`` resolves the tenant named by the request's Origin host
for the authenticated user. ``verify_team_name`` validates a new subdomain
candidate sent as ``newURL`` in the JSON body.
"""
import json
import logging
import re
from typing import Annotated, Optional

from fastapi import Depends, Request, status

from .errors import TeamNameValidationError, TenantAccessDeniedError, TenantResolutionError
from .models import TeamContext
from ..auth.dependencies import get_current_user
from ..auth.models import AuthenticatedUser
from ..dependencies import get_database
from ..errors import ModelError
from ..settings import settings
from ..storage.storage_interfaces import AbstractDatabase

logger = logging.getLogger(__name__)

TEAM_NAME_PATTERN = re.compile(r"[0-9a-z\-]+")

TEAM_NAME_REQUIRED = "newURL is required"
TEAM_NAME_CHARSET = "newURL can only contain lowercase letters, numbers and dashes"

TEAM_MEMBERSHIP_QUERY = """
    SELECT teams.id FROM users
        LEFT JOIN teams
        ON users.team_id = teams.id
        WHERE teams.subdomain = ?
        AND users.email = ?
"""


def subdomain_from_origin(origin: Optional[str]) -> str:
    """
    Extract the first host label from an Origin header value.

    ``https://acme.example.com:8443`` gives ``acme``. A missing header or one
    without a scheme separator gives an empty string.
    """
    if not origin or "://" not in origin:
        return ""
    host = origin.split("://", 1)[1]
    return host.split(".")[0]


def check_team_name(new_url: object) -> Optional[str]:
    """Return the validation message for a subdomain candidate, or None if it passes."""
    if not new_url:
        return TEAM_NAME_REQUIRED
    if not isinstance(new_url, str) or not TEAM_NAME_PATTERN.fullmatch(new_url):
        return TEAM_NAME_CHARSET
    return None


async def verify_team_name(request: Request) -> str:
    """
    Verify the ``newURL`` team name in a JSON request body.

    Stops at the first failing check and answers 400 ``{"error": ...}``.
    Returns the validated name for the handler.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None

    new_url = body.get("newURL") if isinstance(body, dict) else None
    error = check_team_name(new_url)
    if error:
        logger.info(f"Team name rejected: {error}")
        raise TeamNameValidationError(error)
    return new_url


async def verify_subdomain(
    request: Request,
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    db: Annotated[AbstractDatabase, Depends(get_database)]
) -> Optional[TeamContext]:
    """
    Verify the authenticated user has access to the Origin subdomain.

    The reserved subdomain (``www``) and origins without a subdomain skip
    resolution and yield no tenant context. Otherwise the team is looked up by
    subdomain joined with the user's email; no match answers 403 with an empty
    body. On success the context is attached to ``request.state.team``.
    """
    subdomain = subdomain_from_origin(request.headers.get("origin"))
    if not subdomain or subdomain == settings.reserved_subdomain:
        return None

    try:
        rows = await db.query(TEAM_MEMBERSHIP_QUERY, (subdomain, current_user.email))
    except Exception as e:
        logger.error(f"Tenant resolution failed for subdomain '{subdomain}': {e}", exc_info=True)
        raise TenantResolutionError()

    if not rows:
        logger.warning(f"User {current_user.id} denied access to subdomain '{subdomain}'.")
        raise TenantAccessDeniedError()

    team = TeamContext(id=rows[0]["id"], subdomain=subdomain)
    request.state.team = team
    return team


def require_team(team: Optional[TeamContext]) -> TeamContext:
    """Fail the handler when tenant resolution attached no context."""
    if team is None:
        raise ModelError("Team context is required.", status=status.HTTP_400_BAD_REQUEST)
    return team
