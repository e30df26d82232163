# anymessage/teams/endpoints.py
import logging
from fastapi import APIRouter, Depends, Query, status
from typing import Annotated, Optional

from .accessor import TeamAccessor
from .middleware import check_team_name, require_team, verify_subdomain, verify_team_name
from .models import TeamAvailabilityResponse, TeamContext, TeamDetailResponse, TeamResponse
from ..auth.dependencies import get_current_user, get_user_store
from ..auth.models import AuthenticatedUser
from ..auth.user_store import UserStore
from ..billing.service import AbstractBillingService, get_billing_service
from ..dependencies import get_database
from ..errors import ModelError, model_error_response
from ..storage.storage_interfaces import AbstractDatabase

logger = logging.getLogger(__name__)

team_router = APIRouter(prefix="/team", tags=["Teams"])


@team_router.get("/available", response_model=TeamAvailabilityResponse)
async def get_available(
    subdomain: Annotated[str, Query(description="Subdomain to check.")],
    db: Annotated[AbstractDatabase, Depends(get_database)]
):
    """Check whether a subdomain can still be claimed."""
    try:
        error = check_team_name(subdomain)
        if error:
            raise ModelError(error, status=status.HTTP_400_BAD_REQUEST)
        available = await TeamAccessor.available(db, subdomain)
        return TeamAvailabilityResponse(subdomain=subdomain, available=available)
    except Exception as e:
        logger.error(f"API: Availability check failed for '{subdomain}': {e}")
        return model_error_response(e)


@team_router.post("/create", response_model=TeamResponse, status_code=status.HTTP_201_CREATED)
async def post_create(
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    new_url: Annotated[str, Depends(verify_team_name)],
    user_store: Annotated[UserStore, Depends(get_user_store)],
    db: Annotated[AbstractDatabase, Depends(get_database)]
):
    """Create a team for the authenticated user. Returns 409 if the subdomain is taken."""
    logger.info(f"API: User {current_user.id} creating team '{new_url}'.")
    try:
        if current_user.team_id is not None:
            raise ModelError("User already belongs to a team.", status=status.HTTP_409_CONFLICT)
        if not await TeamAccessor.available(db, new_url):
            raise ModelError(f"Subdomain '{new_url}' is already taken.", status=status.HTTP_409_CONFLICT)

        team = await TeamAccessor(db).create(new_url)
        try:
            await user_store.assign_team(current_user.id, team.id)
        except Exception:
            logger.error(
                f"API: Team {team.id} ('{new_url}') was created but could not be assigned to user "
                f"{current_user.id}; it is left without members.",
                exc_info=True
            )
            raise
        return TeamResponse(id=team.id, subdomain=team.get_subdomain())
    except Exception as e:
        logger.error(f"API: Team creation failed for '{new_url}': {e}")
        return model_error_response(e)


@team_router.put("/subdomain", response_model=TeamResponse)
async def put_subdomain(
    team: Annotated[Optional[TeamContext], Depends(verify_subdomain)],
    new_url: Annotated[str, Depends(verify_team_name)],
    db: Annotated[AbstractDatabase, Depends(get_database)]
):
    """Move the resolved team to a new subdomain. Returns 409 if it is taken."""
    try:
        context = require_team(team)
        if not await TeamAccessor.available(db, new_url):
            raise ModelError(f"Subdomain '{new_url}' is already taken.", status=status.HTTP_409_CONFLICT)

        bound = await TeamAccessor(db, context.id).init()
        bound = await bound.set_subdomain(new_url)
        return TeamResponse(id=bound.id, subdomain=bound.get_subdomain())
    except Exception as e:
        logger.error(f"API: Subdomain change to '{new_url}' failed: {e}")
        return model_error_response(e)


@team_router.get("", response_model=TeamDetailResponse)
async def get_team(
    team: Annotated[Optional[TeamContext], Depends(verify_subdomain)],
    db: Annotated[AbstractDatabase, Depends(get_database)],
    billing: Annotated[AbstractBillingService, Depends(get_billing_service)]
):
    """Return the resolved team with its subscription status."""
    try:
        context = require_team(team)
        bound = await TeamAccessor(db, context.id, billing=billing).init()
        return TeamDetailResponse(
            id=bound.id,
            subdomain=bound.get_subdomain(),
            customer_id=bound.get_customer_id(),
            has_active_subscription=await bound.has_active_subscription()
        )
    except Exception as e:
        logger.error(f"API: Reading team failed: {e}")
        return model_error_response(e)
