# anymessage/integrations/endpoints.py
import logging
from fastapi import APIRouter, Depends, status
from starlette.responses import Response
from typing import Annotated, Optional

from .accessor import IntegrationAccessor
from .models import IntegrationSaveRequest
from ..dependencies import get_credential_encryptor, get_database
from ..errors import model_error_response
from ..storage.storage_interfaces import AbstractDatabase
from ..teams.middleware import require_team, verify_subdomain
from ..teams.models import TeamContext
from ..utils.security import FernetEncryptor

logger = logging.getLogger(__name__)

integration_router = APIRouter(prefix="/integration", tags=["Integrations"])


@integration_router.post("/save", status_code=status.HTTP_200_OK)
async def post_save(
    request_data: IntegrationSaveRequest,
    team: Annotated[Optional[TeamContext], Depends(verify_subdomain)],
    db: Annotated[AbstractDatabase, Depends(get_database)],
    encryptor: Annotated[FernetEncryptor, Depends(get_credential_encryptor)]
) -> Response:
    """
    Save credentials for one of the resolved team's integrations.

    Responds 200 with an empty body on success. On failure the status comes
    from the error (default 500) and ``{"error": message}`` is sent only when
    the error carries both a status and a message.
    """
    try:
        context = require_team(team)
        integration = await IntegrationAccessor(db, context.id, request_data.name, encryptor).init()
        await integration.save(request_data.authentication, request_data.providers)
        return Response(status_code=status.HTTP_200_OK)
    except Exception as e:
        logger.error(f"API: Saving integration '{request_data.name}' failed: {e}", exc_info=True)
        return model_error_response(e)
