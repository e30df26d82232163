# anymessage/dependencies.py
import logging
from fastapi import HTTPException, Request, status

from .settings import settings
from .storage.storage_interfaces import AbstractDatabase
from .utils.security import FernetEncryptor

logger = logging.getLogger(__name__)


def get_database(request: Request) -> AbstractDatabase:
    """
    Provides the persistence gateway attached to the application.

    The gateway is created by the application lifespan (or passed to
    create_app) and handed to each handler explicitly through this dependency.
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        logger.critical("No database is attached to the application. Was the lifespan started?")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage backend is not available.",
        )
    return database


def get_credential_encryptor() -> FernetEncryptor:
    """Provides the encryptor used for integration credentials."""
    return FernetEncryptor(settings.encryption_key)
