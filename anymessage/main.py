# anymessage/main.py
from fastapi import FastAPI, Request
from starlette.responses import JSONResponse, Response
from contextlib import asynccontextmanager
import logging
from typing import Optional

from .settings import settings
from .auth.endpoints import auth_router
from .integrations.endpoints import integration_router
from .storage.storage_interfaces import AbstractDatabase
from .storage.sqlite_gateway import SQLiteDatabase
from .teams.endpoints import team_router
from .teams.errors import EmptyBodyHTTPError, TeamNameValidationError

if not logging.getLogger().hasHandlers():
    logging.basicConfig(
        level="DEBUG" if settings.debug_mode else "INFO",
        format='%(asctime)s - %(name)s [%(levelname)s] - %(message)s'
    )

logger = logging.getLogger(__name__)


@asynccontextmanager
async def anymessage_app_lifespan(app_instance: FastAPI):
    """
    Opens the SQLite gateway on startup and closes it on shutdown.

    A database passed to create_app is owned by the caller and left untouched.
    """
    owned_database: Optional[AbstractDatabase] = None
    if getattr(app_instance.state, "database", None) is None:
        owned_database = SQLiteDatabase(settings.sqlite_db_path)
        try:
            await owned_database.initialize()
        except Exception as e:
            logger.error(f"Error during storage backend initialization: {e}", exc_info=True)
            raise
        app_instance.state.database = owned_database
        logger.info("SQLite backend initialized.")

    logger.info("Application startup complete.")
    try:
        yield
    finally:
        if owned_database is not None:
            await owned_database.teardown()
            app_instance.state.database = None
        logger.info("Application shutdown complete.")


async def empty_body_error_handler(request: Request, exc: EmptyBodyHTTPError) -> Response:
    return Response(status_code=exc.status_code)


async def team_name_error_handler(request: Request, exc: TeamNameValidationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


def create_app(database: Optional[AbstractDatabase] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        database: An already initialized persistence gateway. When omitted,
            the lifespan opens the SQLite database from settings.
    """
    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug_mode,
        lifespan=anymessage_app_lifespan
    )
    app.state.database = database

    app.add_exception_handler(EmptyBodyHTTPError, empty_body_error_handler)
    app.add_exception_handler(TeamNameValidationError, team_name_error_handler)

    app.include_router(auth_router)
    app.include_router(team_router)
    app.include_router(integration_router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok", "app_name": settings.app_name}

    return app


app = create_app()
