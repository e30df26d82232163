# anymessage/errors.py
from typing import Optional

from starlette.responses import JSONResponse, Response


class ModelError(Exception):
    """Base exception for entity accessor failures.

    Carries an optional HTTP ``status`` and a ``message``. Errors raised by the
    persistence gateway are wrapped into this type with their original message,
    keeping any ``status`` attribute the underlying error carried.
    """

    NO_INIT = "Model must be initialized with init() or create() before use."

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status

    @classmethod
    def wrap(cls, exc: Exception) -> "ModelError":
        """Wrap a store error, passing ModelErrors through untouched."""
        if isinstance(exc, ModelError):
            return exc
        message = getattr(exc, "message", None) or str(exc)
        return cls(message, status=getattr(exc, "status", None))


class NotInitializedError(ModelError):
    """An accessor operation was called before init() or create() bound it."""

    def __init__(self, message: str = ModelError.NO_INIT):
        super().__init__(message)


class TeamNotFoundError(ModelError):
    """No team row matches the requested id."""

    def __init__(self, team_id: int):
        super().__init__(f"Cannot find team with id {team_id}.", status=404)
        self.team_id = team_id


class TeamCreationError(ModelError):
    """The store accepted an insert but reported no row back."""

    def __init__(self, message: str = "Team was not created. Please verify model integrity."):
        super().__init__(message)


def model_error_response(exc: Exception) -> Response:
    """
    Build the client-facing response for a failed handler.

    Status comes from the error's ``status`` attribute (default 500). A JSON
    body ``{"error": message}`` is emitted only when the error carries both a
    status and a message; otherwise the body is empty.
    """
    status = getattr(exc, "status", None)
    message = getattr(exc, "message", None)
    if status and message:
        return JSONResponse(status_code=status, content={"error": message})
    return Response(status_code=status or 500)
