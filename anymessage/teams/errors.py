# anymessage/teams/errors.py
from fastapi import HTTPException, status


class EmptyBodyHTTPError(HTTPException):
    """HTTP error whose response carries a status code and no body.

    Used where the response must not reveal whether a tenant exists.
    """

    def __init__(self, status_code: int):
        super().__init__(status_code=status_code)


class TenantAccessDeniedError(EmptyBodyHTTPError):
    """The authenticated user does not belong to the team named by the Origin host."""

    def __init__(self):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN)


class TenantResolutionError(EmptyBodyHTTPError):
    """The store failed while resolving the tenant for a request."""

    def __init__(self):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


class TeamNameValidationError(HTTPException):
    """A team subdomain candidate failed input validation.

    Rendered as ``{"error": detail}`` with status 400.
    """

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
