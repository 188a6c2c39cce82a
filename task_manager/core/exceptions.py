# =====================================================
# FILE: task_manager/core/exceptions.py
# API Error Taxonomy
# =====================================================

from fastapi import HTTPException, status

from task_manager.core.config import settings


class ValidationError(HTTPException):
    def __init__(self, detail: str = "The given data was invalid."):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class Unauthenticated(HTTPException):
    def __init__(self, detail: str = "Unauthenticated."):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentials(Unauthenticated):
    """Unknown email and wrong password produce the same response."""

    def __init__(self):
        super().__init__(detail="Invalid credentials")


class Forbidden(HTTPException):
    def __init__(self, detail: str = "You are not authorized to perform this action."):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ServerError(HTTPException):
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def server_error_from(exc: Exception) -> ServerError:
    """
    500 for an unexpected failure. The raw exception text stays in the server
    log unless EXPOSE_ERROR_DETAILS is enabled.
    """
    if settings.EXPOSE_ERROR_DETAILS:
        return ServerError(str(exc) or exc.__class__.__name__)
    return ServerError()
