from fastapi import HTTPException

from app.exceptions import RegistrationValidationError, SportifyError


def to_http_exception(exc: SportifyError) -> HTTPException:
    """Maps a domain error to the HTTP error the routers return."""
    if isinstance(exc, RegistrationValidationError):
        return HTTPException(status_code=exc.status_code, detail={"errors": exc.errors})
    return HTTPException(status_code=exc.status_code, detail=exc.message)
