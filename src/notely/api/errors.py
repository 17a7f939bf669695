"""Global exception handlers.

Every error leaves the API as ``{"s": false, "message": ...}``:
NotelyError subclasses carry their own status, request validation becomes
422 with per-field messages, and anything unexpected becomes a generic 500.
"""

from collections import defaultdict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.exceptions import AuthError, InternalError, NotelyError, ValidationError
from ..core.logging import get_logger

logger = get_logger("errors")

# request sections FastAPI prefixes onto error locations
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(NotelyError)
    async def notely_error_handler(request: Request, exc: NotelyError):
        logger.warning(
            f"{exc.code}: {exc.message}",
            extra={"path": request.url.path, "status_code": exc.http_status},
        )
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(), headers=headers
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}", extra={"errors": exc.errors()})
        error = ValidationError(errors=format_validation_errors(exc.errors()))
        return JSONResponse(status_code=error.http_status, content=error.to_response())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"s": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(f"Unhandled exception on {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=InternalError().to_response(),
        )


def format_validation_errors(errors) -> dict[str, list[str]]:
    """Group pydantic errors by field name."""
    grouped: dict[str, list[str]] = defaultdict(list)
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        field = ".".join(loc) or "request"
        grouped[field].append(err.get("msg", "Invalid value"))
    return dict(grouped)
