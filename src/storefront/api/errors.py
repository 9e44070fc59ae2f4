"""Translate domain exceptions into HTTP responses.

Every error body has the shape ``{"errors": [message, ...]}``. Unexpected
exceptions are logged with their traceback and reported as a generic 500.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.shared.errors import ConflictError, ForbiddenError, InvalidStatusError

logger = structlog.get_logger(__name__)

# Most specific first: the three subclasses share ValidationError as base
_VALIDATION_STATUS = (
    (ConflictError, 409),
    (ForbiddenError, 403),
    (InvalidStatusError, 422),
    (ValidationError, 400),
)

GENERIC_MESSAGE = "Something went wrong"


def error_messages(exc: Exception) -> list[str]:
    """Flatten a Protean ``messages`` payload (dict, list or str) into a list of strings."""
    messages = getattr(exc, "messages", None) or str(exc)
    if isinstance(messages, dict):
        flat = []
        for value in messages.values():
            flat.extend(value if isinstance(value, (list, tuple)) else [value])
        return [str(m) for m in flat]
    if isinstance(messages, (list, tuple)):
        return [str(m) for m in messages]
    return [str(messages)]


def status_for(exc: ValidationError) -> int:
    for error_cls, status_code in _VALIDATION_STATUS:
        if isinstance(exc, error_cls):
            return status_code
    return 400


def _errors(status_code: int, messages: list[str]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"errors": messages})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        status_code = status_for(exc)
        logger.info("request_rejected", path=request.url.path, status=status_code, errors=error_messages(exc))
        return _errors(status_code, error_messages(exc))

    @app.exception_handler(ObjectNotFoundError)
    async def handle_not_found(request: Request, exc: ObjectNotFoundError):
        return _errors(404, ["Not found"])

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        messages = [
            f"{'.'.join(str(p) for p in error['loc'] if p != 'body')}: {error['msg']}" for error in exc.errors()
        ]
        return _errors(400, messages)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _errors(exc.status_code, [str(exc.detail)])

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path, method=request.method)
        return _errors(500, [GENERIC_MESSAGE])
