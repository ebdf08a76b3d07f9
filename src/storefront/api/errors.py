"""Maps domain exceptions to HTTP responses.

Every error body has the same shape: ``{"error": code, "message": text,
"details": {...}}``. Business rejections keep their stable codes so clients
can branch on them. Anything unexpected becomes an opaque 500.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.domain import logger
from storefront.errors import ConcurrencyConflict, NotAuthorized, PersistenceError, StorefrontError

_STATUS_BY_ERROR = {
    NotAuthorized: 403,
    ConcurrencyConflict: 409,
}


def _body(error, message, details=None):
    return {"error": error, "message": message, "details": details or {}}


def _first_message(messages) -> str:
    for field_messages in messages.values():
        if field_messages:
            return str(field_messages[0])
    return "Invalid request"


async def storefront_error_handler(request: Request, exc: StorefrontError):
    status_code = _STATUS_BY_ERROR.get(type(exc), 400)
    logger.info("Request rejected", path=request.url.path, error=exc.code, status_code=status_code)
    return JSONResponse(status_code=status_code, content=_body(exc.code, exc.message, exc.details))


async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=400,
        content=_body("validation_error", _first_message(exc.messages), exc.messages),
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=_body("validation_error", "Invalid request body", {"errors": jsonable_encoder(exc.errors())}),
    )


async def not_found_handler(request: Request, exc: ObjectNotFoundError):
    return JSONResponse(status_code=404, content=_body("not_found", "Resource not found"))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    message = str(exc) if isinstance(exc, PersistenceError) else "Internal server error"
    return JSONResponse(status_code=500, content=_body("internal_error", message))


def register_error_handlers(app: FastAPI) -> None:
    # Starlette picks the handler for the most specific class in the MRO
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
