import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.exceptions import BusinessException, RequestValidationFailed
from app.schemas.common import ExceptionResponse

logger = logging.getLogger(__name__)


def _respond(status_code: int, body: ExceptionResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.to_body())


async def business_exception_handler(request: Request, exc: BusinessException):
    code = exc.error_code
    logger.info(f"{request.method} {request.url.path} rejected: {code.name} - {exc.message}")
    return _respond(
        code.http_status,
        ExceptionResponse(
            businessErrorCode=code.code,
            businessErrorDescription=code.description,
            error=exc.message,
        ),
    )


async def validation_failed_handler(request: Request, exc: RequestValidationFailed):
    return _respond(
        status.HTTP_400_BAD_REQUEST,
        ExceptionResponse(
            validationErrors=sorted({message for _, message in exc.errors}),
            errors={field: message for field, message in exc.errors},
        ),
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Body/query parameters FastAPI could not bind (wrong types, bad JSON)."""
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors[field or "body"] = error.get("msg", "Invalid value")
    return _respond(
        status.HTTP_400_BAD_REQUEST,
        ExceptionResponse(validationErrors=sorted(set(errors.values())), errors=errors),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return _respond(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ExceptionResponse(
            businessErrorDescription="Internal error, please contact the admin",
            error=str(exc),
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(RequestValidationFailed, validation_failed_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
