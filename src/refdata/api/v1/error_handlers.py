"""
FastAPI exception handlers that map repository errors to HTTP responses.

Every error leaves the API as one JSON shape:

    {"statusCode": 404, "message": "City with {\"id\":1} not found", "error": "Not Found"}

Status codes are decided here from the error's `ErrorKind`; the repository layer
knows nothing about HTTP. Unknown errors never expose driver text.
"""
import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from refdata.exceptions.base import ErrorKind, RepositoryError
from refdata.exceptions.mapper import map_db_error

logger = logging.getLogger(__name__)

GENERIC_SERVER_MESSAGE = "Unexpected database error"

KIND_TO_STATUS: dict[ErrorKind, HTTPStatus] = {
    ErrorKind.INVALID_ARGUMENT: HTTPStatus.BAD_REQUEST,
    ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorKind.UNIQUE_VIOLATION: HTTPStatus.CONFLICT,
    ErrorKind.FOREIGN_KEY_VIOLATION: HTTPStatus.BAD_REQUEST,
    ErrorKind.NOT_NULL_VIOLATION: HTTPStatus.BAD_REQUEST,
    ErrorKind.CHECK_VIOLATION: HTTPStatus.BAD_REQUEST,
    ErrorKind.UNKNOWN: HTTPStatus.INTERNAL_SERVER_ERROR,
}


def error_payload(status: HTTPStatus, message: str) -> dict:
    return {"statusCode": status.value, "message": message, "error": status.phrase}


def error_response(status: HTTPStatus, message: str) -> JSONResponse:
    return JSONResponse(status_code=status.value, content=error_payload(status, message))


def repository_error_response(exc: RepositoryError) -> JSONResponse:
    status = KIND_TO_STATUS.get(exc.kind, HTTPStatus.INTERNAL_SERVER_ERROR)
    if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
        return error_response(status, GENERIC_SERVER_MESSAGE)
    return error_response(status, exc.message)


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """
    400/404/409 for client-class errors, 500 with a generic message otherwise.
    """
    if exc.kind is ErrorKind.UNKNOWN:
        logger.warning("RepositoryError for %s %s: %s", request.method, request.url.path, str(exc))
    else:
        logger.info(
            "%s for %s %s: fields=%s", type(exc).__name__, request.method, request.url.path, exc.fields
        )
    return repository_error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    400 Bad Request for body/query validation failures.
    """
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        text = error.get("msg", "Invalid value")
        messages.append(f"{location}: {text}" if location else text)
    logger.info("Validation failed for %s %s: %s", request.method, request.url.path, messages)
    return error_response(HTTPStatus.BAD_REQUEST, "; ".join(messages) or "Invalid request")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Keep framework errors (unknown route, wrong method) in the same shape."""
    status = HTTPStatus(exc.status_code)
    message = exc.detail if isinstance(exc.detail, str) else status.phrase
    response = error_response(status, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last resort: run the error through the normalizer so a storage error that
    escaped a repository still gets its proper status, and hide everything else.
    """
    mapped = map_db_error(exc, model_name=None)
    if mapped.kind is ErrorKind.UNKNOWN:
        logger.exception("Unhandled error for %s %s", request.method, request.url.path)
    return repository_error_response(mapped)


# Helper to register all handlers on an app (call this from the app factory)
def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
