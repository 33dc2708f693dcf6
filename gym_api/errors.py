"""Error types and FastAPI exception handlers.

Every failure leaves the API as the same JSON shape,
`{statusCode, error, message, issues?}`. Handlers are registered by
`install_error_handlers` from the app factory.
"""

from http import HTTPStatus
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gym_shared.errors import ApiErrorBody, Issue


class ApiError(Exception):
    """Base class for errors that map directly onto an HTTP response."""
    status_code: int = 500
    error: str = "InternalServerError"
    message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, issues: Optional[List[Issue]] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.issues = issues

    def to_body(self) -> ApiErrorBody:
        return ApiErrorBody(
            status_code=self.status_code,
            error=self.error,
            message=self.message,
            issues=self.issues,
        )


class RequestValidationFailed(ApiError):
    """The request body does not conform to the create schema."""
    status_code = 400
    error = "ValidationError"
    message = "Invalid request body"

    def __init__(self, issues: List[Issue]):
        super().__init__(issues=issues)


class StorageFault(ApiError):
    """The database is unreachable or rejected the operation."""
    status_code = 500
    error = "StorageFault"
    message = "Storage unavailable"


def _respond(body: ApiErrorBody, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=body.status_code, content=body.to_json(), headers=headers)


async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    return _respond(exc.to_body())


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        phrase = HTTPStatus(exc.status_code).phrase
    except ValueError:
        phrase = "Error"
    body = ApiErrorBody(status_code=exc.status_code, error=phrase, message=str(exc.detail))
    return _respond(body, headers=getattr(exc, "headers", None))


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report body parsing failures in the same shape as schema failures.

    FastAPI prefixes locations with `body`; that prefix is dropped so the
    paths match what the shared schema reports.
    """
    issues = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] == "body":
            loc = loc[1:]
        issues.append(Issue(path=".".join(loc), message=err.get("msg", "Invalid value")))
    return _respond(RequestValidationFailed(issues).to_body())


def unexpected_error_response(exc: Exception) -> JSONResponse:
    """500 response for a fault no handler claimed; the caller logs it."""
    body = ApiErrorBody(
        status_code=500,
        error=type(exc).__name__,
        message=str(exc) or "Internal Server Error",
    )
    return _respond(body)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
