"""
errors.py — Error envelope contracts, domain exceptions and their handlers.

Every non-2xx response body has the shape:
    {"error": {"code": "...", "message": "...", "details": [...]}}

register_exception_handlers(app) wires the handlers; main.py calls it before
including any router.
"""
import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from starlette.exceptions import HTTPException as StarletteHTTPException

from fives.config import settings

logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
}


class ErrorDetail(BaseModel):
    model_config = ConfigDict(extra="forbid")

    field: Optional[str] = None
    issue: str


class ErrorBody(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str
    message: str
    details: List[ErrorDetail] = []


class ErrorResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    error: ErrorBody


class OnboardingRequiredError(Exception):
    """
    Raised by protected endpoints when the session has no completed onboarding.
    Rendered as 409 ONBOARDING_REQUIRED with the redirect target in details.
    """

    redirect = "/onboarding"

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session '{session_id}' has not completed onboarding")


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[List[ErrorDetail]] = None,
) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(code=code, message=message, details=details or []))
    return JSONResponse(status_code=status_code, content=body.model_dump())


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """All field violations in one response; the leading 'body' loc is dropped."""
    details = [
        ErrorDetail(
            field=".".join(str(loc) for loc in error["loc"] if loc != "body") or None,
            issue=error["msg"],
        )
        for error in exc.errors()
    ]
    return error_response(422, "VALIDATION_ERROR", "Request validation failed", details)


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = HTTP_ERROR_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")
    return error_response(exc.status_code, code, str(exc.detail))


async def _onboarding_required(request: Request, exc: OnboardingRequiredError) -> JSONResponse:
    # The client follows details[0].issue to the onboarding route
    return error_response(
        409,
        "ONBOARDING_REQUIRED",
        str(exc),
        [ErrorDetail(field="redirect", issue=exc.redirect)],
    )


async def _value_error(request: Request, exc: ValueError) -> JSONResponse:
    """Invalid state transitions and stage payloads raise ValueError."""
    return error_response(422, "VALIDATION_ERROR", str(exc))


async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=True)
    if settings.debug:
        return error_response(
            500,
            "INTERNAL_ERROR",
            "An unexpected error occurred (debug details included)",
            [ErrorDetail(issue=f"{type(exc).__name__}: {exc}")],
        )
    return error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(OnboardingRequiredError, _onboarding_required)
    app.add_exception_handler(ValueError, _value_error)
    app.add_exception_handler(Exception, _unhandled)
