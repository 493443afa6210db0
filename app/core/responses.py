"""
Uniform JSON envelope: {success, message?, data?, error?}

Endpoints return success_response(); failures are raised as ProposalHubError
subclasses and rendered by the handlers registered in register_exception_handlers().
"""
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.exceptions import ProposalHubError
from app.core.logging_config import logger
from app.core.validation import format_violations


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
    **extra: Any
) -> JSONResponse:
    """Wrap a successful result"""
    content: Dict[str, Any] = {"success": True}
    if message is not None:
        content["message"] = message
    if data is not None:
        content["data"] = data
    content.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def error_response(
    message: str,
    status_code: int,
    error: Any = None,
) -> JSONResponse:
    """Wrap a failure"""
    content: Dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


async def proposalhub_error_handler(request: Request, exc: ProposalHubError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
        if not settings.EXPOSE_ERROR_DETAILS:
            return error_response("An unexpected error occurred", exc.status_code, error={"code": exc.code})
    else:
        logger.info(
            f"{request.method} {request.url.path} rejected: {exc.code} - {exc.message}",
            extra={"event_type": "request_rejected", "error_code": exc.code}
        )
    return error_response(exc.message, exc.status_code, error=exc.to_dict())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    violations = format_violations(exc.errors())
    return error_response(
        "Invalid request data",
        status.HTTP_400_BAD_REQUEST,
        error={"code": "VALIDATION_ERROR", "message": "Invalid request data", "details": {"violations": violations}},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(str(exc.detail), exc.status_code)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
    return error_response(
        "An unexpected error occurred",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        error=str(exc) if settings.EXPOSE_ERROR_DETAILS else None,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProposalHubError, proposalhub_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
