"""
Exception handlers.

Maps the VisualRAGException hierarchy, request validation errors and
HTTPException onto the {success: false, error, details} envelope. Any other
exception becomes a logged 500 with the same envelope.

Dependencies: fastapi, visual_rag.core.exceptions
System role: Error envelope for every route
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from visual_rag.core.exceptions import VisualRAGException
from visual_rag.models.common import ErrorResponse
from visual_rag.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, details: dict | None = None) -> JSONResponse:
    body = ErrorResponse(error=message, details=details or None)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


async def handle_visual_rag_exception(request: Request, exc: VisualRAGException) -> JSONResponse:
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    log_with_context(
        logger,
        level,
        f"{request.method} {request.url.path} - {type(exc).__name__}: {exc.message}",
        status_code=exc.status_code,
        error_type=type(exc).__name__,
        details=exc.details,
    )
    return error_response(exc.status_code, exc.message, exc.details)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"Invalid request: {location} {first.get('msg', '')}".strip() if location else "Invalid request"
    logger.warning(f"{request.method} {request.url.path} - Request validation failed: {message}")
    summary = [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in errors]
    return error_response(400, message, {"errors": summary})


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    log_exception_with_context(
        logger,
        f"{request.method} {request.url.path} - Unhandled {type(exc).__name__}",
        exc,
        path=request.url.path,
    )
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(VisualRAGException, handle_visual_rag_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)
