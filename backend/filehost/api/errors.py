from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .models import ErrorResponse, NotFoundResponse

logger = logging.getLogger(__name__)

EMPTY_HINT = "(Add files to version directories like 1.1.0/)"


def requested_path(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def available_endpoints(files: list[str]) -> list[str]:
    if files:
        return [*files, "/health"]
    return ["/health", EMPTY_HINT]


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        context = request.app.state.context
        body = NotFoundResponse(
            path=requested_path(request),
            availableEndpoints=available_endpoints(context.available_files()),
        )
        return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    body = ErrorResponse(error=str(exc.detail), path=requested_path(request))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Starlette only calls this before the response has started; afterwards it just logs.
    logger.error("Error handling %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    body = ErrorResponse(error="Internal server error", message=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
