from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Request

logger = logging.getLogger(__name__)


def client_address(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "-"


async def log_requests(request: Request, call_next):
    timestamp = datetime.now(timezone.utc).isoformat()
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    logger.info("[%s] %s %s - %s", timestamp, request.method, path, client_address(request))
    return await call_next(request)
