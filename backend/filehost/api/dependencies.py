from __future__ import annotations

from fastapi import Request

from ..state import ServerContext


def get_context(request: Request) -> ServerContext:
    return request.app.state.context
