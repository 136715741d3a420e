from __future__ import annotations

import os
from typing import Tuple
from urllib.parse import quote

from fastapi import HTTPException
from fastapi.staticfiles import StaticFiles
from starlette.responses import Response
from starlette.types import Scope

BINARY_EXTENSIONS: Tuple[str, ...] = (".msi", ".exe", ".dmg", ".pkg", ".deb", ".rpm")
CACHE_CONTROL = "public, max-age=3600"


def is_binary(path: str) -> bool:
    return path.lower().endswith(BINARY_EXTENSIONS)


def content_disposition(filename: str) -> str:
    # Header values go out as latin-1; other names need the RFC 5987 form.
    try:
        filename.encode("latin-1")
    except UnicodeEncodeError:
        return f"attachment; filename*=utf-8''{quote(filename)}"
    return f'attachment; filename="{filename}"'


def apply_download_headers(response: Response, full_path: str) -> Response:
    if is_binary(full_path):
        filename = os.path.basename(full_path)
        response.headers["Content-Type"] = "application/octet-stream"
        response.headers["Content-Disposition"] = content_disposition(filename)
        response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Cache-Control"] = CACHE_CONTROL
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


class DownloadStaticFiles(StaticFiles):
    """StaticFiles that hides dotfiles and marks installers as attachments."""

    async def get_response(self, path: str, scope: Scope) -> Response:
        parts = [part for part in path.replace("\\", "/").split("/") if part]
        if any(part.startswith(".") for part in parts):
            raise HTTPException(status_code=404)
        return await super().get_response(path, scope)

    def file_response(self, full_path, stat_result, scope, status_code=200) -> Response:
        response = super().file_response(full_path, stat_result, scope, status_code)
        return apply_download_headers(response, str(full_path))
