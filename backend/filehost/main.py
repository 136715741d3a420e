# main.py
# Entry point for the file host service.
# - Builds the FastAPI app around a ServerContext
# - Registers operational routes, error handlers and the static download mount
# - Run with: filehost  (or: uvicorn filehost.main:create_app --factory)
from __future__ import annotations

import sys
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from . import __version__
from .api.errors import register_exception_handlers
from .api.middleware import log_requests
from .api.routes import router
from .api.static import DownloadStaticFiles
from .config import load_settings
from .state import ServerContext


def create_app(context: Optional[ServerContext] = None) -> FastAPI:
    if context is None:
        context = ServerContext(settings=load_settings())

    app = FastAPI(
        title="File Host",
        description="Local installer download server",
        version=__version__,
    )
    app.state.context = context

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    register_exception_handlers(app)
    app.include_router(router)

    # Mounted last so the explicit routes above take precedence.
    app.mount(
        "/",
        DownloadStaticFiles(directory=str(context.settings.content_root), check_dir=False),
        name="downloads",
    )
    return app


if __name__ == "__main__":
    from .cli.app import main as cli_main

    sys.exit(cli_main())
