from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

import uvicorn

logger = logging.getLogger(__name__)


class FileHostServer(uvicorn.Server):
    """uvicorn server that runs a callback once its sockets are listening."""

    def __init__(self, config: uvicorn.Config, on_listening: Optional[Callable[[], None]] = None) -> None:
        super().__init__(config)
        self._on_listening = on_listening
        self._listening_task: Optional[asyncio.Future] = None

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started and self._on_listening is not None:
            loop = asyncio.get_running_loop()
            # Blocking work (the tunnel handshake) stays off the event loop.
            self._listening_task = loop.run_in_executor(None, self._run_callback)

    def _run_callback(self) -> None:
        try:
            self._on_listening()
        except Exception:
            logger.exception("Post-startup hook failed")
