from __future__ import annotations

import logging
from typing import Callable, Optional

from pyngrok import conf, ngrok

from ..state import ServerContext

logger = logging.getLogger(__name__)

Connector = Callable[[int, Optional[str]], str]
Disconnector = Callable[[str], None]


def ngrok_connect(port: int, auth_token: Optional[str]) -> str:
    """Open an HTTP tunnel to ``port`` and return its public URL."""
    pyngrok_config = conf.PyngrokConfig(auth_token=auth_token) if auth_token else None
    tunnel = ngrok.connect(port, "http", pyngrok_config=pyngrok_config)
    return tunnel.public_url


def ngrok_disconnect(public_url: str) -> None:
    ngrok.disconnect(public_url)
    ngrok.kill()


class TunnelPublisher:
    """Publishes the local server through ngrok and records the URL on the context."""

    def __init__(
        self,
        context: ServerContext,
        *,
        connect: Connector = ngrok_connect,
        disconnect: Disconnector = ngrok_disconnect,
    ) -> None:
        self.context = context
        self._connect = connect
        self._disconnect = disconnect
        self.error: Optional[Exception] = None

    def publish(self, port: int) -> Optional[str]:
        """
        Request a public HTTPS endpoint forwarding to ``port``.

        Returns the public URL, or None when the tunnel could not be opened.
        Failures are logged and never propagate: the server keeps serving locally.
        """
        try:
            public_url = self._connect(port, self.context.settings.ngrok_auth_token)
        except Exception as exc:
            self.error = exc
            logger.error("Failed to start ngrok: %s", exc)
            return None

        self.context.tunnel_url = public_url.rstrip("/")
        logger.info("Tunnel established at %s", self.context.tunnel_url)
        return self.context.tunnel_url

    def close(self) -> None:
        if not self.context.tunnel_url:
            return
        try:
            self._disconnect(self.context.tunnel_url)
        except Exception as exc:
            logger.warning("Could not close tunnel %s: %s", self.context.tunnel_url, exc)
        finally:
            self.context.tunnel_url = None
