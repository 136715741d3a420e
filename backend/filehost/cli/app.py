from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

import uvicorn

from ..config import Settings, is_valid_port, load_settings
from ..main import create_app
from ..ports import BindError, PortInUseError, PortReconciler, bind_socket
from ..state import ServerContext, python_version
from ..tunnel import TunnelPublisher
from .console import ConsoleIO
from .display import render_local_mode, render_public, render_startup, render_tunnel_failure
from .server import FileHostServer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve installer downloads over HTTP, optionally through ngrok.")
    parser.add_argument("--port", type=int, help="TCP port to listen on (default: $PORT or 8080).")
    parser.add_argument("--host", help="Address to bind (default: $HOST or 0.0.0.0).")
    parser.add_argument(
        "--root",
        type=Path,
        help="Directory to serve (default: $FILEHOST_ROOT or the current directory).",
    )
    parser.add_argument(
        "--no-tunnel",
        action="store_true",
        help="Do not publish the server through ngrok.",
    )
    parser.add_argument("--log-level", help="Logging level (default: $LOG_LEVEL or INFO).")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def uvicorn_log_level(level: str) -> str:
    name = level.lower()
    return name if name in uvicorn.config.LOG_LEVELS else "info"


def announce(context: ServerContext, io: ConsoleIO, publisher: Optional[TunnelPublisher]) -> None:
    """Print where the server can be reached, publishing the tunnel first if enabled."""
    settings = context.settings
    _write_lines(io, render_startup(settings.local_url, settings.content_root, python_version()))

    if publisher is None:
        _write_lines(io, render_local_mode(settings.local_url, context.available_files()))
        return

    io.write("")
    io.write("Starting ngrok tunnel...")
    public_url = publisher.publish(settings.port)
    if public_url:
        _write_lines(io, render_public(public_url, context.available_files()))
    else:
        io.write_error(f"Failed to start ngrok: {publisher.error}")
        _write_lines(io, render_tunnel_failure(settings.local_url, context.available_files()))


def _write_lines(io: ConsoleIO, lines: List[str]) -> None:
    for line in lines:
        io.write(line)


def main(
    argv: list[str] | None = None,
    *,
    io: Optional[ConsoleIO] = None,
    reconciler_factory: Optional[Callable[[ConsoleIO], PortReconciler]] = None,
) -> int:
    args = build_parser().parse_args(argv)
    settings: Settings = load_settings(
        port=args.port,
        host=args.host,
        content_root=args.root,
        use_tunnel=False if args.no_tunnel else None,
        log_level=args.log_level,
    )
    configure_logging(settings.log_level)
    io = io or ConsoleIO()

    if not is_valid_port(settings.port):
        logger.error("Port %s is out of range", settings.port)
        io.write_error(f"Failed to start server: port must be between 1 and 65535, got {settings.port}")
        return 1

    if not settings.content_root.is_dir():
        io.write_error(f"Content root {settings.content_root} is not a directory")
        return 1

    if reconciler_factory is None:
        reconciler = PortReconciler(ask=io.prompt, notify=io.write_warning)
    else:
        reconciler = reconciler_factory(io)
    result = reconciler.reconcile(settings.port)
    if not result.ok:
        io.write_error(f"Failed to start server: {result.message}")
        return 1
    if result.conflict is not None:
        io.write_success("Process killed successfully")

    try:
        sock = bind_socket(settings.host, settings.port)
    except PortInUseError as exc:
        logger.error("%s", exc)
        io.write_error(f"Port {settings.port} is already in use")
        io.write("Please close the other application or change PORT in the .env file")
        return 1
    except BindError as exc:
        logger.error("Server error: %s", exc)
        io.write_error(str(exc))
        return 1

    context = ServerContext(settings=settings)
    publisher = TunnelPublisher(context) if settings.use_tunnel else None
    config = uvicorn.Config(
        create_app(context),
        log_level=uvicorn_log_level(settings.log_level),
        access_log=False,
    )
    server = FileHostServer(config, on_listening=lambda: announce(context, io, publisher))

    try:
        server.run(sockets=[sock])
    except KeyboardInterrupt:
        # uvicorn re-raises the captured SIGINT once it has shut down cleanly.
        logger.info("Server stopped")
    finally:
        if publisher is not None:
            publisher.close()
        sock.close()

    return 0 if server.started else 1


if __name__ == "__main__":
    sys.exit(main())
