from __future__ import annotations

import errno
import logging
import socket
from typing import Optional

import psutil

from .errors import BindError, KillFailedError, PortInUseError
from .models import PortConflict

logger = logging.getLogger(__name__)


def find_listening_pid(port: int) -> Optional[PortConflict]:
    """Return the process listening on TCP ``port``, or None when the port is free."""
    for proc in psutil.process_iter(attrs=["pid", "name"]):
        try:
            for conn in proc.net_connections(kind="tcp"):
                if conn.laddr and conn.laddr.port == port and conn.status == psutil.CONN_LISTEN:
                    return PortConflict(port=port, pid=proc.info["pid"], name=proc.info.get("name"))
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            continue
    return None


def kill_process(pid: int) -> None:
    """Force-kill ``pid`` (SIGKILL on POSIX, TerminateProcess on Windows)."""
    try:
        proc = psutil.Process(pid)
        proc.kill()
        proc.wait(timeout=5)
    except psutil.NoSuchProcess:
        logger.info("Process %s already exited", pid)
    except psutil.TimeoutExpired as exc:
        raise KillFailedError(f"Process {pid} did not exit after kill", "KILL_TIMEOUT") from exc
    except psutil.Error as exc:
        raise KillFailedError(f"Failed to kill process {pid}: {exc}", "KILL_FAILED") from exc


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind a TCP socket for the HTTP server, translating bind errors."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OverflowError as exc:
        sock.close()
        raise BindError(f"Could not bind {host}:{port}: {exc}", "BIND_FAILED") from exc
    except OSError as exc:
        sock.close()
        if exc.errno == errno.EADDRINUSE:
            raise PortInUseError(f"Port {port} is already in use", "EADDRINUSE") from exc
        raise BindError(f"Could not bind {host}:{port}: {exc}", "BIND_FAILED") from exc
    return sock
