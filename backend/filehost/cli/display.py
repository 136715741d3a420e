from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

EMPTY_FILES_HINT = "No files found. Add files to version directories (e.g., 1.1.0/)"


def banner(title: str, width: int = 55) -> List[str]:
    """Render a boxed title line."""
    inner = width - 2
    return [
        "╔" + "═" * inner + "╗",
        "║   " + title.ljust(inner - 3) + "║",
        "╚" + "═" * inner + "╝",
    ]


def render_startup(local_url: str, content_root: Path, python_version: str) -> List[str]:
    return [
        "",
        *banner("File Hosting Server Running"),
        "",
        f"Local URL: {local_url}",
        f"Serving Directory: {content_root}",
        f"Python: {python_version}",
    ]


def render_file_urls(base_url: str, files: Iterable[str]) -> List[str]:
    """List the full download URL of every file, or a hint when there are none."""
    entries = list(files)
    if not entries:
        return [EMPTY_FILES_HINT]
    base = base_url.rstrip("/")
    return ["Available Files:", *(f"   {base}{path}" for path in entries)]


def render_public(public_url: str, files: Iterable[str]) -> List[str]:
    return [
        "",
        *banner("Public URL (HTTPS)"),
        "",
        f"Public URL: {public_url}",
        "",
        *render_file_urls(public_url, files),
        "",
        "Server is ready!",
        'First-time visitors may see the ngrok warning page (click "Visit Site")',
        "",
        "Stop Server: Ctrl+C",
    ]


def render_tunnel_failure(local_url: str, files: Iterable[str]) -> List[str]:
    entries = list(files)
    lines = [
        "",
        "Ngrok failed, but server is still running locally.",
        "",
        f"Local URL: {local_url}",
        "",
    ]
    if entries:
        lines.extend(render_file_urls(local_url, entries))
    lines.extend(["", "To disable ngrok: USE_NGROK=false filehost (or filehost --no-tunnel)"])
    return lines


def render_local_mode(local_url: str, files: Iterable[str]) -> List[str]:
    return [
        "",
        "Local Mode (ngrok disabled)",
        "",
        f"Local URL: {local_url}",
        "",
        *render_file_urls(local_url, files),
        "",
        "To enable ngrok: unset USE_NGROK (or set USE_NGROK=true)",
    ]
