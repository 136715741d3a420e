from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"
PUBLIC_ASSETS_DIR = Path(__file__).resolve().parent.parent / "public"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the file host."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    use_tunnel: bool = True
    ngrok_auth_token: Optional[str] = None
    content_root: Path = Path(".")
    public_dir: Path = PUBLIC_ASSETS_DIR
    log_level: str = "INFO"

    @property
    def local_url(self) -> str:
        return f"http://localhost:{self.port}"


def is_valid_port(port: int) -> bool:
    return 0 < port < 65536


def parse_port(raw: Optional[str], default: int = DEFAULT_PORT) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        port = int(raw)
    except ValueError:
        logger.warning("Invalid PORT value %r, using %s", raw, default)
        return default
    if not is_valid_port(port):
        logger.warning("PORT %s is out of range, using %s", port, default)
        return default
    return port


def tunnel_enabled(raw: Optional[str]) -> bool:
    # Anything other than the literal "false" keeps the tunnel on.
    return raw != "false"


def load_settings(env: Optional[Mapping[str, str]] = None, **overrides: Any) -> Settings:
    """
    Build settings from a ``.env`` file, the environment and explicit overrides.

    Args:
        env: Mapping to read instead of ``os.environ`` (skips ``.env`` loading)
        overrides: Field values that win over the environment; ``None`` values are ignored

    Returns:
        Frozen Settings instance
    """
    if env is None:
        load_dotenv()
        env = os.environ

    settings = Settings(
        port=parse_port(env.get("PORT")),
        host=env.get("HOST") or DEFAULT_HOST,
        use_tunnel=tunnel_enabled(env.get("USE_NGROK")),
        ngrok_auth_token=env.get("NGROK_AUTHTOKEN") or None,
        content_root=Path(env.get("FILEHOST_ROOT") or ".").resolve(),
        public_dir=Path(env.get("FILEHOST_PUBLIC_DIR") or PUBLIC_ASSETS_DIR).resolve(),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )

    explicit = {key: value for key, value in overrides.items() if value is not None}
    for key in ("content_root", "public_dir"):
        if key in explicit:
            explicit[key] = Path(explicit[key]).resolve()
    if "log_level" in explicit:
        explicit["log_level"] = str(explicit["log_level"]).upper()
    return replace(settings, **explicit) if explicit else settings
