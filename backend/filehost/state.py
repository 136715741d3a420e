from __future__ import annotations

import platform
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from .config import Settings
from .scanner import DEFAULT_SCAN_CONFIG, ScanConfig, scan


@dataclass
class ServerContext:
    """
    Everything request handlers need, passed explicitly instead of globals.

    ``tunnel_url`` is written once by the tunnel publisher after startup and
    only read afterwards.
    """

    settings: Settings
    scan_config: ScanConfig = DEFAULT_SCAN_CONFIG
    tunnel_url: Optional[str] = None
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_tunnel(self) -> bool:
        return bool(self.tunnel_url)

    def available_files(self) -> List[str]:
        return scan(self.settings.content_root, self.scan_config)


def python_version() -> str:
    return platform.python_version()
