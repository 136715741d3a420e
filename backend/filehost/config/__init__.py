from .settings import DEFAULT_PORT, PUBLIC_ASSETS_DIR, Settings, is_valid_port, load_settings, parse_port, tunnel_enabled

__all__ = [
    "DEFAULT_PORT",
    "PUBLIC_ASSETS_DIR",
    "Settings",
    "is_valid_port",
    "load_settings",
    "parse_port",
    "tunnel_enabled",
]
