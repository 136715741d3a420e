"""filehost: local file-hosting server for installer downloads."""

__version__ = "1.0.0"
