from __future__ import annotations


class PortError(Exception):
    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.code = code


class KillFailedError(PortError):
    pass


class BindError(PortError):
    pass


class PortInUseError(BindError):
    pass
