from __future__ import annotations

from pathlib import Path
from typing import Optional


class NotiError(Exception):
    pass


class ConfigParseError(NotiError):
    """A configuration file was found but could not be parsed."""

    def __init__(self, message: str, *, path: Optional[Path | str] = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else ""


class DispatchError(NotiError):
    """A notification service failed to deliver."""

    def __init__(self, message: str, *, service: str = "") -> None:
        super().__init__(message)
        self.service = service
