from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FileRotationSettings(BaseModel):
    """
    Date-based rotation settings (daily).

    This maps cleanly to Python's standard library TimedRotatingFileHandler behavior.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    backup_count: int = 5


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    level: str = "WARNING"
    file: Optional[str] = None
    rotation: FileRotationSettings = Field(default_factory=FileRotationSettings)


@dataclass(frozen=True, slots=True)
class ConfigLoadRequest:
    """
    Optional inputs for configure_app.

    `search_paths` are checked before the standard locations.
    """

    search_paths: tuple[str, ...] = ()
    dotenv_path: Optional[str] = ".env"
