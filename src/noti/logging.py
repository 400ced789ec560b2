from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from noti.config.models import LoggingSettings

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def init_logging(settings: LoggingSettings) -> None:
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)

    formatter = logging.Formatter(_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if settings.file:
        path = Path(settings.file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            path,
            when="midnight",
            backupCount=settings.rotation.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # aiohttp logs every connection retry at DEBUG.
    logging.getLogger("aiohttp").setLevel(max(level, logging.INFO))
