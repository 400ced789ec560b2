from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from noti.config.defaults import set_noti_defaults
from noti.config.env import bind_noti_env
from noti.config.flags import FlagSet
from noti.config.loader import load_dotenv_if_present
from noti.config.models import ConfigLoadRequest, LoggingSettings
from noti.config.store import LayeredConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_FLAG = "file"
VERBOSE_FLAG = "verbose"
DOTENV_FLAG = "dotenv"


def default_search_paths() -> list[Path]:
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
    return [Path("."), config_home / "noti"]


def setup_config_file(config: LayeredConfig) -> Optional[Path]:
    """Append the standard search paths and load the first config file found."""
    for path in default_search_paths():
        config.add_config_path(path)
    return config.read_in_config()


def configure_app(
    config: LayeredConfig,
    flags: FlagSet,
    request: ConfigLoadRequest = ConfigLoadRequest(),
) -> LayeredConfig:
    """
    Install all layers into config: defaults, file, environment, then flags.

    Raises ConfigParseError for a malformed config file, before anything else is bound.
    """
    set_noti_defaults(config)

    for path in request.search_paths:
        config.add_config_path(path)
    file_flag = flags.lookup(CONFIG_FILE_FLAG)
    if file_flag is not None and file_flag.changed and file_flag.value:
        config.set_config_file(file_flag.value)
    setup_config_file(config)

    dotenv_flag = flags.lookup(DOTENV_FLAG)
    dotenv_enabled = dotenv_flag.value if dotenv_flag is not None else True
    if request.dotenv_path is not None and dotenv_enabled:
        load_dotenv_if_present(Path(request.dotenv_path))
    bind_noti_env(config)

    config.bind_flags(flags)
    logger.debug("config.configured config_file=%s", config.config_file_used or "<none>")
    return config


def load_logging_settings(config: LayeredConfig) -> LoggingSettings:
    level = config.get_string("log.level").upper() or "WARNING"
    if config.get_bool(VERBOSE_FLAG):
        level = "DEBUG"
    return LoggingSettings(level=level, file=config.get_string("log.file") or None)
