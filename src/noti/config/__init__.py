"""Layered configuration: defaults, config file, environment, and flags."""

from noti.config.defaults import BASE_DEFAULTS, set_noti_defaults
from noti.config.env import KEY_ENV_BINDINGS, bind_noti_env
from noti.config.flags import Flag, FlagSet
from noti.config.models import ConfigLoadRequest, LoggingSettings
from noti.config.resolver import configure_app, load_logging_settings, setup_config_file
from noti.config.store import LayeredConfig

__all__ = [
    "BASE_DEFAULTS",
    "ConfigLoadRequest",
    "Flag",
    "FlagSet",
    "KEY_ENV_BINDINGS",
    "LayeredConfig",
    "LoggingSettings",
    "bind_noti_env",
    "configure_app",
    "load_logging_settings",
    "set_noti_defaults",
    "setup_config_file",
]
