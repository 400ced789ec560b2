from __future__ import annotations

from typing import Mapping

from noti.config.defaults import BASE_DEFAULTS, DEFAULTS_KEY
from noti.config.store import LayeredConfig

ENV_PREFIX = "NOTI"


def env_var_for(key: str) -> str:
    return f"{ENV_PREFIX}_{key.replace('.', '_').upper()}"


def _build_key_env_bindings() -> dict[str, str]:
    bindings = {key: env_var_for(key) for key in BASE_DEFAULTS}
    bindings[DEFAULTS_KEY] = f"{ENV_PREFIX}_DEFAULT"
    return bindings


# One environment variable per recognized key, e.g. nsuser.soundName -> NOTI_NSUSER_SOUNDNAME.
KEY_ENV_BINDINGS: Mapping[str, str] = _build_key_env_bindings()


def bind_noti_env(config: LayeredConfig) -> None:
    config.bind_env(KEY_ENV_BINDINGS)
