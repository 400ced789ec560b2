from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Protocol

from noti.config.flags import parse_bool
from noti.config.loader import find_config_file, flatten_settings, parse_yaml_config, read_yaml_config

if TYPE_CHECKING:
    from noti.config.flags import FlagSet

logger = logging.getLogger(__name__)

_LIST_SEPARATORS = re.compile(r"[\s,]+")


class _Missing:
    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


class Layer(Protocol):
    name: str

    def lookup(self, key: str) -> Any:
        """Return the bound value, or MISSING if this layer does not bind the key."""

    def keys(self) -> Iterable[str]:
        """Return the keys this layer currently binds."""


def _normalize_key(key: str) -> str:
    return key.strip().lower()


def _normalize_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return value


class MappingLayer:
    def __init__(self, name: str, data: Optional[Mapping[str, Any]] = None) -> None:
        self.name = name
        self._data: dict[str, Any] = {}
        if data:
            self.replace(data)

    def set(self, key: str, value: Any) -> None:
        self._data[_normalize_key(key)] = _normalize_value(value)

    def replace(self, data: Mapping[str, Any]) -> None:
        self._data = {_normalize_key(k): _normalize_value(v) for k, v in data.items()}

    def lookup(self, key: str) -> Any:
        return self._data.get(key, MISSING)

    def keys(self) -> Iterable[str]:
        return list(self._data)


class EnvLayer:
    """
    Environment overrides for bound keys.

    Variables are read at lookup time, so changes to the environment after binding are
    visible without re-binding. Unset and empty variables bind nothing.
    """

    name = "env"

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = environ
        self._bindings: dict[str, str] = {}

    @property
    def bindings(self) -> Mapping[str, str]:
        return dict(self._bindings)

    def bind(self, key: str, env_var: str) -> None:
        self._bindings[_normalize_key(key)] = env_var

    def _read(self, env_var: str) -> Optional[str]:
        environ = os.environ if self._environ is None else self._environ
        value = environ.get(env_var)
        return value or None

    def lookup(self, key: str) -> Any:
        env_var = self._bindings.get(key)
        if env_var is None:
            return MISSING
        value = self._read(env_var)
        return MISSING if value is None else value

    def keys(self) -> Iterable[str]:
        return [key for key, env_var in self._bindings.items() if self._read(env_var) is not None]


class FlagLayer:
    """Flags the user explicitly supplied. Untouched flags bind nothing."""

    name = "flags"

    def __init__(self, flags: FlagSet) -> None:
        self._flags = flags

    def lookup(self, key: str) -> Any:
        for flag in self._flags.changed_flags():
            if flag.name.lower() == key:
                return flag.value
        return MISSING

    def keys(self) -> Iterable[str]:
        return [flag.name.lower() for flag in self._flags.changed_flags()]


class LayeredConfig:
    """
    Merged configuration view over ranked layers.

    Precedence, highest first: flags, environment, file, defaults. Lookups scan the layers
    in that order and return the first binding; nothing is merged eagerly.
    """

    def __init__(self, *, environ: Optional[Mapping[str, str]] = None) -> None:
        self._defaults = MappingLayer("defaults")
        self._file = MappingLayer("file")
        self._env = EnvLayer(environ)
        self._flags: Optional[FlagLayer] = None

        self._config_paths: list[Path] = []
        self._config_file: Optional[Path] = None
        self._config_file_used: Optional[Path] = None

    @property
    def layers(self) -> tuple[Layer, ...]:
        ordered: list[Layer] = []
        if self._flags is not None:
            ordered.append(self._flags)
        ordered.extend([self._env, self._file, self._defaults])
        return tuple(ordered)

    # Layer construction

    def set_default(self, key: str, value: Any) -> None:
        self._defaults.set(key, value)

    def add_config_path(self, path: Path | str) -> None:
        candidate = Path(path).expanduser()
        if candidate not in self._config_paths:
            self._config_paths.append(candidate)

    @property
    def config_paths(self) -> list[Path]:
        return list(self._config_paths)

    def set_config_file(self, path: Path | str) -> None:
        self._config_file = Path(path).expanduser()

    @property
    def config_file_used(self) -> str:
        return str(self._config_file_used) if self._config_file_used is not None else ""

    def read_in_config(self) -> Optional[Path]:
        """
        Locate and load the config file into the file layer.

        Returns the path used, or None when no file was found. An explicitly set config
        file that does not exist raises FileNotFoundError; a malformed file raises
        ConfigParseError.
        """
        if self._config_file is not None:
            path = self._config_file
            if not path.is_file():
                raise FileNotFoundError(f"Config file not found: {path}")
        else:
            path = find_config_file(self._config_paths)
            if path is None:
                logger.debug("config.file_not_found search_paths=%s", [str(p) for p in self._config_paths])
                return None

        data = read_yaml_config(path)
        self._file.replace(flatten_settings(data))
        self._config_file_used = path
        logger.debug("config.file_loaded path=%s", path)
        return path

    def read_config(self, raw: str, *, source: str = "<string>") -> None:
        """Replace the file layer with the settings parsed from raw YAML text."""
        self._file.replace(flatten_settings(parse_yaml_config(raw, source=source)))
        self._config_file_used = None

    def bind_env(self, bindings: Mapping[str, str]) -> None:
        for key, env_var in bindings.items():
            self._env.bind(key, env_var)

    def bind_flags(self, flags: FlagSet) -> None:
        self._flags = FlagLayer(flags)

    # Lookups

    def get(self, key: str, default: Any = None) -> Any:
        normalized = _normalize_key(key)
        for layer in self.layers:
            value = layer.lookup(normalized)
            if value is not MISSING:
                return value
        return default

    def source_of(self, key: str) -> Optional[str]:
        normalized = _normalize_key(key)
        for layer in self.layers:
            if layer.lookup(normalized) is not MISSING:
                return layer.name
        return None

    def is_set(self, key: str) -> bool:
        return self.source_of(key) is not None

    def get_string(self, key: str) -> str:
        value = self.get(key)
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def get_string_list(self, key: str) -> list[str]:
        value = self.get(key)
        if value is None:
            return []
        if isinstance(value, list):
            return list(value)
        return [part for part in _LIST_SEPARATORS.split(str(value)) if part]

    def get_bool(self, key: str) -> bool:
        value = self.get(key)
        if value is None or isinstance(value, list):
            return False
        try:
            return parse_bool(value)
        except ValueError:
            return False

    def all_keys(self) -> list[str]:
        keys: set[str] = set()
        for layer in self.layers:
            keys.update(layer.keys())
        return sorted(keys)

    def all_settings(self) -> dict[str, Any]:
        """Resolved settings for every bound key, nested by section."""
        out: dict[str, Any] = {}
        for key in self.all_keys():
            *sections, leaf = key.split(".")
            cur = out
            for section in sections:
                nxt = cur.setdefault(section, {})
                if not isinstance(nxt, dict):
                    break
                cur = nxt
            else:
                cur[leaf] = self.get(key)
        return out

    def sub(self, section: str) -> dict[str, Any]:
        value = self.all_settings().get(_normalize_key(section))
        return value if isinstance(value, dict) else {}
