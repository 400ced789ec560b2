from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Sequence

import yaml
from dotenv import load_dotenv

from noti.errors import ConfigParseError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES: Sequence[str] = ("noti.yaml", "noti.yml")


def find_config_file(
    search_paths: Iterable[Path | str],
    names: Sequence[str] = CONFIG_FILE_NAMES,
) -> Optional[Path]:
    """Return the first config file found in the ranked search paths, or None."""
    for directory in search_paths:
        for name in names:
            candidate = Path(directory) / name
            if candidate.is_file():
                return candidate
    return None


def parse_yaml_config(raw: str, *, source: Path | str = "<string>") -> dict[str, Any]:
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML in config file: {source}: {e}", path=source) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Top-level YAML must be a mapping, got: {type(data).__name__} ({source})",
            path=source,
        )
    return data


def read_yaml_config(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"Config file is not valid UTF-8: {path}", path=path) from e
    return parse_yaml_config(raw, source=path)


def flatten_settings(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested sections into dotted keys. Lists are kept as leaf values."""
    out: dict[str, Any] = {}
    for k, v in data.items():
        key = f"{prefix}{k}"
        if isinstance(v, Mapping):
            out.update(flatten_settings(v, prefix=f"{key}."))
            continue
        if isinstance(v, (list, tuple)):
            out[key] = [str(item) for item in v]
        elif v is None:
            # An empty section or value binds nothing.
            continue
        elif isinstance(v, bool):
            out[key] = "true" if v else "false"
        else:
            out[key] = str(v)
    return out


def load_dotenv_if_present(dotenv_path: Path) -> bool:
    if not dotenv_path.exists():
        return False
    logger.debug("config.dotenv_loaded path=%s", dotenv_path)
    return load_dotenv(dotenv_path=dotenv_path, override=False)
