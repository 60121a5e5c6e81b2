"""Configuration loading for deadexports.

Settings can live in a YAML, TOML or JSON file. Without an explicit path,
the first of ``CONFIG_FILENAMES`` found next to the entry module is used.

Example ``.deadexports.yaml``::

    extensions: [.js, .ts, .mjs]
    candidates: [.ts, .js, /index.js, /index.ts]
    gc_interval: 0
    format: json
"""

import json
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from scanner.engine import DEFAULT_GC_INTERVAL
from scanner.resolver import DEFAULT_CANDIDATES, DEFAULT_EXTENSIONS


CONFIG_FILENAMES = (
    ".deadexports.yaml",
    ".deadexports.yml",
    ".deadexports.toml",
    ".deadexports.json",
)

OUTPUT_FORMATS = ("text", "json")


class ConfigError(Exception):
    """A configuration file is unreadable or holds invalid settings."""


@dataclass(frozen=True)
class Config:
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    candidates: List[str] = field(default_factory=lambda: list(DEFAULT_CANDIDATES))
    gc_interval: int = DEFAULT_GC_INTERVAL
    format: str = "text"

    def merged(self, **overrides: Any) -> "Config":
        """Return a copy with every override that is not None applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return _validate(replace(self, **changes))


def find_config(directory: Path) -> Optional[Path]:
    """Return the first config file found in directory, if any."""
    for name in CONFIG_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def parse_config_file(file_path: Path) -> Dict[str, Any]:
    """
    Parse a configuration file according to its suffix.

    Args:
        file_path: Path to a .yaml, .yml, .toml or .json file.

    Returns:
        The parsed mapping. An empty file yields an empty mapping.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    suffix = file_path.suffix.lower()

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"unable to read config file {str(file_path)!r}: {e}") from e

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(content)
        elif suffix == ".toml":
            data = tomllib.loads(content)
        elif suffix == ".json":
            data = json.loads(content)
        else:
            raise ConfigError(f"unsupported config format: {str(file_path)!r}")
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"invalid config file {str(file_path)!r}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {str(file_path)!r} must contain a mapping")
    return data


def load_config(path: Optional[Path] = None, search_dir: Optional[Path] = None) -> Config:
    """
    Load settings from a config file.

    Args:
        path: Explicit config file. Takes precedence over searching.
        search_dir: Directory searched for one of CONFIG_FILENAMES.

    Returns:
        The loaded Config, or the defaults when no file is found.

    Raises:
        ConfigError: If the file is invalid.
    """
    if path is None and search_dir is not None:
        path = find_config(search_dir)
    if path is None:
        return Config()

    data = parse_config_file(path)
    known = {f.name for f in fields(Config)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"unknown config keys in {str(path)!r}: {', '.join(unknown)}")

    return _validate(Config(**data))


def _validate(config: Config) -> Config:
    for name in ("extensions", "candidates"):
        value = getattr(config, name)
        if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) and v for v in value):
            raise ConfigError(f"{name!r} must be a list of non-empty strings")

    # bool is an int subclass
    if isinstance(config.gc_interval, bool) or not isinstance(config.gc_interval, int) or config.gc_interval < 0:
        raise ConfigError("'gc_interval' must be a non-negative integer")

    if config.format not in OUTPUT_FORMATS:
        raise ConfigError(f"'format' must be one of: {', '.join(OUTPUT_FORMATS)}")

    return config
