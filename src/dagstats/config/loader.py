"""
dagstats.config.loader - Locate, parse and merge configuration files.

Configuration lives in ``.dagstats.toml``. Values from the file are merged
over DEFAULT_CONFIG, then ``DAGSTATS_<SECTION>_<KEY>`` environment variables
are applied on top.
"""

from __future__ import annotations

import copy
import json
import os
import re
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from dagstats.config.defaults import DEFAULT_CONFIG

CONFIG_FILENAME = ".dagstats.toml"
ENV_PREFIX = "DAGSTATS_"
OUTPUT_FORMATS = ("text", "json")


class ConfigError(ValueError):
    """A configuration file could not be parsed or holds an invalid value."""


def find_config_file(start: Path) -> Path | None:
    """Find the nearest config file, searching upward from ``start``.

    Args:
        start: Directory (or file) to start from.

    Returns:
        Path to the config file, or None if none exists up to the root.
    """
    current = start.resolve()
    if current.is_file():
        current = current.parent

    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def parse_toml(content: str, source: str = "<string>") -> dict[str, Any]:
    """Parse TOML text into plain Python containers.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        return tomlkit.parse(content).unwrap()
    except TOMLKitError as e:
        raise ConfigError(f"Invalid TOML in {source}: {e}") from e


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Nested tables are merged key by key; any other value replaces the base.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Interpret an environment variable string.

    Booleans ("true"/"false", any case), integers and JSON arrays/objects are
    converted; anything else, including malformed JSON, stays a string.
    """
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    if re.fullmatch(r"-?\d+", value):
        return int(value)

    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value

    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply ``DAGSTATS_<SECTION>_<KEY>`` environment variables to ``config``.

    ``DAGSTATS_ANALYSIS_MAX_PATHS=100`` sets ``config["analysis"]["max_paths"]``.
    Missing sections are created.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) != 2 or not all(parts):
            continue
        section, key = parts
        if not isinstance(config.get(section), dict):
            config[section] = {}
        config[section][key] = _try_parse_env_value(raw)
    return config


def _require_non_negative_int(config: dict[str, Any], section: str, key: str) -> None:
    value = config.get(section, {}).get(key)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"{section}.{key} must be a non-negative integer, got {value!r}")


def validate_config(config: dict[str, Any]) -> dict[str, Any]:
    """Check the merged configuration values commands rely on.

    Raises:
        ConfigError: Naming the first key with an invalid value.
    """
    for section in ("parser", "analysis", "output"):
        if not isinstance(config.get(section), dict):
            raise ConfigError(f"[{section}] must be a table, got {config.get(section)!r}")

    strict = config["parser"].get("strict")
    if not isinstance(strict, bool):
        raise ConfigError(f"parser.strict must be true or false, got {strict!r}")

    _require_non_negative_int(config, "analysis", "max_paths")
    _require_non_negative_int(config, "output", "depth_precision")
    _require_non_negative_int(config, "output", "ref_precision")

    output_format = config["output"].get("format")
    if output_format not in OUTPUT_FORMATS:
        choices = ", ".join(OUTPUT_FORMATS)
        raise ConfigError(f"output.format must be one of {choices}, got {output_format!r}")

    return config


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a config file merged over the defaults.

    Raises:
        ConfigError: If the file is not valid TOML or a value is invalid.
        OSError: If the file cannot be read.
    """
    content = Path(config_path).read_text(encoding="utf-8")
    user_config = parse_toml(content, source=str(config_path))
    config = merge_configs(DEFAULT_CONFIG, user_config)
    return validate_config(_apply_env_overrides(config))


def default_config() -> dict[str, Any]:
    """Defaults with environment overrides, for runs without a config file.

    Raises:
        ConfigError: If an environment override holds an invalid value.
    """
    return validate_config(_apply_env_overrides(copy.deepcopy(DEFAULT_CONFIG)))


def get_config(config_path: Path | None = None, start_path: Path | None = None) -> dict[str, Any]:
    """Resolve the configuration commands should use.

    An explicit ``config_path`` wins; otherwise the nearest ``.dagstats.toml``
    above ``start_path`` (default: the working directory) is used, falling
    back to the defaults when there is none.
    """
    if config_path is None:
        config_path = find_config_file(start_path or Path.cwd())
    if config_path is None:
        return default_config()
    return load_config(config_path)
