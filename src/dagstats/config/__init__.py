"""
dagstats.config - Configuration loading and defaults
"""

from dagstats.config.defaults import DEFAULT_CONFIG
from dagstats.config.loader import (
    CONFIG_FILENAME,
    ConfigError,
    _apply_env_overrides,
    _try_parse_env_value,
    default_config,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    validate_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_CONFIG",
    "default_config",
    "find_config_file",
    "get_config",
    "load_config",
    "merge_configs",
    "validate_config",
]
