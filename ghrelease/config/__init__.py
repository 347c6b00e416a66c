"""Configuration module."""

from .settings import (
    Config,
    DEFAULT_RELEASE_FILE,
    get_config,
    load_json_config,
    find_config_file,
)

__all__ = [
    "Config",
    "DEFAULT_RELEASE_FILE",
    "get_config",
    "load_json_config",
    "find_config_file",
]
