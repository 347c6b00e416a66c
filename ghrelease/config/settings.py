"""Configuration management for ghrelease."""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..errors import ConfigError


DEFAULT_RELEASE_FILE = "RELEASE"
DEFAULT_GITHUB_API_URL = "https://api.github.com"

# GitHub Actions exposes action inputs and run metadata through these variables.
ACTIONS_ENV = {
    'github_token': 'INPUT_TOKEN',
    'release_file': 'INPUT_RELEASE_FILE',
    'workspace': 'GITHUB_WORKSPACE',
    'event_name': 'GITHUB_EVENT_NAME',
    'event_path': 'GITHUB_EVENT_PATH',
    'github_api_url': 'GITHUB_API_URL',
    'output_file': 'GITHUB_OUTPUT',
}


class Config(BaseSettings):
    """Configuration settings for ghrelease."""

    model_config = SettingsConfigDict(env_prefix="GHRELEASE_", case_sensitive=False)

    github_token: Optional[str] = None
    github_api_url: str = DEFAULT_GITHUB_API_URL
    release_file: str = DEFAULT_RELEASE_FILE
    git_path: str = "git"
    workspace: Optional[str] = None
    event_name: Optional[str] = None
    event_path: Optional[str] = None
    output_file: Optional[str] = None

    @field_validator('github_api_url')
    @classmethod
    def normalize_api_url(cls, v):
        """Ensure the API URL has a protocol and no trailing slash."""
        if v and not v.startswith(('http://', 'https://')):
            v = f"https://{v}"
        return v.rstrip('/')

    @field_validator('release_file')
    @classmethod
    def default_release_file(cls, v):
        """Fall back to the default release file when given an empty value."""
        return v.strip() or DEFAULT_RELEASE_FILE


def load_json_config(config_path: str) -> dict:
    """Load settings from a JSON file.

    Args:
        config_path: Path to JSON settings file

    Returns:
        Settings dictionary
    """
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Error loading config file {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")
    return data


def find_config_file() -> Optional[str]:
    """Find a settings file in common locations.

    Returns:
        Path to settings file or None if not found
    """
    search_paths = [
        "ghrelease.json",
        ".ghrelease.json",
        "~/.config/ghrelease/config.json",
    ]

    for path_str in search_paths:
        path = Path(path_str).expanduser()
        if path.exists() and path.is_file():
            return str(path)

    return None


def get_config(config_file: Optional[str] = None) -> Config:
    """Load settings from a JSON file, the Actions environment and GHRELEASE_* variables.

    Later sources win: JSON file, then GitHub Actions variables, then
    GHRELEASE_* variables.

    Args:
        config_file: Optional path to JSON settings file

    Returns:
        Configuration object
    """
    config_data = {}

    json_config_path = config_file or find_config_file()
    if json_config_path:
        config_data.update(load_json_config(json_config_path))

    actions_config = {key: os.getenv(name) for key, name in ACTIONS_ENV.items()}
    config_data.update({k: v for k, v in actions_config.items() if v})

    # Init kwargs outrank the environment in pydantic-settings, so GHRELEASE_*
    # values have to be dropped from the explicit data to take effect.
    for key in Config.model_fields:
        if os.getenv(f"GHRELEASE_{key.upper()}") is not None:
            config_data.pop(key, None)

    try:
        return Config(**config_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
