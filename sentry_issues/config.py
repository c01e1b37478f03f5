# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Configuration for the Sentry issues CLI.

Values come from four places, highest priority first:
1. CLI flags (--token, --server, --org)
2. Environment variables (SENTRY_AUTH_TOKEN, SENTRY_SERVER_URL, SENTRY_ORG)
3. <config dir>/sentry-cli/config.toml
4. Built-in defaults (server URL only)

Config file format:
    default_org = "my-organization"
    server_url = "https://sentry.io"
    auth_token = "sntrys_..."
    default_project = "my-project"

Manage via: sentry config set <key> <value>
"""

import logging
import os
import tomllib
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

import click
import tomli_w

from sentry_issues.constants import (
    APP_DIR_NAME,
    CONFIG_FILENAME,
    CONFIG_KEYS,
    DEFAULT_SERVER_URL,
    ENV_AUTH_TOKEN,
    ENV_ORG,
    ENV_SERVER_URL,
)
from sentry_issues.errors import AuthError, ConfigError, IoError, ValidationError

logger = logging.getLogger(__name__)

CONFIG_TEMPLATE = """# Sentry CLI Configuration

# Default organization slug
# default_org = "my-organization"

# Sentry server URL (for self-hosted instances)
# server_url = "https://sentry.io"

# Auth token (SENTRY_AUTH_TOKEN env var takes precedence)
# auth_token = "sntrys_..."

# Default project slug
# default_project = "my-project"
"""


def _first(*values: Optional[str]) -> Optional[str]:
    """First value that is set and non-empty."""
    for value in values:
        if value:
            return value
    return None


@dataclass
class Config:
    """Persisted settings; every field is optional."""

    default_org: Optional[str] = None
    server_url: Optional[str] = None
    auth_token: Optional[str] = None
    default_project: Optional[str] = None

    def get_auth_token(self, cli_override: Optional[str] = None) -> str:
        """Auth token: CLI flag > env var > config file.

        Raises:
            AuthError: If no source provides a token.
        """
        token = _first(cli_override, os.environ.get(ENV_AUTH_TOKEN), self.auth_token)
        if token is None:
            raise AuthError(f'No auth token found. Set {ENV_AUTH_TOKEN} or configure in config file')
        return token

    def get_server_url(self, cli_override: Optional[str] = None) -> str:
        """Server URL: CLI flag > env var > config file > https://sentry.io."""
        return _first(cli_override, os.environ.get(ENV_SERVER_URL), self.server_url) or DEFAULT_SERVER_URL

    def get_org(self, cli_override: Optional[str] = None) -> str:
        """Organization slug: CLI flag > env var > config file.

        Raises:
            ConfigError: If no source provides an organization.
        """
        org = _first(cli_override, os.environ.get(ENV_ORG), self.default_org)
        if org is None:
            raise ConfigError('No organization specified. Use --org or configure default_org')
        return org

    def describe(self) -> Dict[str, Tuple[Optional[str], str]]:
        """Effective value and its source for each key, ignoring CLI flags."""
        env_for = {'auth_token': ENV_AUTH_TOKEN, 'server_url': ENV_SERVER_URL, 'default_org': ENV_ORG}
        described: Dict[str, Tuple[Optional[str], str]] = {}
        for key in CONFIG_KEYS:
            env_name = env_for.get(key)
            env_value = os.environ.get(env_name) if env_name else None
            file_value = getattr(self, key)
            if env_value:
                described[key] = (env_value, env_name)
            elif file_value:
                described[key] = (file_value, 'config')
            elif key == 'server_url':
                described[key] = (DEFAULT_SERVER_URL, 'default')
            else:
                described[key] = (None, 'not set')
        return described

    def to_toml_dict(self) -> Dict[str, str]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def config_path() -> Path:
    """Path to config.toml inside the platform config directory."""
    return Path(click.get_app_dir(APP_DIR_NAME)) / CONFIG_FILENAME


def _parse_config(data: dict) -> Config:
    known = {key: str(data[key]) for key in CONFIG_KEYS if data.get(key) is not None}
    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        logger.warning(f'Ignoring unknown config keys: {", ".join(unknown)}')
    return Config(**known)


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration from file.

    A missing file gives an empty Config. An unreadable or invalid file is
    reported as a warning and also gives an empty Config.
    """
    path = path or config_path()
    if not path.exists():
        return Config()
    try:
        with open(path, 'rb') as f:
            return _parse_config(tomllib.load(f))
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning(f'Could not read config at {path}: {e}')
        return Config()


def save_config(config: Config, path: Optional[Path] = None) -> Path:
    """Write configuration to file, creating the directory if needed.

    Raises:
        IoError: If the file cannot be written.
    """
    path = path or config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'wb') as f:
            tomli_w.dump(config.to_toml_dict(), f)
    except OSError as e:
        raise IoError(f'Failed to save config to {path}: {e}') from e
    return path


def init_config_file(path: Optional[Path] = None) -> Path:
    """Create a commented config template.

    Raises:
        ConfigError: If a config file already exists.
        IoError: If the file cannot be written.
    """
    path = path or config_path()
    if path.exists():
        raise ConfigError(f'Config file already exists at {path}')
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(CONFIG_TEMPLATE, encoding='utf-8')
    except OSError as e:
        raise IoError(f'Failed to create config at {path}: {e}') from e
    return path


def set_config_value(key: str, value: str, path: Optional[Path] = None) -> Optional[str]:
    """Set one key in the config file and return its previous value.

    Raises:
        ValidationError: If ``key`` is not a known config key.
        IoError: If the file cannot be written.
    """
    if key not in CONFIG_KEYS:
        raise ValidationError(f'Unknown config key: {key}. Valid keys: {", ".join(CONFIG_KEYS)}')

    config = load_config(path)
    old_value = getattr(config, key)
    setattr(config, key, value)
    save_config(config, path)
    return old_value
