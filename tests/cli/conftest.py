# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Shared fixtures for CLI tests."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from sentry_issues.cli.main import cli


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Point the config dir at a temp dir and clear SENTRY_* variables."""
    monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path / 'xdg'))
    for name in ('SENTRY_AUTH_TOKEN', 'SENTRY_SERVER_URL', 'SENTRY_ORG'):
        monkeypatch.delenv(name, raising=False)
    return tmp_path / 'xdg' / 'sentry-cli' / 'config.toml'


@pytest.fixture
def cli_root():
    return cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def auth_args():
    """Global flags that satisfy token and org resolution."""
    return ['--token', 'sntrys_test_token_1234', '--org', 'acme']


@pytest.fixture
def mock_request():
    with patch('sentry_issues.client.requests.request') as mocked:
        yield mocked
