# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Tests for ``sentry config`` init/show/set."""

import json
import tomllib


def read_toml(path):
    with open(path, 'rb') as f:
        return tomllib.load(f)


class TestConfigInit:
    def test_creates_template(self, cli_root, runner, isolated_config):
        result = runner.invoke(cli_root, ['config', 'init'])

        assert result.exit_code == 0, result.output
        assert 'Created config file at' in result.output
        assert 'Edit the file to add your auth token and organization.' in result.output
        assert isolated_config.exists()
        assert read_toml(isolated_config) == {}

    def test_refuses_existing_file(self, cli_root, runner, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text('default_org = "acme"\n', encoding='utf-8')

        result = runner.invoke(cli_root, ['config', 'init'])

        assert result.exit_code == 1
        assert 'Configuration error: Config file already exists' in result.output
        assert read_toml(isolated_config) == {'default_org': 'acme'}


class TestConfigSet:
    def test_writes_value(self, cli_root, runner, isolated_config):
        result = runner.invoke(cli_root, ['config', 'set', 'default_org', 'acme'])

        assert result.exit_code == 0, result.output
        assert 'Updated default_org to "acme"' in result.output
        assert read_toml(isolated_config) == {'default_org': 'acme'}

    def test_masks_token_in_message(self, cli_root, runner, isolated_config):
        result = runner.invoke(cli_root, ['cfg', 'set', 'auth_token', 'sntrys_very_secret_value'])

        assert result.exit_code == 0, result.output
        assert 'sntrys_very_secret_value' not in result.output
        assert 'sntr****' in result.output
        assert read_toml(isolated_config)['auth_token'] == 'sntrys_very_secret_value'

    def test_unknown_key(self, cli_root, runner, isolated_config):
        result = runner.invoke(cli_root, ['config', 'set', 'colour', 'red'])

        assert result.exit_code == 1
        assert 'Unknown config key: colour' in result.output
        assert not isolated_config.exists()


class TestConfigShow:
    def test_table(self, cli_root, runner, isolated_config, monkeypatch):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text('default_org = "acme"\nauth_token = "sntrys_very_secret_value"\n', encoding='utf-8')
        monkeypatch.setenv('SENTRY_SERVER_URL', 'https://self.example.com')

        result = runner.invoke(cli_root, ['config', 'show'])

        assert result.exit_code == 0, result.output
        assert 'Config file:' in result.output
        assert 'acme' in result.output
        assert 'SENTRY_SERVER_URL' in result.output
        assert 'sntrys_very_secret_value' not in result.output

    def test_bare_group_shows_config(self, cli_root, runner):
        result = runner.invoke(cli_root, ['config'])

        assert result.exit_code == 0, result.output
        assert 'Config file:' in result.output
        assert 'not set' in result.output

    def test_json(self, cli_root, runner, isolated_config, monkeypatch):
        monkeypatch.setenv('SENTRY_AUTH_TOKEN', 'sntrys_env_secret_token')

        result = runner.invoke(cli_root, ['-O', 'json', 'config', 'show'])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data['config_file'] == str(isolated_config)
        assert data['settings']['auth_token'] == {'value': 'sntr****', 'source': 'SENTRY_AUTH_TOKEN'}
        assert data['settings']['server_url'] == {'value': 'https://sentry.io', 'source': 'default'}
        assert data['settings']['default_project'] == {'value': None, 'source': 'not set'}
