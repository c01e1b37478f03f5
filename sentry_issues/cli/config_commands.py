# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
CLI commands for managing the sentry CLI configuration.

Users can configure:
- Default organization (default_org)
- Server URL for self-hosted instances (server_url)
- Auth token (auth_token)
- Default project for `issues list` (default_project)
"""

import click
from rich.markup import escape

from sentry_issues.config import config_path, init_config_file, set_config_value
from sentry_issues.constants import CONFIG_KEYS
from sentry_issues.utils.utils import mask_secret

from .issue_commands.help import StyledAliasGroup, StyledCommand
from .issue_commands.helpers import CliState, console, emit_json, pass_state, print_info, print_success
from .issue_commands.tables import build_table


@click.group(
    name='config',
    cls=StyledAliasGroup,
    invoke_without_command=True,
    examples=['sentry config init', 'sentry config show', 'sentry config set default_org myorg'],
)
@click.pass_context
def config(ctx):
    """Manage CLI configuration.

    Without a subcommand the current configuration is shown.
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(config_show)


@config.command('init', cls=StyledCommand, examples=['sentry config init'])
@pass_state
def config_init(state: CliState):
    """Create a default config file."""
    path = init_config_file()
    print_success(state.output, f'Created config file at {path}')
    print_info(state.output, 'Edit the file to add your auth token and organization.')


@config.command('show', cls=StyledCommand, examples=['sentry config show'])
@pass_state
def config_show(state: CliState):
    """Display the current configuration and where each value comes from."""
    described = state.config.describe()
    path = config_path()

    if state.output.is_json:
        emit_json(
            {
                'config_file': str(path),
                'settings': {
                    key: {
                        'value': mask_secret(value) if key == 'auth_token' and value else value,
                        'source': source,
                    }
                    for key, (value, source) in described.items()
                },
            }
        )
        return

    console.print(f'Config file: {escape(str(path))}')
    console.print()

    table = build_table(show_header=True)
    table.add_column('Setting', style='cyan', no_wrap=True)
    table.add_column('Value', style='green')
    table.add_column('Source', style='dim', no_wrap=True)

    for key in CONFIG_KEYS:
        value, source = described[key]
        if key == 'auth_token' and value:
            shown = mask_secret(value)
        else:
            shown = value if value is not None else '(not set)'
        table.add_row(key, escape(shown), source)

    console.print(table)


@config.command(
    'set',
    cls=StyledCommand,
    examples=['sentry config set default_org myorg', 'sentry config set auth_token sntrys_...'],
)
@click.argument('key', type=str)
@click.argument('value', type=str)
@pass_state
def config_set(state: CliState, key: str, value: str):
    """Set a configuration value.

    Valid keys: default_org, server_url, auth_token, default_project.
    """
    set_config_value(key, value)
    shown = mask_secret(value) if key == 'auth_token' else value
    print_success(state.output, f'Updated {key} to "{shown}"')


def register_config_commands(cli):
    """Register config commands with a parent CLI group."""
    cli.add_command(config)
    cli.add_alias('config', 'cfg')
