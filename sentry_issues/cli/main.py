# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Sentry issues CLI - Main entry point

Usage:
    sentry issues ...        - Issue management (alias: i)
    sentry config ...        - Show/set CLI configuration (alias: cfg)
    sentry completions SHELL - Print a shell completion script
"""

from typing import Optional

import click
from click.shell_completion import get_completion_class

from sentry_issues import __version__
from sentry_issues.cli.config_commands import register_config_commands
from sentry_issues.cli.issue_commands import register_commands
from sentry_issues.cli.issue_commands.help import StyledAliasGroup, StyledCommand
from sentry_issues.cli.issue_commands.helpers import CliState, OutputFormat, OutputSettings
from sentry_issues.errors import SentryCliError
from sentry_issues.utils.logging import setup_logging

PROG_NAME = 'sentry'
COMPLETE_VAR = '_SENTRY_COMPLETE'


class RootGroup(StyledAliasGroup):
    """Root group that attaches the verbose flag to surfaced errors."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except SentryCliError as e:
            state = ctx.find_object(CliState)
            e.verbose = bool(state and state.output.verbose)
            raise


@click.group(
    cls=RootGroup,
    examples=[
        'sentry issues list --project myproject',
        'sentry issues view PROJ-123',
        'sentry issues resolve PROJ-123',
        'sentry config show',
    ],
)
@click.version_option(version=__version__, prog_name=PROG_NAME)
@click.option('--server', default=None, help='Sentry server URL (default: https://sentry.io)')
@click.option('--org', '-o', default=None, help='Organization slug')
@click.option('--token', default=None, help='Auth token (overrides env var and config)')
@click.option(
    '--format',
    '-O',
    'output_format',
    default=OutputFormat.TABLE.value,
    show_default=True,
    type=click.Choice([fmt.value for fmt in OutputFormat], case_sensitive=False),
    help='Output format',
)
@click.option('--quiet', '-q', is_flag=True, help='Suppress success messages')
@click.option('--verbose', '-v', is_flag=True, help='Log requests and show error causes')
@click.pass_context
def cli(
    ctx: click.Context,
    server: Optional[str],
    org: Optional[str],
    token: Optional[str],
    output_format: str,
    quiet: bool,
    verbose: bool,
):
    """CLI tool for managing Sentry issues."""
    setup_logging(verbose)
    ctx.obj = CliState(
        output=OutputSettings(format=OutputFormat(output_format.lower()), quiet=quiet, verbose=verbose),
        server=server,
        org=org,
        token=token,
    )


@cli.command(
    'completions',
    cls=StyledCommand,
    examples=[
        'sentry completions bash > ~/.bash_completion.d/sentry',
        'sentry completions zsh > ~/.zfunc/_sentry',
        'sentry completions fish > ~/.config/fish/completions/sentry.fish',
    ],
)
@click.argument('shell', type=click.Choice(['bash', 'zsh', 'fish']))
def completions(shell: str):
    """Generate shell completions."""
    completion_class = get_completion_class(shell)
    click.echo(completion_class(cli, {}, PROG_NAME, COMPLETE_VAR).source())


register_commands(cli)
register_config_commands(cli)


def main():
    """Main entry point for the CLI"""
    cli(prog_name=PROG_NAME)


if __name__ == '__main__':
    main()
