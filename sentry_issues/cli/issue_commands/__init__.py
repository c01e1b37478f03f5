# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
CLI commands for managing Sentry issues

Command structure:
    sentry issues (alias: i)      - Issue management commands
        list (ls)                     List issues with filtering and paging
        view (show, v)                View one issue in detail
        resolve (r)                   Resolve issue(s)
        unresolve                     Unresolve issue(s)
        assign (a)                    Assign or unassign issue(s)
        ignore                        Ignore issue(s)
        delete                        Delete issue(s)
        merge                         Merge issues into a primary issue
"""

import click

from .help import StyledAliasGroup
from .helpers import CliState, OutputFormat, OutputSettings, console, pass_state
from .mutations import (
    issues_assign,
    issues_delete,
    issues_ignore,
    issues_merge,
    issues_resolve,
    issues_unresolve,
)
from .view import issues_list, issues_view


@click.group(
    name='issues',
    cls=StyledAliasGroup,
    examples=[
        'sentry issues list --project myproject',
        'sentry issues list --status unresolved --limit 50',
        'sentry issues view PROJ-123',
        'sentry issues resolve PROJ-123 PROJ-456',
    ],
)
def issues_group():
    """Manage Sentry issues."""
    pass


issues_group.add_command(issues_list, name='list')
issues_group.add_command(issues_view, name='view')
issues_group.add_command(issues_resolve, name='resolve')
issues_group.add_command(issues_unresolve, name='unresolve')
issues_group.add_command(issues_assign, name='assign')
issues_group.add_command(issues_ignore, name='ignore')
issues_group.add_command(issues_delete, name='delete')
issues_group.add_command(issues_merge, name='merge')

issues_group.add_alias('list', 'ls')
issues_group.add_alias('view', 'show')
issues_group.add_alias('view', 'v')
issues_group.add_alias('resolve', 'r')
issues_group.add_alias('assign', 'a')


def register_commands(cli):
    """Register the issues group with the root CLI group."""
    cli.add_command(issues_group, name='issues')
    cli.add_alias('issues', 'i')


__all__ = [
    'register_commands',
    'issues_group',
    # Helpers
    'CliState',
    'OutputFormat',
    'OutputSettings',
    'console',
    'pass_state',
]
