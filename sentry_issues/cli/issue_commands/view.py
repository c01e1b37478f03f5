# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Read-only issue commands.

Commands:
    sentry issues list
    sentry issues view <id>
"""

from typing import Optional

import click

from sentry_issues.classes import IssueStatus, ListIssuesParams
from sentry_issues.constants import (
    DEFAULT_PAGE_LIMIT,
    DEFAULT_SORT,
    MAX_PAGE_LIMIT,
    SORT_CHOICES,
    STATUS_FILTER_CHOICES,
)

from .help import StyledCommand
from .helpers import CliState, pass_state, require_ids, split_projects
from .tables import render_issue, render_issues


@click.command(
    'list',
    cls=StyledCommand,
    examples=[
        'sentry issues list',
        'sentry issues list --project myproject --status unresolved',
        'sentry issues list --query "TypeError" --limit 100 --all',
    ],
)
@click.option('--project', '-p', default=None, help='Filter by project slug(s), comma-separated')
@click.option(
    '--status',
    '-s',
    default=None,
    type=click.Choice(STATUS_FILTER_CHOICES, case_sensitive=False),
    help='Filter by status',
)
@click.option('--query', '-q', default=None, help='Sentry search query string')
@click.option('--sort', default=DEFAULT_SORT, show_default=True, type=click.Choice(SORT_CHOICES), help='Sort order')
@click.option(
    '--limit',
    default=DEFAULT_PAGE_LIMIT,
    show_default=True,
    type=click.IntRange(1, MAX_PAGE_LIMIT),
    help='Maximum number of results per page',
)
@click.option('--all', 'fetch_all', is_flag=True, help='Fetch all pages (may be slow for large result sets)')
@pass_state
def issues_list(
    state: CliState,
    project: Optional[str],
    status: Optional[str],
    query: Optional[str],
    sort: str,
    limit: int,
    fetch_all: bool,
):
    """List issues with optional filtering.

    Without --project the default_project from the config file is used.
    """
    client = state.client()
    params = ListIssuesParams(
        projects=split_projects(project or state.config.default_project),
        query=query or None,
        status=IssueStatus(status.lower()) if status else None,
        sort=sort,
        limit=limit,
    )

    issues = client.list_all_issues(params) if fetch_all else client.list_issues(params)
    render_issues(issues, state.output)


@click.command(
    'view',
    cls=StyledCommand,
    examples=['sentry issues view PROJ-123', 'sentry issues view 12345678'],
)
@click.argument('issue_id')
@pass_state
def issues_view(state: CliState, issue_id: str):
    """View detailed issue information."""
    (issue_id,) = require_ids([issue_id])
    issue = state.client().get_issue(issue_id)
    render_issue(issue, state.output)
