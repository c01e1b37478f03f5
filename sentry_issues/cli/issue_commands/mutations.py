# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Mutation commands for issue CLI

Commands:
    sentry issues resolve <id>...
    sentry issues unresolve <id>...
    sentry issues assign <id>... --to <user> | --unassign
    sentry issues ignore <id>...
    sentry issues delete <id>...
    sentry issues merge <primary> <other>...

A single id goes to the single-issue endpoint; two or more ids go to the
bulk endpoint in one request.
"""

from typing import Optional, Sequence, Tuple

import click

from sentry_issues.classes import Issue, IssueStatus, IssueUpdate, StatusDetails
from sentry_issues.errors import ValidationError

from .help import StyledCommand
from .helpers import CliState, pass_state, pluralize, print_info, print_success, read_confirmation, require_ids


def _apply_update(state: CliState, issue_ids: Tuple[str, ...], update: IssueUpdate) -> Optional[Issue]:
    """Send ``update`` to one issue (returning it) or to all ids in bulk (returning None)."""
    client = state.client()
    if len(issue_ids) == 1:
        return client.update_issue(issue_ids[0], update)
    client.update_issues(issue_ids, update)
    return None


@click.command(
    'resolve',
    cls=StyledCommand,
    examples=[
        'sentry issues resolve PROJ-123',
        'sentry issues resolve PROJ-123 PROJ-456 --in-next-release',
    ],
)
@click.argument('issue_ids', nargs=-1, required=True)
@click.option('--in-release', default=None, help='Mark resolved in a specific release')
@click.option('--in-next-release', is_flag=True, help='Mark resolved in the next release')
@pass_state
def issues_resolve(state: CliState, issue_ids: Sequence[str], in_release: Optional[str], in_next_release: bool):
    """Resolve one or more issues."""
    ids = require_ids(issue_ids)

    status_details = None
    if in_release or in_next_release:
        status_details = StatusDetails(
            in_release=in_release or None,
            in_next_release=True if in_next_release else None,
        )

    issue = _apply_update(state, ids, IssueUpdate(status=IssueStatus.RESOLVED, status_details=status_details))
    if issue is not None:
        print_success(state.output, f'Issue {issue.short_id} resolved.')
    else:
        print_success(state.output, f'Resolved {len(ids)} issues.')


@click.command('unresolve', cls=StyledCommand, examples=['sentry issues unresolve PROJ-123'])
@click.argument('issue_ids', nargs=-1, required=True)
@pass_state
def issues_unresolve(state: CliState, issue_ids: Sequence[str]):
    """Unresolve one or more issues."""
    ids = require_ids(issue_ids)

    issue = _apply_update(state, ids, IssueUpdate(status=IssueStatus.UNRESOLVED))
    if issue is not None:
        print_success(state.output, f'Issue {issue.short_id} unresolved.')
    else:
        print_success(state.output, f'Unresolved {len(ids)} issues.')


@click.command(
    'assign',
    cls=StyledCommand,
    examples=[
        'sentry issues assign PROJ-123 --to user@example.com',
        'sentry issues assign PROJ-123 --to team:backend',
        'sentry issues assign PROJ-123 --unassign',
    ],
)
@click.argument('issue_ids', nargs=-1, required=True)
@click.option('--to', 'assignee', default=None, help='User email or team slug (prefix with "team:")')
@click.option('--unassign', is_flag=True, help='Remove assignment instead')
@pass_state
def issues_assign(state: CliState, issue_ids: Sequence[str], assignee: Optional[str], unassign: bool):
    """Assign issue(s) to a user or team."""
    ids = require_ids(issue_ids)
    if unassign and assignee:
        raise ValidationError('Use either --to <user> or --unassign, not both')
    if not unassign and not assignee:
        raise ValidationError('Must specify --to <user> or --unassign')

    # An empty assignee clears the assignment
    issue = _apply_update(state, ids, IssueUpdate(assigned_to='' if unassign else assignee))

    if issue is not None:
        if unassign:
            print_success(state.output, f'Issue {issue.short_id} unassigned.')
        else:
            name = issue.assigned_to.name if issue.assigned_to else 'unknown'
            print_success(state.output, f'Issue {issue.short_id} assigned to {name}.')
    elif unassign:
        print_success(state.output, f'Unassigned {len(ids)} issues.')
    else:
        print_success(state.output, f'Assigned {len(ids)} issues.')


@click.command(
    'ignore',
    cls=StyledCommand,
    examples=[
        'sentry issues ignore PROJ-123 --duration 60',
        'sentry issues ignore PROJ-123 --count 100',
        'sentry issues ignore PROJ-123 --until-escalating',
    ],
)
@click.argument('issue_ids', nargs=-1, required=True)
@click.option('--duration', type=click.IntRange(min=1), default=None, help='Ignore for N minutes')
@click.option('--count', type=click.IntRange(min=1), default=None, help='Ignore until N more events')
@click.option('--until-escalating', is_flag=True, help='Ignore until the issue escalates')
@pass_state
def issues_ignore(
    state: CliState,
    issue_ids: Sequence[str],
    duration: Optional[int],
    count: Optional[int],
    until_escalating: bool,
):
    """Ignore issue(s), optionally for a duration or event count."""
    ids = require_ids(issue_ids)

    status_details = None
    if duration is not None or count is not None or until_escalating:
        status_details = StatusDetails(
            ignore_duration=duration,
            ignore_count=count,
            ignore_until_escalating=True if until_escalating else None,
        )

    issue = _apply_update(state, ids, IssueUpdate(status=IssueStatus.IGNORED, status_details=status_details))

    if issue is None:
        print_success(state.output, f'Ignored {len(ids)} issues.')
        return

    if duration is not None:
        detail = f' for {duration} minutes'
    elif count is not None:
        detail = f' until {count} more events'
    elif until_escalating:
        detail = ' until escalating'
    else:
        detail = ''
    print_success(state.output, f'Issue {issue.short_id} ignored{detail}.')


@click.command('delete', cls=StyledCommand, examples=['sentry issues delete PROJ-123 --confirm'])
@click.argument('issue_ids', nargs=-1, required=True)
@click.option('--confirm', is_flag=True, help='Skip confirmation prompt')
@pass_state
def issues_delete(state: CliState, issue_ids: Sequence[str], confirm: bool):
    """Delete issue(s). Asks for confirmation unless --confirm is given."""
    ids = require_ids(issue_ids)
    client = state.client()

    if not confirm and not read_confirmation(f'Are you sure you want to delete {pluralize(len(ids))}?'):
        print_info(state.output, 'Cancelled.')
        return

    if len(ids) == 1:
        client.delete_issue(ids[0])
        print_success(state.output, f'Issue {ids[0]} deleted.')
    else:
        client.delete_issues(ids)
        print_success(state.output, f'Deleted {len(ids)} issues.')


@click.command('merge', cls=StyledCommand, examples=['sentry issues merge PROJ-123 PROJ-456 PROJ-789'])
@click.argument('primary_id')
@click.argument('other_ids', nargs=-1, required=True)
@pass_state
def issues_merge(state: CliState, primary_id: str, other_ids: Sequence[str]):
    """Merge other issues into a primary issue."""
    ids = require_ids([primary_id, *other_ids])
    if len(set(ids)) != len(ids):
        raise ValidationError('Cannot merge an issue with itself')

    merged_id = state.client().merge_issues(ids[0], ids[1:])
    print_success(state.output, f'Merged {pluralize(len(ids) - 1)} into {merged_id}.')
