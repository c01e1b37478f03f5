# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Rendering of issues as Rich tables, detail panels, JSON or compact lines."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

import click
from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from sentry_issues.classes import Issue, IssueStatus
from sentry_issues.constants import TITLE_MAX_LENGTH

from .helpers import OutputFormat, OutputSettings, console, emit_json

STATUS_COLORS: Dict[IssueStatus, str] = {
    IssueStatus.RESOLVED: 'green',
    IssueStatus.UNRESOLVED: 'red',
    IssueStatus.IGNORED: 'yellow',
    IssueStatus.REPROCESSING: 'cyan',
}


@dataclass(frozen=True)
class TableTheme:
    box_style: box.Box
    header_style: str
    border_style: str
    show_lines: bool
    pad_edge: bool


TABLE_THEMES = {
    # Full wrapped grid
    'square': TableTheme(
        box_style=box.SQUARE,
        header_style='bold magenta',
        border_style='grey35',
        show_lines=True,
        pad_edge=True,
    ),

    # Condensed rows under a heavier header rule
    'condensed': TableTheme(
        box_style=box.SIMPLE_HEAD,
        header_style='bold white',
        border_style='grey50',
        show_lines=False,
        pad_edge=False,
    ),
}

DEFAULT_TABLE_THEME = 'condensed'


def build_table(theme: str = DEFAULT_TABLE_THEME, **kwargs) -> Table:
    """Create a Rich table using a named visual theme."""
    preset = TABLE_THEMES.get(theme, TABLE_THEMES[DEFAULT_TABLE_THEME])
    params = {
        'box': preset.box_style,
        'header_style': preset.header_style,
        'border_style': preset.border_style,
        'show_lines': preset.show_lines,
        'pad_edge': preset.pad_edge,
    }
    params.update(kwargs)
    return Table(**params)


def colorize_status(status: IssueStatus, capitalize: bool = False) -> str:
    """Wrap status text with the matching Rich color tag."""
    color = STATUS_COLORS.get(status, 'white')
    label = status.value.capitalize() if capitalize else status.value
    return f'[{color}]{label}[/{color}]'


def truncate_string(text: str, max_len: int = TITLE_MAX_LENGTH) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + '...'


def format_relative_time(moment: datetime, now: Optional[datetime] = None) -> str:
    """Describe how long ago ``moment`` was; older than a week shows the date."""
    now = now or datetime.now(timezone.utc)
    seconds = int((now - moment).total_seconds())

    if seconds < 60:
        return 'just now'
    if seconds < 3600:
        return f'{seconds // 60} min ago'
    if seconds < 86400:
        return f'{seconds // 3600} hr ago'
    if seconds < 7 * 86400:
        return f'{seconds // 86400} days ago'
    return moment.strftime('%Y-%m-%d')


def build_issues_table(issues: List[Issue], now: Optional[datetime] = None) -> Table:
    table = build_table(show_header=True)
    table.add_column('ID', style='dim', no_wrap=True)
    table.add_column('Short ID', style='cyan', no_wrap=True)
    table.add_column('Title', style='white')
    table.add_column('Status', no_wrap=True)
    table.add_column('Events', justify='right', no_wrap=True)
    table.add_column('Last Seen', style='magenta', no_wrap=True)

    for issue in issues:
        table.add_row(
            escape(issue.id),
            escape(issue.short_id),
            escape(truncate_string(issue.title)),
            colorize_status(issue.status),
            escape(issue.count),
            format_relative_time(issue.last_seen, now),
        )
    return table


def build_issue_panel(issue: Issue) -> Panel:
    """Detail view of a single issue."""
    if issue.assigned_to is not None:
        contact = issue.assigned_to.email or issue.assigned_to.type
        assigned = f'{escape(issue.assigned_to.name)} ({escape(contact)})'
    else:
        assigned = '[dim]Unassigned[/dim]'

    lines = [
        f'[bold]Title:[/bold]      {escape(issue.title)}',
        f'[bold]Status:[/bold]     {colorize_status(issue.status, capitalize=True)}',
        f'[bold]Level:[/bold]      {escape(issue.level)}',
        f'[bold]Project:[/bold]    {escape(issue.project.name)} ({escape(issue.project.slug)})',
        f'[bold]First Seen:[/bold] {issue.first_seen.astimezone(timezone.utc):%Y-%m-%d %H:%M:%S} UTC',
        f'[bold]Last Seen:[/bold]  {issue.last_seen.astimezone(timezone.utc):%Y-%m-%d %H:%M:%S} UTC',
        '',
        f'[bold]Events:[/bold]     {escape(issue.count)} total ({issue.user_count} users affected)',
        f'[bold]Assigned:[/bold]   {assigned}',
    ]
    if issue.culprit:
        lines.append(f'[bold]Culprit:[/bold]    {escape(issue.culprit)}')
    lines += ['', f'[bold]Link:[/bold]       [blue]{escape(issue.permalink)}[/blue]']

    return Panel(
        '\n'.join(lines),
        title=f'Issue [cyan]{escape(issue.short_id)}[/cyan]',
        title_align='left',
        border_style='blue',
    )


def compact_line(issue: Issue) -> str:
    return f'{issue.short_id}  {issue.status.value}  {issue.title}'


def render_issues(issues: List[Issue], settings: OutputSettings) -> None:
    """Render a list of issues in the configured format."""
    if settings.format is OutputFormat.JSON:
        emit_json([issue.to_dict() for issue in issues])
        return

    if settings.format is OutputFormat.COMPACT:
        for issue in issues:
            click.echo(compact_line(issue))
        return

    if not issues:
        console.print('No issues found.')
        return

    console.print(build_issues_table(issues))
    console.print(f'Showing {len(issues)} issue(s)')


def render_issue(issue: Issue, settings: OutputSettings) -> None:
    """Render a single issue in the configured format."""
    if settings.format is OutputFormat.JSON:
        emit_json(issue.to_dict())
    elif settings.format is OutputFormat.COMPACT:
        click.echo(compact_line(issue))
    else:
        console.print(build_issue_panel(issue))
