# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Shared helper functions for issue commands
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Tuple

import click
from rich.console import Console
from rich.markup import escape

from sentry_issues.client import SentryClient
from sentry_issues.config import Config, load_config
from sentry_issues.errors import ValidationError

console = Console(soft_wrap=True)


class OutputFormat(Enum):
    TABLE = 'table'
    JSON = 'json'
    COMPACT = 'compact'


@dataclass(frozen=True)
class OutputSettings:
    """Output preferences fixed once by the root command."""

    format: OutputFormat = OutputFormat.TABLE
    quiet: bool = False
    verbose: bool = False

    @property
    def is_json(self) -> bool:
        return self.format is OutputFormat.JSON


@dataclass
class CliState:
    """Per-invocation state carried on ``ctx.obj``.

    Holds the global flags; the config file is read on first use so that
    ``--help`` and parse errors never touch the disk.
    """

    output: OutputSettings
    server: Optional[str] = None
    org: Optional[str] = None
    token: Optional[str] = None
    _config: Optional[Config] = None

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = load_config()
        return self._config

    def client(self) -> SentryClient:
        """Build an API client from flags, environment and config file."""
        return SentryClient.from_config(
            self.config,
            org_override=self.org,
            server_override=self.server,
            token_override=self.token,
        )


pass_state = click.make_pass_decorator(CliState)


def emit_json(payload: Any) -> None:
    """Write an indented JSON document to stdout."""
    click.echo(json.dumps(payload, indent=2))


def print_success(settings: OutputSettings, message: str) -> None:
    """Print a standardized success message (silent in quiet mode).

    In JSON mode the message is a single-line ``{"message": ...}`` object.
    """
    if settings.quiet:
        return
    if settings.is_json:
        click.echo(json.dumps({'message': message}))
        return
    console.print(f'[green]✓[/green] {escape(message)}')


def print_info(settings: OutputSettings, message: str) -> None:
    """Print a plain informational line (silent in quiet and JSON modes)."""
    if settings.quiet or settings.is_json:
        return
    console.print(escape(message))


def split_projects(value: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated ``--project`` value into slugs."""
    if not value:
        return ()
    return tuple(slug.strip() for slug in value.split(',') if slug.strip())


def pluralize(count: int, noun: str = 'issue') -> str:
    return f'{count} {noun}' if count == 1 else f'{count} {noun}s'


def require_ids(issue_ids: Sequence[str]) -> Tuple[str, ...]:
    """Reject blank ids before any request is made."""
    cleaned = tuple(issue_id.strip() for issue_id in issue_ids)
    if not cleaned or any(not issue_id for issue_id in cleaned):
        raise ValidationError('Issue IDs must not be empty')
    return cleaned


def read_confirmation(prompt: str) -> bool:
    """Ask a yes/no question on stdin; only a case-insensitive "y" confirms."""
    try:
        answer = click.prompt(prompt, default='', show_default=False, prompt_suffix=' [y/N]: ')
    except click.Abort:
        click.echo()
        return False
    return answer.strip().lower() == 'y'
