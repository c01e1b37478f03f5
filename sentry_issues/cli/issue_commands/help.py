# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Click command and group classes with Rich-powered help output."""

from __future__ import annotations

from inspect import cleandoc
from typing import Sequence

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.padding import Padding
from rich.panel import Panel
from rich.table import Table


def _collect_help_rows(params: list[click.Parameter], ctx: click.Context) -> list[tuple[str, str]]:
    rows: list[tuple[str, str]] = []
    for param in params:
        record = param.get_help_record(ctx)
        if record is None:
            continue
        rows.append((record[0], record[1] or ''))
    return rows


def _render_usage(console: Console, usage: str) -> None:
    usage = usage.strip()
    if usage.startswith('Usage:'):
        usage = usage[len('Usage:') :].strip()
    console.print(
        Padding(f'[bold yellow]Usage:[/bold yellow] [bold white]{escape(usage)}[/bold white]', (0, 0, 0, 1))
    )
    console.print()


def _section_panel(title: str, rows: list[tuple[str, str]]) -> Panel:
    table = Table.grid(expand=True)
    table.add_column(style='bold cyan', no_wrap=True, ratio=2, justify='left')
    table.add_column(style='bright_white', ratio=5, justify='left')

    if rows:
        for left, right in rows:
            table.add_row(escape(left), escape(right))
    else:
        table.add_row('-', 'No entries')

    return Panel(table, title=f' {title} ', title_align='left', border_style='grey66', box=box.ROUNDED, padding=(0, 1))


def _examples_panel(examples: Sequence[str]) -> Panel:
    body = '\n'.join(f'[green]$[/green] {escape(line)}' for line in examples)
    return Panel(body, title=' Examples ', title_align='left', border_style='grey66', box=box.ROUNDED, padding=(0, 1))


def _render_help(ctx: click.Context, command: click.Command, sections: list[tuple[str, list[tuple[str, str]]]]) -> str:
    console = Console(width=ctx.terminal_width or 100, highlight=False)

    with console.capture() as capture:
        _render_usage(console, command.get_usage(ctx))

        help_text = cleandoc(command.help or '').replace('\x08', '')
        if help_text:
            console.print(Padding(escape(help_text), (0, 0, 0, 1)))
            console.print()

        for title, rows in sections:
            console.print(_section_panel(title, rows))

        examples = getattr(command, 'examples', ())
        if examples:
            console.print(_examples_panel(examples))

    return capture.get()


class StyledCommand(click.Command):
    """Click command with styled help output and an optional examples list."""

    def __init__(self, *args, examples: Sequence[str] = (), **kwargs):
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)

    def get_help(self, ctx: click.Context) -> str:
        return _render_help(ctx, self, [('Options', _collect_help_rows(self.get_params(ctx), ctx))])


class StyledAliasGroup(click.Group):
    """Click group with Rich help rendering and command aliases."""

    command_class = StyledCommand

    def __init__(self, *args, examples: Sequence[str] = (), **kwargs):
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        self._aliases: dict[str, str] = {}

    def add_alias(self, name: str, alias: str) -> None:
        """Register an alias for an existing command."""
        self._aliases[alias] = name

    def get_command(self, ctx: click.Context, cmd_name: str):
        canonical = self._aliases.get(cmd_name, cmd_name)
        return super().get_command(ctx, canonical)

    def resolve_command(self, ctx: click.Context, args: list[str]):
        # Report the canonical name so ctx.invoked_subcommand is never an alias
        _, cmd, remaining = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, remaining

    def _help_commands_rows(self, ctx: click.Context) -> list[tuple[str, str]]:
        reverse: dict[str, list[str]] = {}
        for alias, canonical in self._aliases.items():
            reverse.setdefault(canonical, []).append(alias)

        rows: list[tuple[str, str]] = []
        for name in self.list_commands(ctx):
            cmd = self.get_command(ctx, name)
            if cmd is None or cmd.hidden:
                continue
            desc = cmd.get_short_help_str(limit=150)
            aliases = reverse.get(name)
            if aliases:
                label = 'alias' if len(aliases) == 1 else 'aliases'
                desc = f'{desc.rstrip(".")} ({label}: {", ".join(sorted(aliases))})'
            rows.append((name, desc))
        return rows

    def get_help(self, ctx: click.Context) -> str:
        return _render_help(
            ctx,
            self,
            [
                ('Options', _collect_help_rows(self.get_params(ctx), ctx)),
                ('Commands', self._help_commands_rows(ctx)),
            ],
        )
