# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Error taxonomy for the Sentry issues CLI.

Every failure surfaced to the user is one of the ``SentryCliError``
subclasses below. Each carries an ``ErrorKind`` tag so callers can branch
on the kind without isinstance ladders. They subclass
``click.ClickException`` so an uncaught error ends the command with exit
code 1 and a ``✗``-prefixed message on stderr.
"""

from enum import Enum
from typing import IO, Iterator, Optional

import click
from rich.console import Console
from rich.markup import escape


class ErrorKind(Enum):
    """Closed set of error kinds"""

    AUTH = 'auth'
    CONFIG = 'config'
    API = 'api'
    NETWORK = 'network'
    VALIDATION = 'validation'
    NOT_FOUND = 'not_found'
    FORBIDDEN = 'forbidden'
    RATE_LIMITED = 'rate_limited'
    URL_PARSE = 'url_parse'
    JSON = 'json'
    IO = 'io'


def iter_causes(error: BaseException) -> Iterator[BaseException]:
    """Yield the explicit and implicit causes of ``error``, innermost last."""
    seen = {id(error)}
    current = error.__cause__ or (None if error.__suppress_context__ else error.__context__)
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or (None if current.__suppress_context__ else current.__context__)


class SentryCliError(click.ClickException):
    """Base class for all surfaced CLI errors."""

    kind: ErrorKind
    prefix = 'Error'

    def __init__(self, message: str):
        self.detail = message
        self.verbose = False
        super().__init__(self.describe(message))

    def describe(self, message: str) -> str:
        return f'{self.prefix}: {message}'

    def show(self, file: Optional[IO] = None) -> None:
        console = Console(file=file, stderr=file is None, soft_wrap=True, highlight=False)
        console.print(f'[red]✗[/red] {escape(self.format_message())}')
        if self.verbose:
            for cause in iter_causes(self):
                console.print(f'  [dim]caused by:[/dim] {escape(type(cause).__name__)}: {escape(str(cause))}')


class AuthError(SentryCliError):
    kind = ErrorKind.AUTH
    prefix = 'Authentication failed'


class ConfigError(SentryCliError):
    kind = ErrorKind.CONFIG
    prefix = 'Configuration error'


class ApiError(SentryCliError):
    """Non-2xx response that has no more specific kind."""

    kind = ErrorKind.API

    def __init__(self, status: int, message: str):
        self.status = status
        self.prefix = f'API error ({status})'
        super().__init__(message)


class NetworkError(SentryCliError):
    kind = ErrorKind.NETWORK
    prefix = 'Network error'


class ValidationError(SentryCliError):
    kind = ErrorKind.VALIDATION
    prefix = 'Invalid input'


class NotFoundError(SentryCliError):
    kind = ErrorKind.NOT_FOUND
    prefix = 'Issue not found'


class ForbiddenError(SentryCliError):
    kind = ErrorKind.FORBIDDEN
    prefix = 'Permission denied'


class RateLimitedError(SentryCliError):
    kind = ErrorKind.RATE_LIMITED

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(str(retry_after))

    def describe(self, message: str) -> str:
        return f'Rate limited. Retry after {self.retry_after} seconds'


class UrlParseError(SentryCliError):
    kind = ErrorKind.URL_PARSE
    prefix = 'URL parse error'


class JsonError(SentryCliError):
    kind = ErrorKind.JSON
    prefix = 'JSON error'


class IoError(SentryCliError):
    kind = ErrorKind.IO
    prefix = 'IO error'
