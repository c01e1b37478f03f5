# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Console logging for the CLI.

All modules log through children of the ``sentry_issues`` logger. Records
go to stderr via rich so they never mix with table or JSON output.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = 'sentry_issues'


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package logger once per invocation.

    DEBUG with ``--verbose``, WARNING otherwise. Calling it again replaces
    the previous handler instead of stacking a second one.
    """
    logger = logging.getLogger(LOGGER_NAME)

    for handler in logger.handlers[:]:
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True, soft_wrap=True),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
