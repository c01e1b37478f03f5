# The MIT License (MIT)
# Copyright © 2025 Entrius

"""sentry-issues-cli: manage Sentry issues from the terminal."""

__version__ = '0.3.0'
