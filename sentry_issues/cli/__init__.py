# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Sentry issues CLI

Usage:
    sentry issues list                 # List issues
    sentry issues view PROJ-123        # View one issue
    sentry issues resolve PROJ-123     # Resolve an issue
    sentry config show                 # Show configuration
"""
