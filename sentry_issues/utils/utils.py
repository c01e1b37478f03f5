"""
Sentry issues CLI utilities
"""

from typing import Optional


def mask_secret(secret: Optional[str], visible: int = 4) -> str:
    """Return a display-safe form of a token, keeping only a short prefix."""
    if not secret:
        return '(not set)'
    if len(secret) <= visible * 2:
        return '****'
    return f'{secret[:visible]}****'
