#!/usr/bin/env python3
# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Pytest configuration for utils tests.
"""

from unittest.mock import patch

import pytest

from sentry_issues.client import SentryClient


@pytest.fixture
def client():
    return SentryClient('https://sentry.io', 'acme', 'sntrys_test_token_1234')


@pytest.fixture
def mock_request():
    """Patch the single transport call the client makes."""
    with patch('sentry_issues.client.requests.request') as mocked:
        yield mocked
