# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Shared fixtures: fake HTTP responses and Sentry issue payloads."""

import json
from unittest.mock import Mock

import pytest


def build_response(status_code=200, json_data=None, text=None, headers=None):
    """Mock of ``requests.Response`` with the attributes the client reads."""
    response = Mock()
    response.status_code = status_code
    response.headers = headers or {}
    if json_data is not None:
        response.json.return_value = json_data
        response.text = json.dumps(json_data)
    else:
        response.json.side_effect = ValueError('No JSON object could be decoded')
        response.text = text or ''
    return response


def build_issue_payload(issue_id='1001', short_id='PROJ-1', **overrides):
    payload = {
        'id': issue_id,
        'shortId': short_id,
        'title': f'TypeError in handler {short_id}',
        'status': 'unresolved',
        'level': 'error',
        'count': '42',
        'userCount': 7,
        'firstSeen': '2025-01-01T10:00:00.000000Z',
        'lastSeen': '2025-01-02T12:30:00Z',
        'permalink': f'https://sentry.io/organizations/acme/issues/{issue_id}/',
        'project': {'id': '11', 'name': 'Backend', 'slug': 'backend'},
        'assignedTo': None,
        'isBookmarked': False,
        'isSubscribed': True,
        'hasSeen': False,
        'metadata': {'value': 'boom', 'filename': 'app.py', 'function': 'handle'},
        'culprit': 'app.handle',
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def issue_payload():
    return build_issue_payload


@pytest.fixture
def sample_issue_payload():
    return build_issue_payload()
