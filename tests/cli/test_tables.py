# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Tests for issue rendering helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from sentry_issues.classes import Issue, IssueStatus
from sentry_issues.cli.issue_commands.helpers import pluralize, require_ids, split_projects
from sentry_issues.cli.issue_commands.tables import (
    colorize_status,
    compact_line,
    format_relative_time,
    truncate_string,
)
from sentry_issues.errors import ValidationError
from sentry_issues.utils.utils import mask_secret

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

# =============================================================================
# truncate_string / format_relative_time
# =============================================================================


class TestTruncateString:
    def test_short_text_unchanged(self):
        assert truncate_string('short') == 'short'

    def test_exact_limit_unchanged(self):
        assert truncate_string('x' * 50) == 'x' * 50

    def test_long_text_is_cut_to_limit(self):
        result = truncate_string('x' * 60)
        assert result == 'x' * 47 + '...'
        assert len(result) == 50


class TestFormatRelativeTime:
    @pytest.mark.parametrize(
        'delta, expected',
        [
            (timedelta(seconds=30), 'just now'),
            (timedelta(minutes=5), '5 min ago'),
            (timedelta(hours=3, minutes=10), '3 hr ago'),
            (timedelta(days=2), '2 days ago'),
            (timedelta(days=10), '2025-02-19'),
        ],
    )
    def test_buckets(self, delta, expected):
        assert format_relative_time(NOW - delta, NOW) == expected


# =============================================================================
# Status colours / compact lines
# =============================================================================


class TestColorizeStatus:
    @pytest.mark.parametrize(
        'status, color',
        [
            (IssueStatus.RESOLVED, 'green'),
            (IssueStatus.UNRESOLVED, 'red'),
            (IssueStatus.IGNORED, 'yellow'),
            (IssueStatus.REPROCESSING, 'cyan'),
        ],
    )
    def test_colors(self, status, color):
        assert colorize_status(status) == f'[{color}]{status.value}[/{color}]'

    def test_capitalized(self):
        assert colorize_status(IssueStatus.RESOLVED, capitalize=True) == '[green]Resolved[/green]'


def test_compact_line(sample_issue_payload):
    issue = Issue.from_api(sample_issue_payload)
    assert compact_line(issue) == 'PROJ-1  unresolved  TypeError in handler PROJ-1'


# =============================================================================
# Command helpers
# =============================================================================


class TestCommandHelpers:
    def test_split_projects(self):
        assert split_projects('web, api,,worker ') == ('web', 'api', 'worker')
        assert split_projects(None) == ()

    def test_pluralize(self):
        assert pluralize(1) == '1 issue'
        assert pluralize(3) == '3 issues'

    def test_require_ids_strips(self):
        assert require_ids([' A ', 'B']) == ('A', 'B')

    @pytest.mark.parametrize('ids', [[], [''], ['A', '   ']])
    def test_require_ids_rejects_blank(self, ids):
        with pytest.raises(ValidationError):
            require_ids(ids)


class TestMaskSecret:
    def test_long_secret_keeps_prefix(self):
        assert mask_secret('sntrys_abcdefgh') == 'sntr****'

    def test_short_secret_fully_hidden(self):
        assert mask_secret('abc') == '****'

    def test_unset(self):
        assert mask_secret(None) == '(not set)'
