# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Tests for the issue model and the sparse update payloads."""

from datetime import datetime, timezone

import pytest

from sentry_issues.classes import (
    Issue,
    IssueStatus,
    IssueUpdate,
    ListIssuesParams,
    StatusDetails,
)
from sentry_issues.errors import JsonError

# =============================================================================
# Issue.from_api / to_dict
# =============================================================================


class TestIssueFromApi:
    def test_decodes_camel_case_payload(self, sample_issue_payload):
        issue = Issue.from_api(sample_issue_payload)

        assert issue.id == '1001'
        assert issue.short_id == 'PROJ-1'
        assert issue.status is IssueStatus.UNRESOLVED
        assert issue.count == '42'
        assert issue.user_count == 7
        assert issue.project.slug == 'backend'
        assert issue.assigned_to is None
        assert issue.last_seen == datetime(2025, 1, 2, 12, 30, tzinfo=timezone.utc)
        assert issue.metadata.function == 'handle'

    def test_numeric_id_becomes_string(self, issue_payload):
        assert Issue.from_api(issue_payload(issue_id=1234)).id == '1234'

    def test_assignee(self, issue_payload):
        payload = issue_payload(assignedTo={'id': 7, 'name': 'Jane', 'email': 'jane@example.com', 'type': 'user'})
        issue = Issue.from_api(payload)
        assert issue.assigned_to.name == 'Jane'
        assert issue.assigned_to.id == '7'

    def test_optional_fields_default(self, issue_payload):
        payload = issue_payload()
        for key in ('count', 'userCount', 'metadata', 'culprit', 'isBookmarked'):
            del payload[key]

        issue = Issue.from_api(payload)

        assert issue.count == ''
        assert issue.user_count == 0
        assert issue.culprit is None
        assert issue.is_bookmarked is False
        assert issue.metadata.value is None

    def test_missing_required_field(self, issue_payload):
        payload = issue_payload()
        del payload['shortId']
        with pytest.raises(JsonError):
            Issue.from_api(payload)

    def test_unknown_status(self, issue_payload):
        with pytest.raises(JsonError):
            Issue.from_api(issue_payload(status='archived'))

    def test_bad_timestamp(self, issue_payload):
        with pytest.raises(JsonError):
            Issue.from_api(issue_payload(lastSeen='yesterday'))

    def test_to_dict_uses_api_keys(self, sample_issue_payload):
        data = Issue.from_api(sample_issue_payload).to_dict()

        assert data['shortId'] == 'PROJ-1'
        assert data['status'] == 'unresolved'
        assert data['lastSeen'] == '2025-01-02T12:30:00Z'
        assert data['project'] == {'id': '11', 'name': 'Backend', 'slug': 'backend'}
        assert data['assignedTo'] is None


# =============================================================================
# IssueUpdate / StatusDetails
# =============================================================================


class TestIssueUpdatePayload:
    def test_only_set_fields_are_sent(self):
        assert IssueUpdate(status=IssueStatus.RESOLVED).to_payload() == {'status': 'resolved'}

    def test_empty_update(self):
        assert IssueUpdate().to_payload() == {}

    def test_empty_assignee_is_kept(self):
        assert IssueUpdate(assigned_to='').to_payload() == {'assignedTo': ''}

    def test_false_flags_are_kept(self):
        assert IssueUpdate(has_seen=False, is_bookmarked=False).to_payload() == {
            'hasSeen': False,
            'isBookmarked': False,
        }

    def test_merge(self):
        assert IssueUpdate(merge=True).to_payload() == {'merge': True}

    def test_nested_status_details(self):
        update = IssueUpdate(
            status=IssueStatus.IGNORED,
            status_details=StatusDetails(ignore_duration=60),
        )
        assert update.to_payload() == {'status': 'ignored', 'statusDetails': {'ignoreDuration': 60}}

    def test_ignore_window_fields(self):
        update = IssueUpdate(ignore_count=10, ignore_window=30)
        assert update.to_payload() == {'ignoreCount': 10, 'ignoreWindow': 30}


class TestStatusDetailsPayload:
    def test_release_fields(self):
        details = StatusDetails(in_release='1.2.3', in_next_release=True)
        assert details.to_payload() == {'inRelease': '1.2.3', 'inNextRelease': True}

    def test_until_escalating(self):
        assert StatusDetails(ignore_until_escalating=True).to_payload() == {'ignoreUntilEscalating': True}

    def test_empty(self):
        assert StatusDetails().to_payload() == {}


class TestListIssuesParams:
    def test_with_cursor_keeps_other_fields(self):
        params = ListIssuesParams(projects=('web',), query='x', limit=10)
        paged = params.with_cursor('0:10:0')

        assert paged.cursor == '0:10:0'
        assert paged.projects == ('web',)
        assert params.cursor is None

    def test_is_immutable(self):
        params = ListIssuesParams()
        with pytest.raises(AttributeError):
            params.limit = 5


def test_status_str_is_wire_value():
    assert str(IssueStatus.REPROCESSING) == 'reprocessing'
