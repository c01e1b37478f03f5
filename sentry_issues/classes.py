from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from sentry_issues.errors import JsonError


class IssueStatus(Enum):
    """Issue status as reported and accepted by the API"""

    RESOLVED = 'resolved'
    UNRESOLVED = 'unresolved'
    IGNORED = 'ignored'
    REPROCESSING = 'reprocessing'

    def __str__(self) -> str:
        return self.value


def _parse_timestamp(value: str) -> datetime:
    # Sentry timestamps end in "Z"
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return datetime.fromisoformat(value)


def _format_timestamp(value: datetime) -> str:
    return value.isoformat().replace('+00:00', 'Z')


@dataclass
class Actor:
    """User or team an issue can be assigned to"""

    id: str
    name: str
    type: str
    email: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Actor':
        return cls(
            id=str(data['id']),
            name=data['name'],
            type=data.get('type', 'user'),
            email=data.get('email'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'email': self.email, 'type': self.type}


@dataclass
class ProjectRef:
    """Project an issue belongs to"""

    id: str
    name: str
    slug: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'ProjectRef':
        return cls(id=str(data['id']), name=data['name'], slug=data['slug'])

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'slug': self.slug}


@dataclass
class IssueMetadata:
    value: Optional[str] = None
    filename: Optional[str] = None
    function: Optional[str] = None

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> 'IssueMetadata':
        data = data or {}
        return cls(value=data.get('value'), filename=data.get('filename'), function=data.get('function'))

    def to_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'filename': self.filename, 'function': self.function}


@dataclass
class Issue:
    """A Sentry issue as returned by the organization issues endpoints"""

    id: str
    short_id: str
    title: str
    status: IssueStatus
    level: str
    first_seen: datetime
    last_seen: datetime
    permalink: str
    project: ProjectRef
    count: str = ''
    user_count: int = 0
    assigned_to: Optional[Actor] = None
    is_bookmarked: bool = False
    is_subscribed: bool = False
    has_seen: bool = False
    metadata: IssueMetadata = field(default_factory=IssueMetadata)
    culprit: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Issue':
        """Create an Issue from a camelCase API payload.

        Raises:
            JsonError: If a required key is missing or a value has the wrong shape.
        """
        try:
            assigned = data.get('assignedTo')
            return cls(
                id=str(data['id']),
                short_id=data['shortId'],
                title=data['title'],
                status=IssueStatus(data['status']),
                level=data['level'],
                first_seen=_parse_timestamp(data['firstSeen']),
                last_seen=_parse_timestamp(data['lastSeen']),
                permalink=data['permalink'],
                project=ProjectRef.from_api(data['project']),
                count=str(data.get('count') or ''),
                user_count=int(data.get('userCount') or 0),
                assigned_to=Actor.from_api(assigned) if assigned else None,
                is_bookmarked=bool(data.get('isBookmarked', False)),
                is_subscribed=bool(data.get('isSubscribed', False)),
                has_seen=bool(data.get('hasSeen', False)),
                metadata=IssueMetadata.from_api(data.get('metadata')),
                culprit=data.get('culprit'),
            )
        except KeyError as e:
            raise JsonError(f'issue payload is missing field {e}') from e
        except (TypeError, ValueError, AttributeError) as e:
            raise JsonError(f'malformed issue payload: {e}') from e

    def to_dict(self) -> Dict[str, Any]:
        """camelCase representation used for JSON output."""
        return {
            'id': self.id,
            'shortId': self.short_id,
            'title': self.title,
            'status': self.status.value,
            'level': self.level,
            'count': self.count,
            'userCount': self.user_count,
            'firstSeen': _format_timestamp(self.first_seen),
            'lastSeen': _format_timestamp(self.last_seen),
            'permalink': self.permalink,
            'project': self.project.to_dict(),
            'assignedTo': self.assigned_to.to_dict() if self.assigned_to else None,
            'isBookmarked': self.is_bookmarked,
            'isSubscribed': self.is_subscribed,
            'hasSeen': self.has_seen,
            'metadata': self.metadata.to_dict(),
            'culprit': self.culprit,
        }


def _sparse(pairs: Tuple[Tuple[str, Any], ...]) -> Dict[str, Any]:
    """Drop pairs whose value is None (the absent sentinel)."""
    return {key: value for key, value in pairs if value is not None}


@dataclass
class StatusDetails:
    """Extra parameters attached to a status change."""

    in_release: Optional[str] = None
    in_next_release: Optional[bool] = None
    ignore_duration: Optional[int] = None
    ignore_count: Optional[int] = None
    ignore_until_escalating: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        return _sparse(
            (
                ('inRelease', self.in_release),
                ('inNextRelease', self.in_next_release),
                ('ignoreDuration', self.ignore_duration),
                ('ignoreCount', self.ignore_count),
                ('ignoreUntilEscalating', self.ignore_until_escalating),
            )
        )


@dataclass
class IssueUpdate:
    """Sparse patch for the issue update endpoints.

    Only fields that are not None are transmitted. An empty string is a
    real value: ``assigned_to=''`` clears the assignee.
    """

    status: Optional[IssueStatus] = None
    assigned_to: Optional[str] = None
    has_seen: Optional[bool] = None
    is_bookmarked: Optional[bool] = None
    merge: Optional[bool] = None
    ignore_duration: Optional[int] = None
    ignore_count: Optional[int] = None
    ignore_window: Optional[int] = None
    status_details: Optional[StatusDetails] = None

    def to_payload(self) -> Dict[str, Any]:
        return _sparse(
            (
                ('status', self.status.value if self.status is not None else None),
                ('assignedTo', self.assigned_to),
                ('hasSeen', self.has_seen),
                ('isBookmarked', self.is_bookmarked),
                ('merge', self.merge),
                ('ignoreDuration', self.ignore_duration),
                ('ignoreCount', self.ignore_count),
                ('ignoreWindow', self.ignore_window),
                ('statusDetails', self.status_details.to_payload() if self.status_details is not None else None),
            )
        )


@dataclass(frozen=True)
class ListIssuesParams:
    """Query descriptor for the issue list endpoint"""

    projects: Tuple[str, ...] = ()
    query: Optional[str] = None
    status: Optional[IssueStatus] = None
    sort: Optional[str] = None
    limit: Optional[int] = None
    cursor: Optional[str] = None

    def with_cursor(self, cursor: Optional[str]) -> 'ListIssuesParams':
        return replace(self, cursor=cursor)
