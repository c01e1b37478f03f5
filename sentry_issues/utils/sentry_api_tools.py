# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Request building and response classification for the Sentry REST API.

Everything here is a pure function over strings and mappings so it can be
tested without a network: URL construction, ``Link`` header cursor parsing
and the status code to error mapping.
"""

import json
import logging
from typing import List, Mapping, Optional, Sequence, Tuple
from urllib.parse import quote, urlencode, urljoin, urlparse

from sentry_issues import __version__
from sentry_issues.classes import IssueStatus, ListIssuesParams
from sentry_issues.constants import API_PREFIX, DEFAULT_RETRY_AFTER_SECONDS
from sentry_issues.errors import (
    ApiError,
    AuthError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    SentryCliError,
    UrlParseError,
)

logger = logging.getLogger(__name__)

QueryPairs = List[Tuple[str, str]]


# =============================================================================
# Request building
# =============================================================================


def make_headers(token: str) -> dict:
    """Build standard Sentry HTTP headers for a bearer token."""
    return {
        'Authorization': f'Bearer {token}',
        'Accept': 'application/json',
        'User-Agent': f'sentry-issues-cli/{__version__}',
    }


def validate_base_url(base_url: str) -> str:
    """Check that the server URL is absolute http(s) with a host.

    Raises:
        UrlParseError: If the URL cannot serve as an API base.
    """
    parsed = urlparse(base_url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise UrlParseError(f"invalid server URL '{base_url}' (expected http:// or https:// with a host)")
    return base_url


def build_api_url(base_url: str, path: str) -> str:
    """Join ``/api/0/<path>`` onto the server URL.

    The API prefix is absolute, so any path already on ``base_url`` is
    replaced rather than extended.
    """
    return urljoin(base_url, API_PREFIX + path.lstrip('/'))


def combine_query(query: Optional[str], status: Optional[IssueStatus]) -> Optional[str]:
    """Merge free text and a status filter into one search expression."""
    if query and status is not None:
        return f'{query} is:{status.value}'
    if query:
        return query
    if status is not None:
        return f'is:{status.value}'
    return None


def build_issue_query_params(params: ListIssuesParams) -> QueryPairs:
    """Return the list endpoint query pairs in a fixed order."""
    pairs: QueryPairs = [('project', project) for project in params.projects]

    combined = combine_query(params.query, params.status)
    if combined is not None:
        pairs.append(('query', combined))
    if params.sort:
        pairs.append(('sort', params.sort))
    if params.limit is not None:
        pairs.append(('limit', str(params.limit)))
    if params.cursor:
        pairs.append(('cursor', params.cursor))
    return pairs


def _with_query(url: str, pairs: QueryPairs) -> str:
    if not pairs:
        return url
    return f'{url}?{urlencode(pairs)}'


def issues_path(org_slug: str) -> str:
    return f'organizations/{quote(org_slug, safe="")}/issues/'


def build_issues_url(base_url: str, org_slug: str, params: ListIssuesParams) -> str:
    """URL for one page of the organization issue list."""
    return _with_query(build_api_url(base_url, issues_path(org_slug)), build_issue_query_params(params))


def build_issue_url(base_url: str, org_slug: str, issue_id: str) -> str:
    """URL for a single issue (GET, PUT or DELETE)."""
    return build_api_url(base_url, issues_path(org_slug) + f'{quote(issue_id, safe="")}/')


def build_bulk_url(base_url: str, org_slug: str, issue_ids: Sequence[str]) -> str:
    """URL for the bulk endpoint; each target becomes a repeated ``id`` parameter."""
    return _with_query(build_api_url(base_url, issues_path(org_slug)), [('id', issue_id) for issue_id in issue_ids])


# =============================================================================
# Pagination
# =============================================================================


def parse_next_cursor(link_header: Optional[str]) -> Optional[str]:
    """Extract the next page cursor from a ``Link`` header.

    Sentry sends entries such as::

        <https://...&cursor=0:100:0>; rel="next"; results="true"; cursor="0:100:0"

    Only an entry marked both ``rel="next"`` and ``results="true"`` yields a
    cursor. Returns None when there is no further page.
    """
    if not link_header:
        return None

    for entry in link_header.split(','):
        if 'rel="next"' not in entry or 'results="true"' not in entry:
            continue
        for segment in entry.split(';'):
            segment = segment.strip()
            if segment.startswith('cursor='):
                return segment[len('cursor='):].strip('"')
    return None


# =============================================================================
# Error classification
# =============================================================================


def parse_retry_after(headers: Mapping[str, str]) -> int:
    """Seconds from a ``Retry-After`` header, or the default when absent or unparseable.

    Only a plain non-negative integer is accepted; signs, underscores and
    HTTP dates fall back to the default.
    """
    raw = headers.get('Retry-After')
    if raw is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    value = str(raw).strip()
    if not (value.isascii() and value.isdigit()):
        logger.debug(f'Ignoring unparseable Retry-After header: {raw!r}')
        return DEFAULT_RETRY_AFTER_SECONDS
    return int(value)


def extract_error_message(body_text: str) -> str:
    """Return ``detail`` from a JSON error envelope, else the raw body verbatim."""
    try:
        data = json.loads(body_text)
    except ValueError:
        return body_text
    if isinstance(data, dict) and isinstance(data.get('detail'), str):
        return data['detail']
    return body_text


def classify_error_response(status_code: int, body_text: str, headers: Mapping[str, str]) -> SentryCliError:
    """Map a non-2xx response onto the error taxonomy."""
    if status_code == 429:
        return RateLimitedError(parse_retry_after(headers))

    message = extract_error_message(body_text)
    if status_code == 401:
        return AuthError(message)
    if status_code == 403:
        return ForbiddenError(message)
    if status_code == 404:
        return NotFoundError(message)
    return ApiError(status_code, message)
