# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Client for the Sentry organization issues API"""

import logging
from typing import Any, List, Optional, Sequence

import requests

from sentry_issues.classes import Issue, IssueUpdate, ListIssuesParams
from sentry_issues.config import Config
from sentry_issues.constants import REQUEST_TIMEOUT_SECONDS
from sentry_issues.errors import JsonError, NetworkError
from sentry_issues.utils.sentry_api_tools import (
    build_bulk_url,
    build_issue_url,
    build_issues_url,
    classify_error_response,
    make_headers,
    parse_next_cursor,
    validate_base_url,
)
from sentry_issues.utils.utils import mask_secret

logger = logging.getLogger(__name__)


class SentryClient:
    """
    Client for the issue endpoints of one Sentry organization.

    Issues exactly one HTTP request per call (plus one per page when
    paginating), sequentially and without retries. Non-2xx responses are
    raised as the matching ``SentryCliError`` subclass.
    """

    def __init__(
        self,
        base_url: str,
        org_slug: str,
        auth_token: str,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        """Initialize the client.

        Args:
            base_url: Server URL, e.g. https://sentry.io.
            org_slug: Organization every request is scoped to.
            auth_token: Bearer token.
            timeout: Per-request timeout in seconds.

        Raises:
            UrlParseError: If base_url is not an absolute http(s) URL.
        """
        self.base_url = validate_base_url(base_url)
        self.org_slug = org_slug
        self.auth_token = auth_token
        self.timeout = timeout

        logger.debug(f'Server: {self.base_url}')
        logger.debug(f'Organization: {self.org_slug}')
        logger.debug(f'Token: {mask_secret(self.auth_token)}')

    @classmethod
    def from_config(
        cls,
        config: Config,
        org_override: Optional[str] = None,
        server_override: Optional[str] = None,
        token_override: Optional[str] = None,
    ) -> 'SentryClient':
        """Resolve token, server and org (in that order) and build a client."""
        auth_token = config.get_auth_token(token_override)
        base_url = config.get_server_url(server_override)
        org_slug = config.get_org(org_override)
        return cls(base_url, org_slug, auth_token)

    # =========================================================================
    # Transport
    # =========================================================================

    def _request(self, method: str, url: str, body: Optional[dict] = None) -> requests.Response:
        """Send one request and return the response if it is 2xx.

        Raises:
            NetworkError: On connection, timeout or protocol failures.
            SentryCliError: The classified error for any non-2xx status.
        """
        logger.debug(f'{method} {url}')
        try:
            response = requests.request(
                method,
                url,
                headers=make_headers(self.auth_token),
                json=body,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise NetworkError(str(e)) from e

        logger.debug(f'Response: {response.status_code}')
        if not 200 <= response.status_code < 300:
            raise classify_error_response(response.status_code, response.text, response.headers)
        return response

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise JsonError(f'invalid JSON in response body: {e}') from e

    @classmethod
    def _decode_issues(cls, response: requests.Response) -> List[Issue]:
        data = cls._decode(response)
        if not isinstance(data, list):
            raise JsonError(f'expected a list of issues, got {type(data).__name__}')
        return [Issue.from_api(item) for item in data]

    @classmethod
    def _decode_issue(cls, response: requests.Response) -> Issue:
        data = cls._decode(response)
        if not isinstance(data, dict):
            raise JsonError(f'expected an issue object, got {type(data).__name__}')
        return Issue.from_api(data)

    # =========================================================================
    # Reads
    # =========================================================================

    def list_issues(self, params: ListIssuesParams) -> List[Issue]:
        """Fetch a single page of issues."""
        response = self._request('GET', build_issues_url(self.base_url, self.org_slug, params))
        return self._decode_issues(response)

    def list_all_issues(self, params: ListIssuesParams) -> List[Issue]:
        """Fetch every page, following the Link header cursor.

        Pages are requested strictly in order. Any failing page aborts the
        whole listing; pages fetched before it are discarded.
        """
        all_issues: List[Issue] = []
        cursor: Optional[str] = None
        page = 1

        while True:
            logger.debug(f'Fetching page {page}...')
            url = build_issues_url(self.base_url, self.org_slug, params.with_cursor(cursor))
            response = self._request('GET', url)

            issues = self._decode_issues(response)
            all_issues.extend(issues)
            logger.debug(f'Got {len(issues)} issues (total: {len(all_issues)})')

            cursor = parse_next_cursor(response.headers.get('Link'))
            if cursor is None:
                break
            page += 1

        return all_issues

    def get_issue(self, issue_id: str) -> Issue:
        response = self._request('GET', build_issue_url(self.base_url, self.org_slug, issue_id))
        return self._decode_issue(response)

    # =========================================================================
    # Mutations
    # =========================================================================

    def update_issue(self, issue_id: str, update: IssueUpdate) -> Issue:
        """Apply a sparse patch to one issue and return the updated issue."""
        url = build_issue_url(self.base_url, self.org_slug, issue_id)
        response = self._request('PUT', url, update.to_payload())
        return self._decode_issue(response)

    def update_issues(self, issue_ids: Sequence[str], update: IssueUpdate) -> None:
        """Apply one sparse patch to several issues in a single bulk request."""
        url = build_bulk_url(self.base_url, self.org_slug, issue_ids)
        self._request('PUT', url, update.to_payload())

    def delete_issue(self, issue_id: str) -> None:
        self._request('DELETE', build_issue_url(self.base_url, self.org_slug, issue_id))

    def delete_issues(self, issue_ids: Sequence[str]) -> None:
        self._request('DELETE', build_bulk_url(self.base_url, self.org_slug, issue_ids))

    def merge_issues(self, primary_id: str, other_ids: Sequence[str]) -> str:
        """Merge issues and return the id of the surviving issue.

        The bulk endpoint answers a merge with ``{"merge": {"parent": ...}}``;
        some servers return the merged issue itself, in which case its
        ``shortId`` is used.
        """
        all_ids = [primary_id, *other_ids]
        url = build_bulk_url(self.base_url, self.org_slug, all_ids)
        response = self._request('PUT', url, IssueUpdate(merge=True).to_payload())

        data = self._decode(response)
        if isinstance(data, dict):
            if data.get('shortId'):
                return str(data['shortId'])
            merge = data.get('merge')
            if isinstance(merge, dict) and merge.get('parent'):
                return str(merge['parent'])
        raise JsonError('merge response names no surviving issue')
