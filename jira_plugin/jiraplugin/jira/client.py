"""Jira REST API client implementing the issue matcher.

Uses two endpoints of the Jira platform REST API:

- Get Issue: ``GET {base}/issue/{issueIdOrKey}``
- Check issues against JQL: ``POST {base}/jql/match``
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from jiraplugin.errors import ConfigError, DecodeError, InternalError, InvalidInputError
from jiraplugin.jira.base import IssueMatcher, JiraIssue, MatchResult

logger = logging.getLogger(__name__)

# Maximum bytes read from a single Jira REST API response (4mb).
RESPONSE_SIZE_LIMIT_BYTES = 4_000_000

REQUEST_TIMEOUT_SECONDS = 10.0

ModelT = TypeVar("ModelT", bound=BaseModel)


class JiraClient(IssueMatcher):
    """Checks issue keys against a JQL query using Jira Basic Auth.

    ``base_url`` is the REST API root, for example
    ``https://your-domain.atlassian.net/rest/api/3``.
    """

    def __init__(
        self,
        base_url: str,
        jql: str,
        account: str,
        api_token: str,
        response_size_limit: int = RESPONSE_SIZE_LIMIT_BYTES,
    ) -> None:
        self._base_url = parse_http_url(base_url)
        self._jql = jql
        self._account = account
        self._api_token = api_token
        self._response_size_limit = response_size_limit
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                auth=httpx.BasicAuth(self._account, self._api_token),
                headers={"Accept": "application/json"},
                timeout=httpx.Timeout(REQUEST_TIMEOUT_SECONDS),
                follow_redirects=True,
            )
        return self._client

    async def match_issue(self, issue_key: str) -> MatchResult:
        """Look up *issue_key* and evaluate the configured JQL against its id."""
        issue = await self._get_issue(issue_key)
        logger.debug("Resolved jira issue %s to id %s", issue.key, issue.id)
        return await self._match_jql(issue)

    async def _get_issue(self, issue_key: str) -> JiraIssue:
        # Dot segments are collapsed by URL normalisation and would leave /issue/.
        if issue_key in (".", ".."):
            raise InvalidInputError(f"invalid issue key {issue_key!r}")
        # Only key and id are needed; restricting fields keeps the payload small.
        return await self._request(
            "GET",
            f"/issue/{quote(issue_key, safe='')}",
            JiraIssue,
            params={"fields": "key,id"},
        )

    async def _match_jql(self, issue: JiraIssue) -> MatchResult:
        # The API evaluates batches; exactly one issue and one JQL are sent.
        payload: dict[str, Any] = {
            "issueIds": [issue.id],
            "jqls": [self._jql],
        }
        return await self._request(
            "POST",
            "/jql/match",
            MatchResult,
            json=payload,
            headers={"Content-Type": "application/json"},
        )

    async def _request(
        self,
        method: str,
        path: str,
        model: type[ModelT],
        **kwargs: Any,
    ) -> ModelT:
        """Send one request and decode the body into *model*.

        The whole exchange, body included, is bounded by the request timeout.
        """
        client = await self._get_client()
        logger.debug("Jira request: %s %s", method, path)

        try:
            body = await asyncio.wait_for(
                self._send(client, method, path, **kwargs),
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except asyncio.TimeoutError as exc:
            raise InternalError(
                f"request {method} {path} timed out after {REQUEST_TIMEOUT_SECONDS}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise InternalError(f"failed to make request {method} {path}: {exc}") from exc

        try:
            return model.model_validate_json(body)
        except ValidationError as exc:
            raise DecodeError(f"failed to decode response of {method} {path}: {exc}") from exc

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> bytes:
        async with client.stream(method, path, **kwargs) as resp:
            _check_status(resp)
            return await self._read_limited(resp)

    async def _read_limited(self, resp: httpx.Response) -> bytes:
        """Read the response body, failing once it exceeds the size limit."""
        chunks: list[bytes] = []
        size = 0
        async for chunk in resp.aiter_bytes():
            size += len(chunk)
            if size > self._response_size_limit:
                raise DecodeError(
                    f"response from {resp.request.url} exceeds "
                    f"{self._response_size_limit} bytes"
                )
            chunks.append(chunk)
        return b"".join(chunks)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()


def _check_status(resp: httpx.Response) -> None:
    """Map Jira HTTP status codes onto the error taxonomy."""
    if resp.status_code >= 500:
        raise InternalError(
            f"failed to make request to {resp.request.url}, "
            f"got response code {resp.status_code}"
        )
    if resp.status_code >= 400:
        raise InvalidInputError(
            f"failed to make request to {resp.request.url}, "
            f"got response code {resp.status_code}"
        )


def parse_http_url(value: str) -> httpx.URL:
    """Parse an absolute http(s) URL, raising ConfigError if it is unusable.

    httpx percent-encodes characters it cannot place in a host instead of
    rejecting them, so the parsed host is checked as well.
    """
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ConfigError(f"failed to parse URL {value!r}: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigError(f"failed to parse URL {value!r}: expected an http(s) URL with a host")
    if any(c in url.host for c in "%[] "):
        raise ConfigError(f"failed to parse URL {value!r}: invalid host {url.host!r}")
    return url
