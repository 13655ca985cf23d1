"""Jira justification plugin -- turns JQL match results into validation responses."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from jiraplugin.config import PluginConfig
from jiraplugin.errors import ConfigError, InternalError, InvalidInputError
from jiraplugin.jira.base import IssueMatcher, Match
from jiraplugin.jira.client import JiraClient, parse_http_url
from jiraplugin.secrets import SecretFetcher, fetch_secret
from jiraplugin.validator.models import UIData, ValidationRequest, ValidationResponse

logger = logging.getLogger(__name__)

# Justification category this plugin validates.
JIRA_CATEGORY = "jira"

# Annotation keys of a valid justification.
JIRA_ISSUE_ID = "jira_issue_id"
JIRA_ISSUE_URL = "jira_issue_url"


class JiraPlugin:
    """Validates jira justifications against the configured JQL.

    Jira rejections (unknown issue, no match, ambiguous match) produce an
    invalid ValidationResponse. Failures to reach or understand Jira raise
    InternalError so callers can tell "invalid" from "could not validate".
    """

    def __init__(self, matcher: IssueMatcher, ui_data: UIData, issue_base_url: str) -> None:
        self._matcher = matcher
        self._ui_data = ui_data
        self._issue_base_url = issue_base_url

    @classmethod
    def from_config(
        cls,
        cfg: PluginConfig,
        secret_fetcher: SecretFetcher = fetch_secret,
    ) -> JiraPlugin:
        """Build a plugin backed by a JiraClient from checked configuration."""
        try:
            api_token = secret_fetcher(cfg.api_token_secret_id)
        except Exception as exc:
            if isinstance(exc, ConfigError):
                raise
            raise ConfigError(f"failed to fetch API token: {exc}") from exc

        client = JiraClient(
            base_url=cfg.jira_endpoint,
            jql=cfg.jql,
            account=cfg.jira_account,
            api_token=api_token,
        )
        return cls(
            matcher=client,
            ui_data=UIData(display_name=cfg.display_name, hint=cfg.hint),
            issue_base_url=cfg.browse_base_url(),
        )

    async def validate(self, request: ValidationRequest) -> ValidationResponse:
        if request.category != JIRA_CATEGORY:
            msg = (
                f'failed to perform validation, expected category "{request.category}" '
                f'to be "{JIRA_CATEGORY}"'
            )
            logger.warning("Rejected jira justification: %s", msg)
            return _invalid(msg)

        if not request.value:
            msg = "empty justification value"
            logger.warning("Rejected jira justification: %s", msg)
            return _invalid(msg)

        key = request.value
        try:
            result = await self._matcher.match_issue(key)
        except InvalidInputError as exc:
            logger.warning("Jira rejected justification %r: %s", key, exc)
            return _invalid(_invalid_key_message(key))
        except InternalError as exc:
            logger.error("Failed to validate with jira endpoint: %s", exc)
            raise InternalError(f'unable to validate jira issue "{key}"') from exc

        if not result.matches:
            logger.warning("No match entry returned for justification %r", key)
            return _invalid(_invalid_key_message(key))
        if len(result.matches) > 1:
            logger.warning(
                "Expected one match entry for justification %r, got %d; using the first",
                key,
                len(result.matches),
            )

        return self._interpret(key, result.matches[0])

    def _interpret(self, key: str, match: Match) -> ValidationResponse:
        warnings = list(match.errors)
        matched = match.matched_issues

        if not matched:
            logger.warning("No jira issue matched justification %r", key)
            return _invalid(_invalid_key_message(key), warnings)

        # One JQL and one issue were submitted, so one match is the only valid outcome.
        if len(matched) > 1:
            logger.warning("Ambiguous justification %r matched %s", key, matched)
            return _invalid(
                f'ambiguous jira justification "{key}", multiple matching jira issues '
                f"are found {matched}",
                warnings,
            )

        return ValidationResponse(
            valid=True,
            warning=warnings,
            annotation={
                JIRA_ISSUE_ID: str(matched[0]),
                JIRA_ISSUE_URL: self._issue_url(key),
            },
        )

    def _issue_url(self, key: str) -> str:
        """Build the browsable link, e.g. https://your-domain.atlassian.net/browse/ABC-1."""
        try:
            base = parse_http_url(self._issue_base_url)
            path = base.path.rstrip("/") + "/browse/" + quote(key, safe="")
            return str(base.copy_with(path=path))
        except (ConfigError, httpx.InvalidURL) as exc:
            logger.error("Failed to build a clickable url for issue %r: %s", key, exc)
            raise InternalError(f'unable to validate jira issue "{key}"') from exc

    async def get_ui_data(self) -> UIData:
        return self._ui_data

    async def close(self) -> None:
        await self._matcher.close()


def _invalid_key_message(key: str) -> str:
    return (
        f'invalid jira justification "{key}", ensure you input a valid jira id '
        "for an open issue"
    )


def _invalid(message: str, warnings: list[str] | None = None) -> ValidationResponse:
    return ValidationResponse(valid=False, error=[message], warning=warnings or [])
