"""Abstract issue matcher interface and Jira wire models."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field


class JiraIssue(BaseModel):
    """Minimal issue returned by the Get Issue API (``fields=key,id``)."""

    key: str
    id: str


class Match(BaseModel):
    """Result of evaluating the submitted JQL against the submitted issues."""

    model_config = ConfigDict(populate_by_name=True)

    matched_issues: list[int] = Field(default_factory=list, alias="matchedIssues")
    # Non-fatal JQL evaluation problems reported by Jira.
    errors: list[str] = Field(default_factory=list)


class MatchResult(BaseModel):
    """Response of the ``jql/match`` API, one entry per submitted JQL."""

    matches: list[Match] = Field(default_factory=list)


class IssueMatcher(ABC):
    """Something that can check an issue key against the configured JQL."""

    @abstractmethod
    async def match_issue(self, issue_key: str) -> MatchResult:
        """Resolve *issue_key* and evaluate the configured JQL against it.

        Raises InvalidInputError when Jira rejects the input and
        InternalError when the outcome could not be determined.
        """
        ...

    async def close(self) -> None:
        """Release any held resources. No-op by default."""
