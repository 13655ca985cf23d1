"""Jira REST API access for justification matching."""

from jiraplugin.jira.base import IssueMatcher, JiraIssue, Match, MatchResult
from jiraplugin.jira.client import JiraClient

__all__ = [
    "IssueMatcher",
    "JiraClient",
    "JiraIssue",
    "Match",
    "MatchResult",
]
