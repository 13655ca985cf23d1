"""Justification validation against Jira."""

from jiraplugin.validator.models import UIData, ValidationRequest, ValidationResponse
from jiraplugin.validator.plugin import JIRA_CATEGORY, JiraPlugin

__all__ = [
    "JIRA_CATEGORY",
    "JiraPlugin",
    "UIData",
    "ValidationRequest",
    "ValidationResponse",
]
