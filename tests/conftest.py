"""Shared test fixtures and configuration."""

import sys
from pathlib import Path

# Add jira_plugin/ to Python path so `from jiraplugin.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "jira_plugin"))

import pytest

from jiraplugin.config import PluginConfig

JIRA_ENDPOINT = "https://jira.example.com/rest/api/3"
BROWSE_BASE = "https://jira.example.com"


@pytest.fixture
def plugin_config() -> PluginConfig:
    return PluginConfig(
        jira_endpoint=JIRA_ENDPOINT,
        jql="project = JRA and status = Open",
        jira_account="bot@example.com",
        api_token_secret_id="env:JIRA_TEST_TOKEN",
    )
