"""Plugin configuration loaded from an options file or the environment."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from jiraplugin.errors import ConfigError
from jiraplugin.jira.client import parse_http_url

logger = logging.getLogger(__name__)

OPTIONS_PATH_ENV = "JIRA_PLUGIN_OPTIONS_PATH"
DEFAULT_OPTIONS_PATH = "/data/options.json"

DEFAULT_DISPLAY_NAME = "Jira Issue Key"
DEFAULT_HINT = "Jira issue key matching the configured criteria"

# option name -> environment variable
ENV_VARS: dict[str, str] = {
    "jira_endpoint": "JIRA_PLUGIN_ENDPOINT",
    "jql": "JIRA_PLUGIN_JQL",
    "jira_account": "JIRA_PLUGIN_ACCOUNT",
    "api_token_secret_id": "JIRA_PLUGIN_API_TOKEN_SECRET_ID",
    "display_name": "JIRA_PLUGIN_DISPLAY_NAME",
    "hint": "JIRA_PLUGIN_HINT",
    "issue_base_url": "JIRA_PLUGIN_ISSUE_BASE_URL",
}

REQUIRED_OPTIONS = ("jira_endpoint", "jql", "jira_account", "api_token_secret_id")


class PluginConfig(BaseModel):
    """Settings for the Jira justification plugin.

    jira_endpoint: REST API root, e.g. https://your-domain.atlassian.net/rest/api/3
    jql: query an issue must match to be accepted as a justification
    jira_account: user name for Jira Basic Auth
    api_token_secret_id: reference to the API token, see jiraplugin.secrets
    display_name / hint: display metadata for the justification input
    issue_base_url: base for browsable issue links, defaults to the endpoint host
    """

    model_config = ConfigDict(frozen=True)

    jira_endpoint: str = ""
    jql: str = ""
    jira_account: str = ""
    api_token_secret_id: str = ""
    display_name: str = DEFAULT_DISPLAY_NAME
    hint: str = DEFAULT_HINT
    issue_base_url: str = ""

    def check_required(self) -> None:
        """Raise ConfigError naming every empty required option."""
        missing = [
            ENV_VARS[name] for name in REQUIRED_OPTIONS if not getattr(self, name).strip()
        ]
        if missing:
            raise ConfigError(
                "invalid configuration: " + ", ".join(f"empty {env}" for env in missing)
            )

    def browse_base_url(self) -> str:
        """Return the base URL that issue links are built from."""
        if self.issue_base_url:
            parse_http_url(self.issue_base_url)
            return self.issue_base_url
        url = parse_http_url(self.jira_endpoint)
        return f"{url.scheme}://{url.netloc.decode('ascii')}"

    def redacted(self) -> dict[str, str]:
        return {k: v for k, v in self.model_dump().items() if "secret" not in k}


def load_options() -> dict[str, Any]:
    """Load options from the JSON options file, falling back to env vars.

    Unset or empty environment variables are left out so defaults apply.
    """
    opts_path = Path(os.environ.get(OPTIONS_PATH_ENV, DEFAULT_OPTIONS_PATH))
    if opts_path.exists():
        try:
            return json.loads(opts_path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"failed to read options file {opts_path}: {exc}") from exc
    return {
        name: os.environ[env]
        for name, env in ENV_VARS.items()
        if os.environ.get(env)
    }


def load_config(options: dict[str, Any] | None = None) -> PluginConfig:
    """Build and check the plugin configuration."""
    if options is None:
        options = load_options()
    try:
        cfg = PluginConfig.model_validate(options)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc
    cfg.check_required()
    return cfg
