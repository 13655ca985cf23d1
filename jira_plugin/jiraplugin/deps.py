"""Shared FastAPI dependencies."""

from __future__ import annotations

from jiraplugin.validator.plugin import JiraPlugin

_plugin: JiraPlugin | None = None


def get_plugin() -> JiraPlugin:
    """FastAPI dependency: return the shared JiraPlugin."""
    assert _plugin is not None, "JiraPlugin not initialised"
    return _plugin
