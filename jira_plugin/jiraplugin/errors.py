"""Error taxonomy shared by the Jira client and the validation plugin."""

from __future__ import annotations


class JiraPluginError(Exception):
    """Base class for all classified plugin errors."""


class ConfigError(JiraPluginError):
    """Configuration is missing, malformed, or a secret cannot be resolved."""


class InvalidInputError(JiraPluginError):
    """The caller's input was rejected by Jira (HTTP 4xx).

    Not retryable. The plugin turns this into an invalid validation response.
    """


class InternalError(JiraPluginError):
    """Jira or the network failed, so validity could not be determined.

    Covers HTTP 5xx, transport failures and undecodable responses. Safe to
    retry at a higher layer.
    """


class DecodeError(InternalError):
    """A Jira response body was oversized, not JSON, or had the wrong shape."""
