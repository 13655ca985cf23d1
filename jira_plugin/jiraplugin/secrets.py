"""Resolve secret references into secret values.

Supported references:

- ``env:NAME``: value of environment variable NAME
- ``file:/path/to/secret``: contents of the file, trailing newline stripped
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

from jiraplugin.errors import ConfigError

logger = logging.getLogger(__name__)

SecretFetcher = Callable[[str], str]


def fetch_secret(secret_id: str) -> str:
    """Return the secret value referenced by *secret_id*."""
    scheme, sep, ref = secret_id.partition(":")
    if not sep or not ref:
        raise ConfigError(
            f"malformed secret reference {secret_id!r}, expected env:NAME or file:/path"
        )

    if scheme == "env":
        value = os.environ.get(ref, "")
    elif scheme == "file":
        try:
            value = Path(ref).read_text()
        except OSError as exc:
            raise ConfigError(f"failed to read secret file {ref}: {exc}") from exc
    else:
        raise ConfigError(f"unsupported secret reference scheme {scheme!r}")

    value = value.rstrip("\r\n")
    if not value:
        raise ConfigError(f"secret {secret_id!r} is empty")
    logger.debug("Resolved secret %s", secret_id)
    return value
