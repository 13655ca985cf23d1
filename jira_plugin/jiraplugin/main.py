"""FastAPI application -- Jira justification plugin entrypoint."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

import jiraplugin.deps as deps
from jiraplugin.api.validate import router as validate_router
from jiraplugin.config import load_config
from jiraplugin.validator.plugin import JiraPlugin

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: build the plugin on startup, close it on shutdown."""
    log_level = logging.DEBUG if os.environ.get("JIRA_PLUGIN_DEV_MODE") else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    cfg = load_config()
    logger.info("Jira plugin starting with options: %s", cfg.redacted())

    deps._plugin = JiraPlugin.from_config(cfg)
    logger.info("Jira plugin ready (endpoint: %s)", cfg.jira_endpoint)

    yield

    # Shutdown
    if deps._plugin:
        await deps._plugin.close()
    deps._plugin = None


app = FastAPI(
    title="Jira Justification Plugin",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(validate_router)
