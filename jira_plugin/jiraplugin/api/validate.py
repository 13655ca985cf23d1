"""Validator contract endpoints: justification validation and UI data."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from jiraplugin.deps import get_plugin
from jiraplugin.errors import InternalError
from jiraplugin.validator.models import UIData, ValidationRequest, ValidationResponse
from jiraplugin.validator.plugin import JiraPlugin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validate"])


@router.post("/validate", response_model=ValidationResponse)
async def validate_justification(
    body: ValidationRequest,
    plugin: JiraPlugin = Depends(get_plugin),
) -> ValidationResponse:
    """Validate a justification.

    A rejected justification is a 200 with ``valid=false``; a 500 means
    validity could not be determined.
    """
    try:
        return await plugin.validate(body)
    except InternalError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.get("/ui-data", response_model=UIData)
async def get_ui_data(
    plugin: JiraPlugin = Depends(get_plugin),
) -> UIData:
    """Return display name and hint for the justification input."""
    return await plugin.get_ui_data()
