"""Validation data models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ValidationRequest(BaseModel):
    """A justification to validate: its category and the candidate issue key."""

    category: str = ""
    value: str = ""


class ValidationResponse(BaseModel):
    """Outcome of validating a justification.

    ``valid=False`` means the justification was checked and rejected; failures
    to perform the check are raised as errors instead.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool = False
    warning: list[str] = Field(default_factory=list)
    error: list[str] = Field(default_factory=list)
    annotation: dict[str, str] = Field(default_factory=dict)


class UIData(BaseModel):
    """Display metadata for the justification input."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    hint: str
