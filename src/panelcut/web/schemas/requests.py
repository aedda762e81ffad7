"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class OptimizeRequest(BaseModel):
    """Request for computing a cut plan from a full project."""

    config: dict[str, Any] = Field(..., description="Full project JSON")


class ConfigValidateRequest(BaseModel):
    """Request for validating a project."""

    config: dict[str, Any] = Field(..., description="Project JSON")
