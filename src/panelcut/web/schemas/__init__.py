"""Pydantic schemas for the REST API."""

from panelcut.web.schemas.requests import ConfigValidateRequest, OptimizeRequest
from panelcut.web.schemas.responses import (
    CutPlanSchema,
    DimensionsSchema,
    ErrorResponseSchema,
    PlacementSchema,
    ThicknessSummarySchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "ConfigValidateRequest",
    "OptimizeRequest",
    # Responses
    "CutPlanSchema",
    "DimensionsSchema",
    "ErrorResponseSchema",
    "PlacementSchema",
    "ThicknessSummarySchema",
    "ValidationResultSchema",
]
