"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class PlacementSchema(BaseModel):
    """A piece positioned on a panel."""

    module_name: str = Field(..., description="Module the piece belongs to")
    part_name: str = Field(..., description="Part name")
    width: float = Field(..., description="Original width in mm")
    height: float = Field(..., description="Original height in mm")
    thickness: float = Field(..., description="Thickness in mm")
    x: float = Field(..., description="Offset from usable area left edge in mm")
    y: float = Field(..., description="Offset from usable area top edge in mm")
    rotated: bool = Field(..., description="Whether the piece is turned 90 degrees")
    placed_width: float = Field(..., description="Width as placed in mm")
    placed_height: float = Field(..., description="Height as placed in mm")
    panel_index: int = Field(..., description="Zero-based panel index in its group")
    error: str | None = Field(default=None, description="Placement error, if any")


class ThicknessSummarySchema(BaseModel):
    """Cut plan for one material thickness."""

    thickness: float = Field(..., description="Thickness in mm")
    panel_count: int = Field(..., description="Panels needed")
    part_count: int = Field(..., description="Pieces requested")
    price_per_panel: float = Field(..., description="Price of one whole panel")
    cost: float = Field(..., description="Cost of all whole panels")
    proportional_cost: float = Field(..., description="Cost of the area used")
    used_area: float = Field(..., description="Area of placed pieces in mm2")
    total_panel_area: float = Field(..., description="Usable area of all panels in mm2")
    usage_percent: float = Field(..., description="Material usage percentage")
    placements: list[PlacementSchema] = Field(
        default_factory=list, description="Piece placements"
    )


class DimensionsSchema(BaseModel):
    """Panel dimensions in mm."""

    width: float = Field(..., description="Width in mm")
    height: float = Field(..., description="Height in mm")


class CutPlanSchema(BaseModel):
    """Response for cut plan optimization."""

    name: str | None = Field(default=None, description="Project name")
    by_thickness: dict[str, ThicknessSummarySchema] = Field(
        default_factory=dict, description="Cut plans keyed by thickness"
    )
    total_panels: int = Field(..., description="Panels across all thicknesses")
    total_cost: float = Field(..., description="Cost of all whole panels")
    total_proportional_cost: float = Field(..., description="Cost of the area used")
    total_used_area: float = Field(..., description="Area of placed pieces in mm2")
    total_panel_area: float = Field(..., description="Usable area of all panels in mm2")
    overall_usage_percent: float = Field(..., description="Overall material usage")
    usable_dimensions: DimensionsSchema = Field(..., description="Usable panel size")
    stock_dimensions: DimensionsSchema = Field(..., description="Stock panel size")
    warnings: list[str] = Field(default_factory=list, description="Oversized parts")


class ValidationResultSchema(BaseModel):
    """Response for project validation."""

    is_valid: bool = Field(..., description="Whether the project is valid")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors"
    )
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )


class ErrorResponseSchema(BaseModel):
    """Error body returned by the exception handlers."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional details")
