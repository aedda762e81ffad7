"""Infrastructure layer - packing engine, renderers and formatters."""

from .bin_packing import (
    TOO_LARGE_ERROR,
    CutPlanConfig,
    CutPlanService,
    GuillotineBinPacker,
    PackingResult,
    PanelStockConfig,
    Placement,
    ProjectSummary,
    ThicknessSummary,
    pack_group,
)
from .cut_diagram_renderer import CutDiagramRenderer
from .formatters import JsonExporter, PartsListFormatter

__all__ = [
    # Bin packing
    "CutPlanConfig",
    "CutPlanService",
    "GuillotineBinPacker",
    "PackingResult",
    "PanelStockConfig",
    "Placement",
    "ProjectSummary",
    "TOO_LARGE_ERROR",
    "ThicknessSummary",
    "pack_group",
    # Rendering and formatting
    "CutDiagramRenderer",
    "JsonExporter",
    "PartsListFormatter",
]
