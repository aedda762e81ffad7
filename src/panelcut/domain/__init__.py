"""Domain layer - parts, pieces and the geometry they are packed into."""

from .grouping import expand, expand_and_group, group_by_thickness
from .value_objects import (
    STOCK_THICKNESSES,
    FreeRect,
    Part,
    Piece,
    UsableArea,
    canonical_thickness,
)

__all__ = [
    "FreeRect",
    "Part",
    "Piece",
    "STOCK_THICKNESSES",
    "UsableArea",
    "canonical_thickness",
    "expand",
    "expand_and_group",
    "group_by_thickness",
]
