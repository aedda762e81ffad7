"""Output formatters for parts lists and cut plans."""

from __future__ import annotations

import json
from typing import Any, Sequence

from panelcut.domain import Part
from panelcut.infrastructure.bin_packing import (
    Placement,
    ProjectSummary,
    ThicknessSummary,
)


class PartsListFormatter:
    """Formats a parts list as a fixed-width table."""

    def format(self, parts: Sequence[Part]) -> str:
        """Format parts with dimensions, quantity and total area in m2."""
        if not parts:
            return "No parts in parts list."

        lines = [
            "PARTS LIST",
            "=" * 79,
            f"{'Module':<16} {'Part':<20} {'Width':>8} {'Height':>8} "
            f"{'Thick':>6} {'Qty':>5} {'Area (m2)':>10}",
            "-" * 79,
        ]

        total_area = 0.0
        total_qty = 0
        for part in parts:
            area = part.width * part.height * max(part.quantity, 0) / 1_000_000
            lines.append(
                f"{part.module_name[:16]:<16} {part.part_name[:20]:<20} "
                f"{part.width:>8g} {part.height:>8g} {part.thickness:>6g} "
                f"{part.quantity:>5} {area:>10.3f}"
            )
            total_area += area
            total_qty += max(part.quantity, 0)

        lines.append("-" * 79)
        lines.append(f"{'TOTAL':<62} {total_qty:>5} {total_area:>10.3f}")

        return "\n".join(lines)


class JsonExporter:
    """Exports a cut plan as JSON.

    Placements carry everything needed to draw a cutting diagram or emit
    a CSV without further geometry: position, placed size, rotation,
    panel index, names and any error.
    """

    def export(self, summary: ProjectSummary) -> str:
        """Export a project summary as a JSON string."""
        return json.dumps(self.to_dict(summary), indent=2)

    def to_dict(self, summary: ProjectSummary) -> dict[str, Any]:
        return {
            "by_thickness": {
                f"{thickness:g}": self._format_group(group)
                for thickness, group in summary.by_thickness.items()
            },
            "total_panels": summary.total_panels,
            "total_cost": summary.total_cost,
            "total_proportional_cost": summary.total_proportional_cost,
            "total_used_area": summary.total_used_area,
            "total_panel_area": summary.total_panel_area,
            "overall_usage_percent": summary.overall_usage_percent,
            "usable_dimensions": {
                "width": summary.usable_area.width,
                "height": summary.usable_area.height,
            },
            "stock_dimensions": {
                "width": summary.stock.width,
                "height": summary.stock.height,
            },
            "warnings": list(summary.warnings),
        }

    def _format_group(self, group: ThicknessSummary) -> dict[str, Any]:
        return {
            "thickness": group.thickness,
            "panel_count": group.panel_count,
            "part_count": group.part_count,
            "price_per_panel": group.price_per_panel,
            "cost": group.cost,
            "proportional_cost": group.proportional_cost,
            "used_area": group.used_area,
            "total_panel_area": group.total_panel_area,
            "usage_percent": group.usage_percent,
            "placements": [self._format_placement(p) for p in group.placements],
        }

    def _format_placement(self, placement: Placement) -> dict[str, Any]:
        result: dict[str, Any] = {
            "module_name": placement.module_name,
            "part_name": placement.part_name,
            "width": placement.piece.width,
            "height": placement.piece.height,
            "thickness": placement.piece.thickness,
            "x": placement.x,
            "y": placement.y,
            "rotated": placement.rotated,
            "placed_width": placement.placed_width,
            "placed_height": placement.placed_height,
            "panel_index": placement.panel_index,
        }
        if placement.error is not None:
            result["error"] = placement.error
        return result
