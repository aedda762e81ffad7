"""Cut diagram rendering for packed panels.

This module provides SVG and ASCII rendering of a panel's placements and
a plain-text summary of panel counts, usage and cost.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from panelcut.infrastructure.bin_packing import (
    PanelStockConfig,
    Placement,
    ProjectSummary,
    ThicknessSummary,
)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


class CutDiagramRenderer:
    """Renders cut diagrams in SVG and ASCII form.

    Attributes:
        scale: Pixels per mm for SVG rendering (default 0.3).
        piece_fill: Fill color for placed pieces.
        error_fill: Fill color for oversized pieces.
        piece_stroke: Stroke color for piece outlines.
        text_color: Color for labels and dimensions.
        show_dimensions: Whether to show piece dimensions in labels.
        show_labels: Whether to show part names.
    """

    def __init__(
        self,
        scale: float = 0.3,
        piece_fill: str = "#ADD8E6",  # Light blue
        error_fill: str = "#F08080",  # Light coral
        piece_stroke: str = "#000000",
        text_color: str = "#000000",
        show_dimensions: bool = True,
        show_labels: bool = True,
    ) -> None:
        self.scale = scale
        self.piece_fill = piece_fill
        self.error_fill = error_fill
        self.piece_stroke = piece_stroke
        self.text_color = text_color
        self.show_dimensions = show_dimensions
        self.show_labels = show_labels

    def render_svg(
        self,
        group: ThicknessSummary,
        panel_index: int,
        stock: PanelStockConfig,
    ) -> str:
        """Generate an SVG cut diagram for one panel of a thickness group.

        Args:
            group: Thickness summary the panel belongs to.
            panel_index: Zero-based panel index within the group.
            stock: Stock configuration (full size and discard margin).

        Returns:
            SVG document as a string.
        """
        header_height = 30
        svg_width = stock.width * self.scale
        svg_height = stock.height * self.scale + header_height
        margin = stock.discard_margin * self.scale
        usable = stock.usable_area

        placements = [p for p in group.placements if p.panel_index == panel_index]
        header_text = (
            f"Panel {panel_index + 1} of {group.panel_count} - "
            f"{group.thickness}mm - {_plural(len(placements), 'piece')}"
        )

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
            f'  <rect x="0" y="0" width="{svg_width}" height="{header_height}" '
            f'fill="#E0E0E0"/>',
            f'  <text x="10" y="{header_height - 8}" '
            f'font-family="Arial, sans-serif" font-size="14" '
            f'fill="{self.text_color}">{escape(header_text)}</text>',
            f'  <rect x="0" y="{header_height}" width="{svg_width}" '
            f'height="{stock.height * self.scale}" fill="#f5deb3" '
            f'stroke="{self.piece_stroke}" stroke-width="2"/>',
        ]

        if stock.discard_margin > 0:
            parts.append(
                f'  <rect x="{margin}" y="{header_height + margin}" '
                f'width="{usable.width * self.scale}" '
                f'height="{usable.height * self.scale}" '
                f'fill="none" stroke="#999999" stroke-dasharray="5,5"/>'
            )

        for placement in placements:
            parts.append(self._render_piece(placement, margin, header_height))

        parts.append("</svg>")
        return "\n".join(parts)

    def render_all_svg(self, summary: ProjectSummary) -> list[str]:
        """Generate one SVG per panel, thickness groups in order."""
        documents: list[str] = []
        for group in summary.by_thickness.values():
            for index in range(group.panel_count):
                documents.append(self.render_svg(group, index, summary.stock))
        return documents

    def _render_piece(
        self,
        placement: Placement,
        margin: float,
        header_height: float,
    ) -> str:
        x = margin + placement.x * self.scale
        y = header_height + margin + placement.y * self.scale
        w = placement.placed_width * self.scale
        h = placement.placed_height * self.scale
        fill = self.error_fill if placement.is_oversized else self.piece_fill

        rect = (
            f'    <rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{fill}" stroke="{self.piece_stroke}"/>'
        )

        svg_parts = ["  <g>"]
        # Hover tooltip, kept even when the piece is too small for text
        if self.show_labels:
            svg_parts.append(f"    <title>{escape(placement.piece.label)}</title>")
        svg_parts.append(rect)

        font_size = min(12, min(w, h) / 6)
        if font_size < 6:
            svg_parts.append("  </g>")
            return "\n".join(svg_parts)

        text_x = x + w / 2
        text_y = y + h / 2

        if self.show_labels:
            svg_parts.append(
                f'    <text x="{text_x}" y="{text_y - font_size / 2}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size}" fill="{self.text_color}">'
                f"{escape(placement.part_name)}</text>"
            )

        if self.show_dimensions:
            dims = f"{placement.piece.width:g} x {placement.piece.height:g}"
            if placement.rotated:
                dims += " (R)"
            if placement.is_oversized:
                dims += f" - {placement.error}"
            dims_y = text_y + font_size / 2 + 2 if self.show_labels else text_y
            svg_parts.append(
                f'    <text x="{text_x}" y="{dims_y}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size * 0.8}" fill="{self.text_color}">'
                f"{escape(dims)}</text>"
            )

        svg_parts.append("  </g>")
        return "\n".join(svg_parts)

    def render_ascii(
        self,
        group: ThicknessSummary,
        panel_index: int,
        stock: PanelStockConfig,
        width: int = 80,
    ) -> str:
        """Generate an ASCII cut diagram for one panel.

        Only the usable area is drawn. Rotated pieces have their dimensions
        suffixed with ``R``.

        Args:
            group: Thickness summary the panel belongs to.
            panel_index: Zero-based panel index within the group.
            stock: Stock configuration.
            width: Terminal width in characters (default 80).

        Returns:
            ASCII string representation of the panel.
        """
        usable = stock.usable_area
        grid_width = width - 2
        placements = [p for p in group.placements if p.panel_index == panel_index]

        lines = [
            f"Panel {panel_index + 1} of {group.panel_count} - "
            f"{group.thickness}mm - {_plural(len(placements), 'piece')}"
        ]

        if usable.width <= 0 or usable.height <= 0:
            lines.append("(no usable area)")
            return "\n".join(lines)

        scale_x = grid_width / usable.width
        # 0.5 for character aspect ratio
        grid_height = max(int(grid_width * (usable.height / usable.width) * 0.5), 10)
        scale_y = grid_height / usable.height

        grid = [[" " for _ in range(grid_width)] for _ in range(grid_height)]
        for placement in placements:
            self._draw_piece_ascii(grid, placement, scale_x, scale_y)

        lines.append("+" + "-" * grid_width + "+")
        for row in grid:
            lines.append("|" + "".join(row) + "|")
        lines.append("+" + "-" * grid_width + "+")

        return "\n".join(lines)

    def _draw_piece_ascii(
        self,
        grid: list[list[str]],
        placement: Placement,
        scale_x: float,
        scale_y: float,
    ) -> None:
        grid_height = len(grid)
        grid_width = len(grid[0]) if grid else 0

        x1 = max(0, min(int(placement.x * scale_x), grid_width - 1))
        x2 = max(0, min(int(placement.right_edge * scale_x), grid_width - 1))
        y1 = max(0, min(int(placement.y * scale_y), grid_height - 1))
        y2 = max(0, min(int(placement.bottom_edge * scale_y), grid_height - 1))

        for x in range(x1, x2 + 1):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1, y2 + 1):
            grid[y][x1] = "|"
            grid[y][x2] = "|"
        for y, x in ((y1, x1), (y1, x2), (y2, x1), (y2, x2)):
            grid[y][x] = "+"

        dims = f"{placement.piece.width:.0f}x{placement.piece.height:.0f}"
        if placement.rotated:
            dims += "R"
        if placement.is_oversized:
            dims += "!"

        for row, text in ((y1 + 1, placement.part_name), (y1 + 2, dims)):
            if row >= y2:
                break
            text = text[: max(x2 - x1 - 1, 0)]
            for i, char in enumerate(text):
                grid[row][x1 + 1 + i] = char

    def render_all_ascii(self, summary: ProjectSummary, width: int = 80) -> str:
        """Generate ASCII diagrams for every panel followed by a summary line."""
        if summary.total_panels == 0:
            return "No panels to display."

        parts: list[str] = []
        for group in summary.by_thickness.values():
            for index in range(group.panel_count):
                parts.append(self.render_ascii(group, index, summary.stock, width))
                parts.append("")

        parts.append("=" * width)
        parts.append(
            f"SUMMARY: {_plural(summary.total_panels, 'panel')}, "
            f"{summary.overall_usage_percent:.1f}% material usage"
        )
        for group in summary.by_thickness.values():
            parts.append(f"  {group.thickness}mm: {_plural(group.panel_count, 'panel')}")

        return "\n".join(parts)

    def render_summary(self, summary: ProjectSummary) -> str:
        """Generate a text summary of panel counts, usage and cost.

        Args:
            summary: Complete cut plan.

        Returns:
            Formatted summary string.
        """
        usable = summary.usable_area
        stock = summary.stock
        lines: list[str] = [
            "CUT PLAN SUMMARY",
            "=" * 40,
            f"Stock Panel: {stock.width:g} x {stock.height:g} mm "
            f"(usable {usable.width:g} x {usable.height:g} mm)",
            f"Total Panels: {summary.total_panels}",
            f"Material Usage: {summary.overall_usage_percent:.1f}%",
        ]

        if summary.has_price:
            lines.append(f"Total Cost: {summary.total_cost:.2f}")
            lines.append(
                f"Proportional Cost: {summary.total_proportional_cost:.2f}"
            )

        lines.append("")
        lines.append("Panels by Thickness:")
        for group in summary.by_thickness.values():
            line = (
                f"  {group.thickness}mm: {_plural(group.panel_count, 'panel')}, "
                f"{_plural(group.part_count, 'piece')}, "
                f"{group.usage_percent:.1f}% used"
            )
            if group.price_per_panel > 0:
                line += f", cost {group.cost:.2f}"
            lines.append(line)

        if summary.warnings:
            lines.append("")
            lines.append(f"Warnings: {len(summary.warnings)}")
            for warning in summary.warnings:
                lines.append(f"  {warning}")

        return "\n".join(lines)
