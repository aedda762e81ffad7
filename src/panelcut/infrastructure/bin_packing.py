"""Guillotine bin packing of cut pieces onto stock panels.

This module provides the configuration, result models and packing
algorithm used to turn a parts list into a cutting plan:

- ``GuillotineBinPacker`` packs the pieces of one thickness group using a
  best-short-side-fit search over the free rectangles of every open panel.
- ``CutPlanService`` groups a parts list by thickness, packs each group
  and aggregates panel counts, material usage and cost.

All result dataclasses are frozen (immutable). Packing state lives only
for the duration of a single ``pack`` call.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Sequence

from panelcut.domain.grouping import expand, group_by_thickness
from panelcut.domain.value_objects import (
    STOCK_THICKNESSES,
    FreeRect,
    Part,
    Piece,
    UsableArea,
    canonical_thickness,
)

logger = logging.getLogger(__name__)

TOO_LARGE_ERROR = "Too large for panel"


def _default_prices() -> dict[float, float]:
    return {thickness: 0.0 for thickness in STOCK_THICKNESSES}


@dataclass(frozen=True)
class PanelStockConfig:
    """Dimensions of the raw sheet stock.

    Attributes:
        width: Stock panel width in mm (default 2600).
        height: Stock panel height in mm (default 1830).
        discard_margin: Damaged border discarded on each side in mm.
    """

    width: float = 2600.0
    height: float = 1830.0
    discard_margin: float = 15.0

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Stock panel width must be positive")
        if self.height <= 0:
            raise ValueError("Stock panel height must be positive")
        if self.discard_margin < 0:
            raise ValueError("Discard margin must be non-negative")

    @property
    def usable_area(self) -> UsableArea:
        """Area available for placement after the discard margin."""
        return UsableArea.from_stock(self.width, self.height, self.discard_margin)


@dataclass(frozen=True)
class CutPlanConfig:
    """Settings for a cut plan calculation.

    Attributes:
        stock: Stock panel dimensions and discard margin.
        kerf: Saw blade width reserved after every cut, in mm.
        panel_prices: Price of one whole panel keyed by canonical thickness.
    """

    stock: PanelStockConfig = field(default_factory=PanelStockConfig)
    kerf: float = 3.0
    panel_prices: dict[float, float] = field(default_factory=_default_prices)

    def __post_init__(self) -> None:
        if self.kerf < 0:
            raise ValueError("Kerf width must be non-negative")
        if any(price < 0 for price in self.panel_prices.values()):
            raise ValueError("Panel prices must be non-negative")

    def price_for(self, thickness: float) -> float:
        """Price per whole panel for a thickness, 0 when none is configured."""
        target = canonical_thickness(thickness)
        for key, price in self.panel_prices.items():
            if canonical_thickness(key) == target:
                return price
        return 0.0


@dataclass(frozen=True)
class Placement:
    """A piece positioned on a panel.

    Coordinates are relative to the usable area origin (top-left, after the
    discard margin). Oversized pieces carry an ``error`` and sit unrotated
    at the origin of their own panel.

    Attributes:
        piece: The piece being placed.
        x: Horizontal offset from the left edge of the usable area in mm.
        y: Vertical offset from the top edge of the usable area in mm.
        rotated: True if the piece is turned 90 degrees.
        panel_index: Zero-based index of the panel within its group.
        error: Reason the piece could not be placed, if any.
    """

    piece: Piece
    x: float
    y: float
    rotated: bool = False
    panel_index: int = 0
    error: str | None = None

    @property
    def placed_width(self) -> float:
        """Width of the piece as placed (accounts for rotation)."""
        return self.piece.height if self.rotated else self.piece.width

    @property
    def placed_height(self) -> float:
        """Height of the piece as placed (accounts for rotation)."""
        return self.piece.width if self.rotated else self.piece.height

    @property
    def right_edge(self) -> float:
        return self.x + self.placed_width

    @property
    def bottom_edge(self) -> float:
        return self.y + self.placed_height

    @property
    def is_oversized(self) -> bool:
        return self.error is not None

    @property
    def module_name(self) -> str:
        return self.piece.module_name

    @property
    def part_name(self) -> str:
        return self.piece.part_name


@dataclass(frozen=True)
class PackingResult:
    """Outcome of packing one thickness group.

    Attributes:
        panel_count: Number of panels opened, including oversized ones.
        placements: Placements across all panels, in panel order.
        usable_area: Usable area every panel was packed into.
    """

    panel_count: int
    placements: tuple[Placement, ...]
    usable_area: UsableArea

    def placements_on(self, panel_index: int) -> tuple[Placement, ...]:
        """Placements that landed on one panel, in placement order."""
        return tuple(p for p in self.placements if p.panel_index == panel_index)

    @property
    def oversized(self) -> tuple[Placement, ...]:
        return tuple(p for p in self.placements if p.is_oversized)

    @property
    def used_area(self) -> float:
        """Footprint of all placements, kerf excluded.

        An oversized piece counts only the part of it that lies on its
        dedicated panel, so used area never exceeds total panel area.
        """
        total = 0.0
        for p in self.placements:
            if p.is_oversized:
                total += self._clipped_footprint(p)
            else:
                total += p.placed_width * p.placed_height
        return total

    def _clipped_footprint(self, placement: Placement) -> float:
        width = min(placement.placed_width, self.usable_area.width)
        height = min(placement.placed_height, self.usable_area.height)
        return max(width, 0.0) * max(height, 0.0)


@dataclass
class _PanelState:
    """Internal state for a panel during packing.

    Attributes:
        index: Panel index (0-based, creation order).
        free_rects: Unused regions, kept sorted top-left first.
        placements: Pieces placed on this panel so far.
    """

    index: int
    free_rects: list[FreeRect]
    placements: list[Placement] = field(default_factory=list)


@dataclass
class _Fit:
    """Best candidate found so far by the placement search."""

    panel: _PanelState
    rect_index: int
    width: float
    height: float
    rotated: bool
    short_side: float


class GuillotineBinPacker:
    """Guillotine bin packing with best-short-side-fit placement.

    Each panel tracks a list of free rectangles. For every piece, both
    orientations are tried against every free rectangle of every open
    panel and the candidate leaving the smallest short-side leftover wins.
    The chosen rectangle is split into a right and a bottom remainder,
    separated from the piece by the kerf.

    Attributes:
        usable_area: Usable area of a single panel.
        kerf: Saw blade kerf width in mm.
    """

    def __init__(self, usable_area: UsableArea, kerf: float) -> None:
        self.usable_area = usable_area
        self.kerf = kerf

    def pack(self, pieces: Sequence[Piece]) -> PackingResult:
        """Pack pieces onto as few panels as the heuristic finds.

        Pieces that do not fit an empty panel in either orientation are
        placed on a dedicated panel with an error instead of raising, so
        the rest of the plan is still produced.

        Args:
            pieces: Pieces of a single thickness, in input order.

        Returns:
            PackingResult with panel count and ordered placements.
        """
        if not pieces:
            return PackingResult(
                panel_count=0, placements=(), usable_area=self.usable_area
            )

        sorted_pieces = self._sort_by_area(pieces)
        logger.debug("Packing %d pieces onto panels", len(sorted_pieces))

        panels: list[_PanelState] = []

        for piece in sorted_pieces:
            orientations = self._orientations(piece)

            if not orientations:
                logger.warning(
                    "Part '%s' (%sx%s) is too large for panel",
                    piece.part_name,
                    piece.width,
                    piece.height,
                )
                panel = self._open_panel(panels, dedicated=True)
                panel.placements.append(
                    Placement(
                        piece=piece,
                        x=0.0,
                        y=0.0,
                        rotated=False,
                        panel_index=panel.index,
                        error=TOO_LARGE_ERROR,
                    )
                )
                continue

            best = self._find_best_fit(panels, orientations)
            if best is None:
                panel = self._open_panel(panels)
                best = self._find_best_fit([panel], orientations)
                # An empty panel always admits a non-oversized piece
                assert best is not None

            self._place(piece, best)

        placements: list[Placement] = []
        for panel in panels:
            placements.extend(panel.placements)
            logger.debug(
                "Panel %d: %d pieces, %d free regions",
                panel.index,
                len(panel.placements),
                len(panel.free_rects),
            )

        return PackingResult(
            panel_count=len(panels),
            placements=tuple(placements),
            usable_area=self.usable_area,
        )

    def _sort_by_area(self, pieces: Sequence[Piece]) -> list[Piece]:
        """Sort pieces by area (largest first), then by longest side.

        The sort is stable, so equal pieces keep their input order.
        """
        return sorted(
            pieces,
            key=lambda p: (p.area, p.longest_side),
            reverse=True,
        )

    def _orientations(self, piece: Piece) -> list[tuple[float, float, bool]]:
        """Orientations of a piece that fit an empty panel.

        Returns:
            List of ``(width, height, rotated)`` tuples, unrotated first.
        """
        candidates = [
            (piece.width, piece.height, False),
            (piece.height, piece.width, True),
        ]
        return [c for c in candidates if self.usable_area.admits(c[0], c[1])]

    def _open_panel(
        self, panels: list[_PanelState], dedicated: bool = False
    ) -> _PanelState:
        """Open a new panel.

        A dedicated panel holds a single oversized piece and offers no free
        space to later pieces.
        """
        free_rects: list[FreeRect] = []
        if not dedicated:
            free_rects.append(
                FreeRect(0.0, 0.0, self.usable_area.width, self.usable_area.height)
            )
        panel = _PanelState(index=len(panels), free_rects=free_rects)
        panels.append(panel)
        return panel

    def _find_best_fit(
        self,
        panels: Sequence[_PanelState],
        orientations: list[tuple[float, float, bool]],
    ) -> _Fit | None:
        """Find the globally best free rectangle for a piece.

        Scans panels in creation order, orientations unrotated first and
        free rectangles in list order. Only a strictly smaller short-side
        leftover replaces the current best, so ties go to the first
        candidate encountered.
        """
        best: _Fit | None = None

        for panel in panels:
            for width, height, rotated in orientations:
                for index, rect in enumerate(panel.free_rects):
                    if not rect.fits(width, height):
                        continue
                    short_side = min(rect.width - width, rect.height - height)
                    if best is None or short_side < best.short_side:
                        best = _Fit(
                            panel=panel,
                            rect_index=index,
                            width=width,
                            height=height,
                            rotated=rotated,
                            short_side=short_side,
                        )

        return best

    def _place(self, piece: Piece, fit: _Fit) -> Placement:
        """Place a piece at the top-left of the chosen rectangle and split it."""
        panel = fit.panel
        rect = panel.free_rects.pop(fit.rect_index)

        placement = Placement(
            piece=piece,
            x=rect.x,
            y=rect.y,
            rotated=fit.rotated,
            panel_index=panel.index,
        )
        panel.placements.append(placement)

        if fit.rotated:
            logger.debug(
                "Part '%s' placed rotated at (%s, %s) on panel %d",
                piece.part_name,
                rect.x,
                rect.y,
                panel.index,
            )

        cut_width = fit.width + self.kerf
        cut_height = fit.height + self.kerf

        # Right remainder spans the full rectangle height
        if rect.width - cut_width > 0:
            panel.free_rects.append(
                FreeRect(
                    x=rect.x + cut_width,
                    y=rect.y,
                    width=rect.width - cut_width,
                    height=rect.height,
                )
            )

        # Bottom remainder is only as wide as the piece
        if rect.height - cut_height > 0:
            panel.free_rects.append(
                FreeRect(
                    x=rect.x,
                    y=rect.y + cut_height,
                    width=fit.width,
                    height=rect.height - cut_height,
                )
            )

        self._prune_free_rects(panel)
        return placement

    def _prune_free_rects(self, panel: _PanelState) -> None:
        """Drop free rectangles contained in another, then sort top-left first.

        Adjacent rectangles are not merged.
        """
        rects = panel.free_rects
        for i in range(len(rects) - 1, -1, -1):
            for j in range(len(rects)):
                if i != j and rects[j].contains(rects[i]):
                    del rects[i]
                    break

        rects.sort(key=lambda r: (r.y, r.x))


def pack_group(
    pieces: Sequence[Piece],
    usable_area: UsableArea,
    kerf: float,
) -> PackingResult:
    """Pack one thickness group; convenience wrapper over the packer."""
    return GuillotineBinPacker(usable_area, kerf).pack(pieces)


@dataclass(frozen=True)
class ThicknessSummary:
    """Packing outcome and cost for one material thickness.

    Attributes:
        thickness: Canonical thickness in mm.
        panel_count: Panels needed for this thickness.
        part_count: Pieces requested (sum of part quantities).
        placements: Placements on this group's panels.
        price_per_panel: Price of one whole panel.
        cost: Cost of all whole panels.
        proportional_cost: Cost of only the area consumed.
        used_area: Footprint of placed pieces in square mm, oversized
            pieces clipped to their panel.
        total_panel_area: Usable area of all panels in square mm.
        usage_percent: used_area / total_panel_area * 100.
    """

    thickness: float
    panel_count: int
    part_count: int
    placements: tuple[Placement, ...]
    price_per_panel: float
    cost: float
    proportional_cost: float
    used_area: float
    total_panel_area: float
    usage_percent: float

    @property
    def oversized(self) -> tuple[Placement, ...]:
        return tuple(p for p in self.placements if p.is_oversized)


@dataclass(frozen=True)
class ProjectSummary:
    """Cut plan for a whole parts list, aggregated across thicknesses.

    Attributes:
        by_thickness: Per-thickness summaries in order of first appearance.
        total_panels: Panels across all thicknesses.
        total_cost: Sum of whole-panel costs.
        total_proportional_cost: Sum of area-proportional costs.
        total_used_area: Sum of used areas.
        total_panel_area: Sum of usable panel areas.
        overall_usage_percent: Usage computed from the summed areas.
        usable_area: Usable area of one panel.
        stock: Stock panel configuration.
        warnings: One message per oversized piece.
    """

    by_thickness: dict[float, ThicknessSummary]
    total_panels: int
    total_cost: float
    total_proportional_cost: float
    total_used_area: float
    total_panel_area: float
    overall_usage_percent: float
    usable_area: UsableArea
    stock: PanelStockConfig
    warnings: tuple[str, ...] = ()

    @property
    def has_price(self) -> bool:
        return self.total_cost > 0

    @property
    def total_pieces_placed(self) -> int:
        return sum(len(s.placements) for s in self.by_thickness.values())


class CutPlanService:
    """Coordinates packing across thickness groups.

    A physical panel has a single thickness, so the parts list is
    partitioned by thickness and each group is packed independently.
    Groups share no state and may be packed on a thread pool; results are
    always combined in group order. The packer is pure Python and holds
    the GIL, so threads interleave groups rather than speed them up.

    Attributes:
        config: Cut plan configuration.
        packer: GuillotineBinPacker shared by all groups.
        max_workers: Number of groups packed concurrently.
    """

    def __init__(self, config: CutPlanConfig, max_workers: int = 1) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.config = config
        self.packer = GuillotineBinPacker(config.stock.usable_area, config.kerf)
        self.max_workers = max_workers

    def pack_group(self, pieces: Sequence[Piece]) -> PackingResult:
        """Pack pieces of a single thickness with this service's settings."""
        return self.packer.pack(pieces)

    def calculate(self, parts: Sequence[Part]) -> ProjectSummary:
        """Build the cut plan for a parts list.

        Args:
            parts: All parts of the project, any thickness.

        Returns:
            ProjectSummary with per-thickness and grand totals.
        """
        usable = self.config.stock.usable_area
        groups = group_by_thickness(parts)

        logger.info(
            "Calculating cut plan for %d parts across %d thicknesses",
            len(parts),
            len(groups),
        )

        piece_groups = [expand(group_parts) for group_parts in groups.values()]
        if self.max_workers > 1 and len(piece_groups) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                results = list(executor.map(self.packer.pack, piece_groups))
        else:
            results = [self.packer.pack(pieces) for pieces in piece_groups]

        by_thickness: dict[float, ThicknessSummary] = {}
        warnings: list[str] = []

        for (thickness, group_parts), result in zip(groups.items(), results):
            summary = self._summarize(thickness, group_parts, result)
            by_thickness[thickness] = summary

            logger.debug(
                "Thickness %smm: %d pieces -> %d panels, %.1f%% used",
                thickness,
                len(result.placements),
                summary.panel_count,
                summary.usage_percent,
            )

            for placement in summary.oversized:
                warnings.append(
                    f"Part '{placement.part_name}' of '{placement.module_name}' "
                    f"({placement.piece.width}x{placement.piece.height}, "
                    f"{thickness}mm) is too large for panel "
                    f"({usable.width}x{usable.height})"
                )

        total_used = sum(s.used_area for s in by_thickness.values())
        total_panel_area = sum(s.total_panel_area for s in by_thickness.values())

        project = ProjectSummary(
            by_thickness=by_thickness,
            total_panels=sum(s.panel_count for s in by_thickness.values()),
            total_cost=sum(s.cost for s in by_thickness.values()),
            total_proportional_cost=sum(
                s.proportional_cost for s in by_thickness.values()
            ),
            total_used_area=total_used,
            total_panel_area=total_panel_area,
            overall_usage_percent=_percent(total_used, total_panel_area),
            usable_area=usable,
            stock=self.config.stock,
            warnings=tuple(warnings),
        )

        logger.info(
            "Cut plan: %d panels, %.1f%% overall usage",
            project.total_panels,
            project.overall_usage_percent,
        )
        return project

    def _summarize(
        self,
        thickness: float,
        parts: Sequence[Part],
        result: PackingResult,
    ) -> ThicknessSummary:
        panel_area = result.usable_area.area
        price = self.config.price_for(thickness)
        used_area = result.used_area
        total_panel_area = result.panel_count * panel_area

        proportional_cost = (used_area / panel_area) * price if panel_area > 0 else 0.0

        return ThicknessSummary(
            thickness=thickness,
            panel_count=result.panel_count,
            part_count=sum(max(part.quantity, 0) for part in parts),
            placements=result.placements,
            price_per_panel=price,
            cost=result.panel_count * price,
            proportional_cost=proportional_cost,
            used_area=used_area,
            total_panel_area=total_panel_area,
            usage_percent=_percent(used_area, total_panel_area),
        )


def _percent(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return (part / whole) * 100
