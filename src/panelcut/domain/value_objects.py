"""Value objects for the panel cutting domain.

All measurements are in millimeters. Every value object is a frozen
dataclass; pieces and placements are created once per packing run and
never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass

# Stock thicknesses carried by the default price table (mm)
STOCK_THICKNESSES: tuple[float, ...] = (18.0, 5.5, 3.0)


def canonical_thickness(value: float) -> float:
    """Normalize a thickness to 0.1 mm so equal stock never splits into groups.

    Examples:
        >>> canonical_thickness(18)
        18.0
        >>> canonical_thickness(5.500000001)
        5.5
    """
    return round(float(value), 1)


@dataclass(frozen=True)
class Part:
    """A line of the parts list: one shape required ``quantity`` times.

    Attributes:
        module_name: Name of the furniture module the part belongs to.
        part_name: Name of the part within its module.
        quantity: Number of identical pieces required.
        width: Piece width in mm.
        height: Piece height in mm.
        thickness: Material thickness in mm.
    """

    module_name: str
    part_name: str
    quantity: int
    width: float
    height: float
    thickness: float


@dataclass(frozen=True)
class Piece:
    """A single physical piece to be cut from stock."""

    module_name: str
    part_name: str
    width: float
    height: float
    thickness: float

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def longest_side(self) -> float:
        return max(self.width, self.height)

    @property
    def label(self) -> str:
        return f"{self.module_name} / {self.part_name}"


@dataclass(frozen=True)
class UsableArea:
    """Region of a stock panel available for placement.

    Derived from the stock size minus a discard margin on all four sides.
    Dimensions may be zero or negative when the margin is too large; the
    packer then reports every piece as oversized.
    """

    width: float
    height: float

    @classmethod
    def from_stock(
        cls, stock_width: float, stock_height: float, margin: float
    ) -> UsableArea:
        """Build the usable area of a stock panel with a symmetric margin."""
        return cls(
            width=stock_width - (2 * margin),
            height=stock_height - (2 * margin),
        )

    @property
    def area(self) -> float:
        return max(self.width, 0.0) * max(self.height, 0.0)

    def admits(self, width: float, height: float) -> bool:
        """Check whether a piece of the given orientation fits an empty panel."""
        return width <= self.width and height <= self.height


@dataclass(frozen=True)
class FreeRect:
    """Axis-aligned unused region of a panel, in usable-area coordinates.

    Origin is the top-left corner of the usable area; y grows downward.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def fits(self, width: float, height: float) -> bool:
        """Check whether a ``width x height`` piece fits inside this region."""
        return width <= self.width and height <= self.height

    def contains(self, other: FreeRect) -> bool:
        """Check whether ``other`` lies entirely within this region."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )
