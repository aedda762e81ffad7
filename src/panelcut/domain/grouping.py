"""Expansion of a parts list into pieces and partitioning by thickness."""

from __future__ import annotations

from typing import Callable, Iterable, Protocol, Sequence, TypeVar

from panelcut.domain.value_objects import Part, Piece, canonical_thickness


class HasThickness(Protocol):
    thickness: float


T = TypeVar("T", bound=HasThickness)


def expand(parts: Iterable[Part]) -> list[Piece]:
    """Expand each part into ``quantity`` individual pieces.

    All copies of a part precede all copies of the next part, so the
    output order mirrors the input order. A quantity of zero or less
    contributes no pieces.

    Args:
        parts: Ordered parts list.

    Returns:
        Flat, ordered list of pieces.
    """
    pieces: list[Piece] = []
    for part in parts:
        for _ in range(part.quantity):
            pieces.append(
                Piece(
                    module_name=part.module_name,
                    part_name=part.part_name,
                    width=part.width,
                    height=part.height,
                    thickness=part.thickness,
                )
            )
    return pieces


def group_by_thickness(
    items: Iterable[T],
    key: Callable[[T], float] | None = None,
) -> dict[float, list[T]]:
    """Stable partition of parts or pieces by material thickness.

    Groups appear in order of first occurrence and each group keeps the
    relative input order of its members.

    Args:
        items: Parts or pieces, anything with a ``thickness`` attribute.
        key: Optional thickness selector. Defaults to the canonical
            (0.1 mm) thickness of each item.

    Returns:
        Mapping from thickness to the items of that thickness.
    """
    selector = key or (lambda item: canonical_thickness(item.thickness))
    groups: dict[float, list[T]] = {}

    for item in items:
        groups.setdefault(selector(item), []).append(item)

    return groups


def expand_and_group(
    parts: Sequence[Part],
    thickness_selector: Callable[[Piece], float] | None = None,
) -> dict[float, list[Piece]]:
    """Expand a parts list and partition the resulting pieces by thickness."""
    return group_by_thickness(expand(parts), key=thickness_selector)
