"""Pytest configuration and shared fixtures for panel cut plan tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from panelcut.domain import Part, Piece, UsableArea


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Domain factories
# =============================================================================


@pytest.fixture
def make_piece() -> Callable[..., Piece]:
    """Factory for pieces with sensible defaults."""

    def _make(
        width: float,
        height: float,
        part_name: str = "Part",
        module_name: str = "Module",
        thickness: float = 18.0,
    ) -> Piece:
        return Piece(
            module_name=module_name,
            part_name=part_name,
            width=width,
            height=height,
            thickness=thickness,
        )

    return _make


@pytest.fixture
def make_part() -> Callable[..., Part]:
    """Factory for parts list lines with sensible defaults."""

    def _make(
        width: float,
        height: float,
        quantity: int = 1,
        part_name: str = "Part",
        module_name: str = "Module",
        thickness: float = 18.0,
    ) -> Part:
        return Part(
            module_name=module_name,
            part_name=part_name,
            quantity=quantity,
            width=width,
            height=height,
            thickness=thickness,
        )

    return _make


@pytest.fixture
def default_usable_area() -> UsableArea:
    """Usable area of a 2600x1830 panel with a 15mm margin (2570x1800)."""
    return UsableArea.from_stock(2600, 1830, 15)


# =============================================================================
# Project files
# =============================================================================


@pytest.fixture
def kitchen_project() -> dict[str, Any]:
    """A small two-thickness project as it would appear in a JSON file."""
    return {
        "schema_version": "1.0",
        "name": "Kitchen",
        "settings": {
            "stock": {"width": 2600, "height": 1830},
            "discard_margin": 15,
            "kerf_width": 3,
            "panel_prices": {"18": 60.0, "3": 15.0},
        },
        "parts": [
            {
                "module_name": "Base 600",
                "part_name": "Side",
                "quantity": 2,
                "width": 720,
                "height": 560,
                "thickness": 18,
            },
            {
                "module_name": "Base 600",
                "part_name": "Shelf",
                "quantity": 1,
                "width": 564,
                "height": 540,
                "thickness": 18,
            },
            {
                "module_name": "Base 600",
                "part_name": "Back",
                "quantity": 1,
                "width": 720,
                "height": 600,
                "thickness": 3,
            },
        ],
    }


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[..., Path]:
    """Write project data to a JSON file in a temporary directory."""

    def _write(data: dict[str, Any], name: str = "project.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
