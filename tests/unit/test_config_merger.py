"""Unit tests for CLI overrides and conversion to domain objects.

These tests verify:
- CLI args override project settings when provided
- CLI args are ignored when None
- Overrides are validated again
- Adapter converts projects to parts and cut plan settings
"""

from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from panelcut.application.config import (
    ProjectConfiguration,
    config_to_cut_plan,
    config_to_parts,
    load_config_from_dict,
    merge_config_with_cli,
)


@pytest.fixture
def base_config(kitchen_project: dict[str, Any]) -> ProjectConfiguration:
    return load_config_from_dict(kitchen_project)


class TestMergeConfigWithCli:
    """Tests for merge_config_with_cli."""

    def test_no_overrides_returns_equivalent_config(
        self, base_config: ProjectConfiguration
    ) -> None:
        merged = merge_config_with_cli(base_config)

        assert merged.settings == base_config.settings
        assert merged.parts == base_config.parts
        assert merged.name == base_config.name

    def test_kerf_override(self, base_config: ProjectConfiguration) -> None:
        merged = merge_config_with_cli(base_config, kerf_width=4.0)

        assert merged.settings.kerf_width == 4.0
        assert base_config.settings.kerf_width == 3.0

    def test_stock_and_margin_overrides(
        self, base_config: ProjectConfiguration
    ) -> None:
        merged = merge_config_with_cli(
            base_config, stock_width=2800, stock_height=2070, discard_margin=10
        )

        assert merged.settings.stock.width == 2800
        assert merged.settings.stock.height == 2070
        assert merged.settings.discard_margin == 10

    def test_prices_survive_merge(self, base_config: ProjectConfiguration) -> None:
        merged = merge_config_with_cli(base_config, kerf_width=2)
        assert merged.settings.panel_prices == {18.0: 60.0, 3.0: 15.0}

    def test_invalid_override_rejected(
        self, base_config: ProjectConfiguration
    ) -> None:
        with pytest.raises(PydanticValidationError):
            merge_config_with_cli(base_config, discard_margin=1000)

        with pytest.raises(PydanticValidationError):
            merge_config_with_cli(base_config, kerf_width=-1)


class TestConfigToParts:
    """Tests for config_to_parts."""

    def test_parts_keep_order_and_fields(
        self, base_config: ProjectConfiguration
    ) -> None:
        parts = config_to_parts(base_config)

        assert [p.part_name for p in parts] == ["Side", "Shelf", "Back"]
        side = parts[0]
        assert side.module_name == "Base 600"
        assert side.quantity == 2
        assert (side.width, side.height, side.thickness) == (720, 560, 18)

    def test_empty_parts(self) -> None:
        assert config_to_parts(ProjectConfiguration()) == []


class TestConfigToCutPlan:
    """Tests for config_to_cut_plan."""

    def test_settings_conversion(self, base_config: ProjectConfiguration) -> None:
        plan = config_to_cut_plan(base_config.settings)

        assert plan.kerf == 3.0
        assert plan.stock.width == 2600
        assert plan.stock.height == 1830
        assert plan.stock.discard_margin == 15
        usable = plan.stock.usable_area
        assert (usable.width, usable.height) == (2570, 1800)

    def test_price_keys_are_canonical(self) -> None:
        config = load_config_from_dict(
            {"settings": {"panel_prices": {"18.00000001": 60, "5.5": 30}}}
        )

        plan = config_to_cut_plan(config.settings)

        assert plan.panel_prices == {18.0: 60.0, 5.5: 30.0}
        assert plan.price_for(18) == 60.0
