"""Conversion of validated project files into domain objects."""

from panelcut.application.config.schema import (
    ProjectConfiguration,
    SettingsConfigSchema,
)
from panelcut.domain.value_objects import Part, canonical_thickness
from panelcut.infrastructure.bin_packing import CutPlanConfig, PanelStockConfig


def config_to_parts(config: ProjectConfiguration) -> list[Part]:
    """Convert the parts list, preserving its order."""
    return [
        Part(
            module_name=part.module_name,
            part_name=part.part_name,
            quantity=part.quantity,
            width=part.width,
            height=part.height,
            thickness=part.thickness,
        )
        for part in config.parts
    ]


def config_to_cut_plan(settings: SettingsConfigSchema) -> CutPlanConfig:
    """Convert Pydantic settings to the CutPlanConfig dataclass.

    Price keys are canonicalized so they match thickness groups.
    """
    stock = PanelStockConfig(
        width=settings.stock.width,
        height=settings.stock.height,
        discard_margin=settings.discard_margin,
    )

    return CutPlanConfig(
        stock=stock,
        kerf=settings.kerf_width,
        panel_prices={
            canonical_thickness(thickness): price
            for thickness, price in settings.panel_prices.items()
        },
    )
