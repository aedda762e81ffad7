"""Merging of command line overrides into a loaded project."""

from typing import Any

from panelcut.application.config.schema import (
    ProjectConfiguration,
    SettingsConfigSchema,
)


def merge_config_with_cli(
    config: ProjectConfiguration,
    *,
    kerf_width: float | None = None,
    discard_margin: float | None = None,
    stock_width: float | None = None,
    stock_height: float | None = None,
) -> ProjectConfiguration:
    """Merge CLI arguments with project settings.

    CLI arguments override the corresponding setting only when they are
    not None. The merged settings are validated again, so an override
    that leaves no usable area raises a pydantic ValidationError.

    Args:
        config: The base ProjectConfiguration to merge with
        kerf_width: Override for settings.kerf_width
        discard_margin: Override for settings.discard_margin
        stock_width: Override for settings.stock.width
        stock_height: Override for settings.stock.height

    Returns:
        A new ProjectConfiguration with merged values

    Example:
        >>> config = load_config(Path("kitchen.json"))
        >>> merge_config_with_cli(config, kerf_width=4.0).settings.kerf_width
        4.0
    """
    settings_data: dict[str, Any] = config.settings.model_dump()

    if kerf_width is not None:
        settings_data["kerf_width"] = kerf_width
    if discard_margin is not None:
        settings_data["discard_margin"] = discard_margin
    if stock_width is not None:
        settings_data["stock"]["width"] = stock_width
    if stock_height is not None:
        settings_data["stock"]["height"] = stock_height

    return ProjectConfiguration(
        schema_version=config.schema_version,
        name=config.name,
        settings=SettingsConfigSchema.model_validate(settings_data),
        parts=config.parts,
    )
