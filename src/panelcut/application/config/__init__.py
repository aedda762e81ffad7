"""Project file schema, loading and validation.

Public API:
    - ProjectConfiguration: Root project model
    - SettingsConfigSchema: Cut plan settings model
    - StockSizeConfigSchema: Stock panel dimensions model
    - PartConfigSchema: Parts list entry model
    - load_config: Load a project from a JSON file
    - load_config_from_dict: Load a project from a dictionary
    - ConfigError: Exception for project file errors
    - merge_config_with_cli: Apply command line overrides
    - config_to_parts / config_to_cut_plan: Convert to domain objects
    - validate_config: Run cut plan advisories

Example:
    >>> from pathlib import Path
    >>> from panelcut.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("kitchen.json"))
    ...     print(f"{len(config.parts)} parts")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from panelcut.application.config.adapter import config_to_cut_plan, config_to_parts
from panelcut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from panelcut.application.config.merger import merge_config_with_cli
from panelcut.application.config.schema import (
    SUPPORTED_VERSIONS,
    PartConfigSchema,
    ProjectConfiguration,
    SettingsConfigSchema,
    StockSizeConfigSchema,
)
from panelcut.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    check_cut_plan_advisories,
    validate_config,
)

__all__ = [
    "ConfigError",
    "PartConfigSchema",
    "ProjectConfiguration",
    "SUPPORTED_VERSIONS",
    "SettingsConfigSchema",
    "StockSizeConfigSchema",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "check_cut_plan_advisories",
    "config_to_cut_plan",
    "config_to_parts",
    "load_config",
    "load_config_from_dict",
    "merge_config_with_cli",
    "validate_config",
]
