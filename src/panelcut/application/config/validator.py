"""Validation results and cut plan advisories for project files.

Schema errors are raised by the loader and can be folded into a
``ValidationResult`` with ``ValidationResult.from_config_error``. The
advisory checks here look for projects that load fine but will produce a
degraded cut plan.
"""

from dataclasses import dataclass, field
from typing import Any

from panelcut.application.config.loader import ConfigError
from panelcut.application.config.schema import ProjectConfiguration
from panelcut.domain.value_objects import UsableArea, canonical_thickness


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "parts[0].width")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 valid, 1 errors, 2 valid with warnings."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    @classmethod
    def from_config_error(cls, error: ConfigError) -> "ValidationResult":
        """Turn a project loading failure into blocking errors.

        Schema errors keep their JSON path and offending value, one entry
        per problem. Any other failure becomes a single entry addressed to
        the project root.
        """
        result = cls()
        if error.error_type != "validation":
            return result.add_error(path="$", message=error.message)

        for detail in error.details:
            value = detail.get("value")
            # Whole objects are too noisy to echo back
            if isinstance(value, (dict, list)):
                value = None
            result.add_error(
                path=detail.get("path") or "$",
                message=detail.get("message", "Unknown error"),
                value=value,
            )
        return result

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self


def check_cut_plan_advisories(config: ProjectConfiguration) -> ValidationResult:
    """Check a project for parts and prices that degrade the cut plan.

    Checks:
        - The parts list is not empty.
        - Each part fits the usable area in at least one orientation.
        - When any panel price is set, every used thickness has a price.

    Args:
        config: A loaded project configuration.

    Returns:
        ValidationResult holding warnings only.
    """
    result = ValidationResult()
    settings = config.settings
    usable = UsableArea.from_stock(
        settings.stock.width, settings.stock.height, settings.discard_margin
    )

    if not config.parts:
        result.add_warning(
            path="parts",
            message="Parts list is empty; the cut plan will have no panels",
        )

    for index, part in enumerate(config.parts):
        if not (
            usable.admits(part.width, part.height)
            or usable.admits(part.height, part.width)
        ):
            result.add_warning(
                path=f"parts[{index}]",
                message=(
                    f"Part '{part.part_name}' ({part.width:g}x{part.height:g}mm) "
                    f"is larger than the usable panel area "
                    f"({usable.width:g}x{usable.height:g}mm)"
                ),
                suggestion="Split the part or use larger stock panels",
            )

    priced = {
        canonical_thickness(thickness)
        for thickness, price in settings.panel_prices.items()
        if price > 0
    }
    if priced:
        reported: set[float] = set()
        for index, part in enumerate(config.parts):
            thickness = canonical_thickness(part.thickness)
            if thickness in priced or thickness in reported:
                continue
            reported.add(thickness)
            result.add_warning(
                path=f"parts[{index}].thickness",
                message=f"No panel price configured for {thickness:g}mm panels",
                suggestion=f"Add \"{thickness:g}\" to settings.panel_prices",
            )

    return result


def validate_config(config: ProjectConfiguration) -> ValidationResult:
    """Perform full validation of a loaded project."""
    return check_cut_plan_advisories(config)
