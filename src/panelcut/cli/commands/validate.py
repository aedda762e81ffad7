"""Validate command for checking project files.

The command loads a project without computing the cut plan and reports
schema errors and cut plan advisories such as parts larger than the
usable panel area.
"""

from pathlib import Path
from typing import Annotated

import typer

from panelcut.application.config import (
    ConfigError,
    ProjectConfiguration,
    ValidationError,
    ValidationResult,
    config_to_parts,
    load_config,
    validate_config,
)
from panelcut.domain import expand_and_group


def _error_lines(errors: list[ValidationError]) -> list[str]:
    lines = []
    for error in errors:
        lines.append(f"  {error.path}: {error.message}")
        if error.value is not None:
            lines.append(f"    Value: {error.value!r}")
    return lines


def _load_error_lines(error: ConfigError) -> list[str]:
    if error.error_type == "file_not_found":
        return [f"  File not found: {error.path}"]

    if error.error_type == "json_parse":
        lines = ["  Invalid JSON syntax"]
        lines += [
            f"    Line {d.get('line', '?')}, Column {d.get('column', '?')}: "
            f"{d.get('message', 'Unknown error')}"
            for d in error.details
        ]
        return lines

    if error.error_type == "validation":
        return _error_lines(ValidationResult.from_config_error(error).errors)

    return [f"  {error.message}"]


def display_load_error(error: ConfigError) -> None:
    """Print a project loading error to stderr."""
    typer.echo("Errors:", err=True)
    for line in _load_error_lines(error):
        typer.echo(line, err=True)


def _describe_parts(config: ProjectConfiguration) -> str:
    groups = expand_and_group(config_to_parts(config))
    pieces = sum(len(group) for group in groups.values())
    thicknesses = ", ".join(f"{t:g}mm" for t in groups)
    return f"Parts: {pieces} pieces in {len(groups)} thickness group(s) ({thicknesses})"


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for line in _error_lines(result.errors):
            typer.echo(line, err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Project is valid.")


def validate_command(
    project_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON project file to validate"),
    ],
) -> None:
    """Validate a project file.

    Checks the project file for:
    - JSON syntax errors
    - Schema errors (unknown fields, non-positive sizes, bad prices)
    - Parts larger than the usable panel area
    - Thicknesses without a panel price

    Exit codes:
        0 - Project is valid with no warnings
        1 - Project has errors (cannot be used)
        2 - Project is valid but has warnings

    Example:
        panelcut validate kitchen.json
    """
    typer.echo(f"Validating {project_file}...")
    typer.echo()

    try:
        config = load_config(project_file)
    except ConfigError as e:
        if e.error_type != "validation":
            display_load_error(e)
            typer.echo()
            typer.echo("Validation failed.", err=True)
            raise typer.Exit(code=1)
        result = ValidationResult.from_config_error(e)
    else:
        if config.parts:
            typer.echo(_describe_parts(config))
            typer.echo()
        result = validate_config(config)

    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)
