"""Loading of JSON project files.

A project is read from disk (or received as a dict by the REST API),
parsed and validated against ``ProjectConfiguration``. Every failure is
raised as a single ``ConfigError`` whose ``error_type`` tells callers how
to present it; pydantic errors are flattened into ``details`` entries
addressed by JSON path, e.g. ``parts[2].width``.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from panelcut.application.config.schema import ProjectConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Exception raised for project file errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the project file, None for in-memory projects
        details: Per-problem entries; ``line``/``column``/``message`` for
            JSON errors, ``path``/``message``/``value``/``error_type`` for
            validation errors
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("settings", "kerf_width"))
        'settings.kerf_width'
        >>> _format_json_path(("parts", 2, "width"))
        'parts[2].width'
    """
    segments: list[str] = []
    for segment in loc:
        if not isinstance(segment, int):
            segments.append(str(segment))
        elif segments:
            segments[-1] += f"[{segment}]"
        else:
            segments.append(f"[{segment}]")
    return ".".join(segments)


def _describe(detail: dict[str, Any]) -> str:
    value = detail.get("value")
    line = f"  - {detail['path']}: {detail['message']}"
    # Whole objects are too noisy to echo back
    if value is None or isinstance(value, (dict, list)):
        return line
    return f"{line} (got: {value!r})"


def _validate(data: Any, path: Path | None) -> ProjectConfiguration:
    try:
        project = ProjectConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = [
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
            for err in e.errors()
        ]
        summary = "\n".join(
            ["Project validation failed:", *(_describe(d) for d in details)]
        )
        raise ConfigError(summary, "validation", path, details) from e

    logger.debug(
        "Loaded project %r with %d part lines", project.name, len(project.parts)
    )
    return project


def _read_text(path: Path) -> str:
    if not path.exists():
        raise ConfigError(f"Project file not found: {path}", "file_not_found", path)

    try:
        return path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            f"Permission denied reading project file: {path}",
            "permission_denied",
            path,
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Error reading project file: {path}: {e}", "file_read_error", path
        ) from e


def load_config(path: Path) -> ProjectConfiguration:
    """Load and validate a project from a JSON file.

    Args:
        path: Path to the JSON project file

    Returns:
        A validated ProjectConfiguration instance

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    content = _read_text(path)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in project file: {path} "
            f"(line {e.lineno}, column {e.colno}): {e.msg}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> ProjectConfiguration:
    """Validate a project received as a dictionary, e.g. an API request body.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data, None)
