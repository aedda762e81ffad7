"""Integration tests for the validate CLI command.

These tests verify the validate command works correctly end-to-end,
including:
- Valid project files pass validation
- Invalid project files produce errors
- Cut plan advisories are displayed as warnings
- Exit codes are correct
"""

from pathlib import Path
from typing import Any, Callable

import pytest
from typer.testing import CliRunner

from panelcut.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_project(
        self,
        runner: CliRunner,
        kitchen_project: dict[str, Any],
        write_project: Callable[..., Path],
    ) -> None:
        """A clean project passes with exit code 0."""
        result = runner.invoke(app, ["validate", str(write_project(kitchen_project))])

        assert result.exit_code == 0
        assert "Validating" in result.output
        assert "Validation passed. Project is valid." in result.output

    def test_parts_overview(
        self,
        runner: CliRunner,
        kitchen_project: dict[str, Any],
        write_project: Callable[..., Path],
    ) -> None:
        """Piece count and thickness groups are listed before the verdict."""
        result = runner.invoke(app, ["validate", str(write_project(kitchen_project))])

        assert "Parts: 4 pieces in 2 thickness group(s) (18mm, 3mm)" in result.output

    def test_oversized_part_is_a_warning(
        self,
        runner: CliRunner,
        kitchen_project: dict[str, Any],
        write_project: Callable[..., Path],
    ) -> None:
        """A part larger than the usable area warns with exit code 2."""
        kitchen_project["parts"].append(
            {"part_name": "Worktop", "width": 3000, "height": 600, "thickness": 18}
        )

        result = runner.invoke(app, ["validate", str(write_project(kitchen_project))])

        assert result.exit_code == 2
        assert "Warnings:" in result.output
        assert "parts[3]" in result.output
        assert "Suggestion:" in result.output
        assert "Validation passed with 1 warning(s)" in result.output

    def test_empty_parts_list_is_a_warning(
        self, runner: CliRunner, write_project: Callable[..., Path]
    ) -> None:
        result = runner.invoke(app, ["validate", str(write_project({}))])

        assert result.exit_code == 2
        assert "Parts list is empty" in result.output

    def test_file_not_found(self, runner: CliRunner, tmp_path: Path) -> None:
        """Non-existent file should fail with exit code 1."""
        result = runner.invoke(app, ["validate", str(tmp_path / "nonexistent.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output
        assert "Validation failed" in result.output

    def test_invalid_json_syntax(self, runner: CliRunner, tmp_path: Path) -> None:
        """Invalid JSON should fail with exit code 1."""
        path = tmp_path / "broken.json"
        path.write_text('{"parts": [}', encoding="utf-8")

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Errors:" in result.output
        assert "Line 1" in result.output

    def test_schema_error_shows_path_and_value(
        self,
        runner: CliRunner,
        kitchen_project: dict[str, Any],
        write_project: Callable[..., Path],
    ) -> None:
        kitchen_project["parts"][2]["height"] = -600

        result = runner.invoke(app, ["validate", str(write_project(kitchen_project))])

        assert result.exit_code == 1
        assert "parts[2].height" in result.output
        assert "Value: -600" in result.output

    def test_unknown_field_rejected(
        self,
        runner: CliRunner,
        kitchen_project: dict[str, Any],
        write_project: Callable[..., Path],
    ) -> None:
        """Unknown fields should cause validation failure."""
        kitchen_project["settings"]["blade"] = "fine"

        result = runner.invoke(app, ["validate", str(write_project(kitchen_project))])

        assert result.exit_code == 1
        assert "settings.blade" in result.output

    def test_schema_errors_are_counted(
        self,
        runner: CliRunner,
        kitchen_project: dict[str, Any],
        write_project: Callable[..., Path],
    ) -> None:
        """Every schema problem is listed and counted in the verdict."""
        kitchen_project["parts"][0]["width"] = 0
        kitchen_project["settings"]["kerf_width"] = 50

        result = runner.invoke(app, ["validate", str(write_project(kitchen_project))])

        assert result.exit_code == 1
        assert "parts[0].width" in result.output
        assert "settings.kerf_width" in result.output
        assert "Validation failed: 2 error(s), 0 warning(s)" in result.output
        assert "Parts:" not in result.output
