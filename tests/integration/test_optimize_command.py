"""Integration tests for the optimize CLI command.

These tests run the command end-to-end against project files written to
a temporary directory and check output formats, overrides and exit codes.
"""

import json
import re
from pathlib import Path
from typing import Any, Callable

import pytest
from typer.testing import CliRunner

from panelcut.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def project_file(
    kitchen_project: dict[str, Any], write_project: Callable[..., Path]
) -> Path:
    return write_project(kitchen_project)


@pytest.fixture
def oversized_project_file(
    kitchen_project: dict[str, Any], write_project: Callable[..., Path]
) -> Path:
    kitchen_project["parts"].append(
        {
            "module_name": "Island",
            "part_name": "Worktop",
            "width": 3000,
            "height": 600,
            "thickness": 18,
        }
    )
    return write_project(kitchen_project, "oversized.json")


class TestOptimizeSummary:
    """Tests for the default summary output."""

    def test_summary_output(self, runner: CliRunner, project_file: Path) -> None:
        result = runner.invoke(app, ["optimize", str(project_file)])

        assert result.exit_code == 0, result.output
        assert "Project: Kitchen" in result.output
        assert "CUT PLAN SUMMARY" in result.output
        assert "Total Panels: 2" in result.output
        assert "Total Cost: 75.00" in result.output

    def test_oversized_part_warns_but_succeeds(
        self, runner: CliRunner, oversized_project_file: Path
    ) -> None:
        result = runner.invoke(app, ["optimize", str(oversized_project_file)])

        assert result.exit_code == 0
        assert "Warnings: 1" in result.output
        assert "'Worktop'" in result.output

    def test_strict_mode_exit_code(
        self, runner: CliRunner, oversized_project_file: Path
    ) -> None:
        result = runner.invoke(
            app, ["optimize", str(oversized_project_file), "--strict"]
        )

        assert result.exit_code == 2

    def test_strict_mode_without_warnings(
        self, runner: CliRunner, project_file: Path
    ) -> None:
        result = runner.invoke(app, ["optimize", str(project_file), "--strict"])

        assert result.exit_code == 0


class TestOptimizeFormats:
    """Tests for the alternative output formats."""

    def test_json_to_stdout(self, runner: CliRunner, project_file: Path) -> None:
        result = runner.invoke(app, ["optimize", str(project_file), "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total_panels"] == 2
        assert list(data["by_thickness"]) == ["18", "3"]

    def test_json_to_file(
        self, runner: CliRunner, project_file: Path, tmp_path: Path
    ) -> None:
        output = tmp_path / "plan.json"

        result = runner.invoke(
            app,
            ["optimize", str(project_file), "--format", "json", "--output", str(output)],
        )

        assert result.exit_code == 0
        assert "Cut plan written to" in result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["by_thickness"]["18"]["part_count"] == 3
        assert data["total_cost"] == 75.0

    def test_diagram(self, runner: CliRunner, project_file: Path) -> None:
        result = runner.invoke(app, ["optimize", str(project_file), "-f", "diagram"])

        assert result.exit_code == 0
        assert "Panel 1 of 1 - 18.0mm - 3 pieces" in result.output
        assert "SUMMARY: 2 panels" in result.output

    def test_diagram_reports_warnings(
        self, runner: CliRunner, oversized_project_file: Path
    ) -> None:
        result = runner.invoke(
            app, ["optimize", str(oversized_project_file), "-f", "diagram"]
        )

        assert result.exit_code == 0
        assert "Warning: Part 'Worktop'" in result.output

    def test_parts_list(self, runner: CliRunner, project_file: Path) -> None:
        result = runner.invoke(app, ["optimize", str(project_file), "-f", "parts"])

        assert result.exit_code == 0
        assert "PARTS LIST" in result.output
        assert "Shelf" in result.output

    def test_svg_files(
        self, runner: CliRunner, project_file: Path, tmp_path: Path
    ) -> None:
        output_dir = tmp_path / "diagrams"

        result = runner.invoke(
            app,
            ["optimize", str(project_file), "-f", "svg", "--output-dir", str(output_dir)],
        )

        assert result.exit_code == 0
        assert "Exported 2 diagram(s)" in result.output
        first = output_dir / "kitchen_18mm_panel1.svg"
        assert first.exists()
        assert (output_dir / "kitchen_3mm_panel1.svg").exists()
        assert first.read_text(encoding="utf-8").startswith("<svg")

    def test_svg_requires_output_dir(
        self, runner: CliRunner, project_file: Path
    ) -> None:
        result = runner.invoke(app, ["optimize", str(project_file), "-f", "svg"])

        assert result.exit_code == 1
        assert "--output-dir is required" in result.output

    def test_unknown_format(self, runner: CliRunner, project_file: Path) -> None:
        result = runner.invoke(app, ["optimize", str(project_file), "-f", "pdf"])

        assert result.exit_code == 1
        assert "Unknown format: pdf" in result.output


class TestOptimizeOverrides:
    """Tests for CLI overrides of project settings."""

    @pytest.fixture
    def two_tall_pieces(self, write_project: Callable[..., Path]) -> Path:
        return write_project(
            {
                "parts": [
                    {
                        "part_name": "Tall side",
                        "quantity": 2,
                        "width": 1000,
                        "height": 1700,
                        "thickness": 18,
                    }
                ]
            },
            "tall.json",
        )

    def _placements(self, output: Path) -> list[dict[str, Any]]:
        data = json.loads(output.read_text(encoding="utf-8"))
        return data["by_thickness"]["18"]["placements"]

    def test_kerf_override(
        self, runner: CliRunner, two_tall_pieces: Path, tmp_path: Path
    ) -> None:
        output = tmp_path / "plan.json"

        result = runner.invoke(
            app,
            [
                "optimize",
                str(two_tall_pieces),
                "-f",
                "json",
                "-o",
                str(output),
                "--kerf",
                "5",
            ],
        )

        assert result.exit_code == 0
        assert self._placements(output)[1]["x"] == 1005

    def test_stock_override(
        self, runner: CliRunner, two_tall_pieces: Path, tmp_path: Path
    ) -> None:
        output = tmp_path / "plan.json"

        result = runner.invoke(
            app,
            [
                "optimize",
                str(two_tall_pieces),
                "-f",
                "json",
                "-o",
                str(output),
                "--stock-width",
                "1500",
            ],
        )

        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["total_panels"] == 2
        assert data["usable_dimensions"]["width"] == 1470

    def test_invalid_margin_override(
        self, runner: CliRunner, project_file: Path
    ) -> None:
        result = runner.invoke(
            app, ["optimize", str(project_file), "--margin", "1000"]
        )

        assert result.exit_code == 1
        assert "Errors:" in result.output
        assert "leaves no usable area" in result.output

    def test_workers_give_same_plan(
        self, runner: CliRunner, project_file: Path
    ) -> None:
        sequential = runner.invoke(app, ["optimize", str(project_file), "-f", "json"])
        parallel = runner.invoke(
            app, ["optimize", str(project_file), "-f", "json", "--workers", "4"]
        )

        assert parallel.exit_code == 0
        assert json.loads(parallel.stdout) == json.loads(sequential.stdout)

    def test_workers_help_describes_threads(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["optimize", "--help"], env={"COLUMNS": "200"})
        text = re.sub(r"\x1b\[[0-9;]*m", "", result.output)

        assert result.exit_code == 0
        assert "--workers" in text
        assert "Worker threads" in text

    def test_zero_workers_rejected(self, runner: CliRunner, project_file: Path) -> None:
        result = runner.invoke(app, ["optimize", str(project_file), "--workers", "0"])

        assert result.exit_code == 2


class TestOptimizeErrors:
    """Tests for project loading errors."""

    def test_file_not_found(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["optimize", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_json(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        result = runner.invoke(app, ["optimize", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output

    def test_validation_error(
        self,
        runner: CliRunner,
        kitchen_project: dict[str, Any],
        write_project: Callable[..., Path],
    ) -> None:
        kitchen_project["parts"][0]["quantity"] = 0

        result = runner.invoke(app, ["optimize", str(write_project(kitchen_project))])

        assert result.exit_code == 1
        assert "parts[0].quantity" in result.output
