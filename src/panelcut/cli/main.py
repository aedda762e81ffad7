"""Typer CLI for panel cut plan optimization."""

import logging
import re
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError as PydanticValidationError

from panelcut.application import CutPlanOutput, OptimizeCutPlanCommand
from panelcut.application.config import (
    ConfigError,
    load_config,
    merge_config_with_cli,
)
from panelcut.cli.commands import display_load_error, validate_command
from panelcut.infrastructure import (
    CutDiagramRenderer,
    JsonExporter,
    PartsListFormatter,
)

OUTPUT_FORMATS = ("summary", "diagram", "svg", "json", "parts")


def _slug(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9]+", "_", name).strip("_").lower() or "project"


def _write_svg_files(output: CutPlanOutput, output_dir: Path) -> list[Path]:
    """Write one SVG per panel and return the written paths."""
    output_dir.mkdir(parents=True, exist_ok=True)
    renderer = CutDiagramRenderer()
    prefix = _slug(output.name or "project")
    summary = output.summary

    files: list[Path] = []
    for group in summary.by_thickness.values():
        for index in range(group.panel_count):
            path = output_dir / f"{prefix}_{group.thickness:g}mm_panel{index + 1}.svg"
            path.write_text(
                renderer.render_svg(group, index, summary.stock), encoding="utf-8"
            )
            files.append(path)
    return files


app = typer.Typer(
    name="panelcut",
    help="Compute optimized cutting plans for sheet stock panels.",
)

app.command(name="validate")(validate_command)


@app.command()
def optimize(
    project_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON project file"),
    ],
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format: summary, diagram, svg, json, parts",
        ),
    ] = "summary",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write json output to this file"),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", help="Output directory for svg diagrams"),
    ] = None,
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", help="Saw kerf width in mm"),
    ] = None,
    margin: Annotated[
        float | None,
        typer.Option("--margin", help="Discard margin per panel side in mm"),
    ] = None,
    stock_width: Annotated[
        float | None,
        typer.Option("--stock-width", help="Stock panel width in mm"),
    ] = None,
    stock_height: Annotated[
        float | None,
        typer.Option("--stock-height", help="Stock panel height in mm"),
    ] = None,
    workers: Annotated[
        int,
        typer.Option(
            "--workers",
            min=1,
            help=(
                "Worker threads packing thickness groups. The packer is pure "
                "Python, so threads overlap groups but do not add CPU speed; "
                "the plan is identical for any value"
            ),
        ),
    ] = 1,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with code 2 when a part does not fit"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Compute the cut plan for a project file.

    CLI options override the settings in the project file.

    Examples:
        panelcut optimize kitchen.json
        panelcut optimize kitchen.json --kerf 4 --format diagram
        panelcut optimize kitchen.json --format json --output plan.json
        panelcut optimize kitchen.json --format svg --output-dir ./diagrams
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    output_format = output_format.lower()
    if output_format not in OUTPUT_FORMATS:
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo(f"Available formats: {', '.join(OUTPUT_FORMATS)}", err=True)
        raise typer.Exit(code=1)

    if output_format == "svg" and output_dir is None:
        typer.echo("Error: --output-dir is required for svg format", err=True)
        raise typer.Exit(code=1)

    try:
        config = load_config(project_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    try:
        config = merge_config_with_cli(
            config,
            kerf_width=kerf,
            discard_margin=margin,
            stock_width=stock_width,
            stock_height=stock_height,
        )
    except PydanticValidationError as e:
        typer.echo("Errors:", err=True)
        for err in e.errors():
            location = ".".join(str(segment) for segment in err["loc"]) or "settings"
            typer.echo(f"  {location}: {err['msg']}", err=True)
        raise typer.Exit(code=1)

    result = OptimizeCutPlanCommand(max_workers=workers).execute(config)
    summary = result.summary

    if output_format == "json":
        content = JsonExporter().export(summary)
        if output_file is not None:
            output_file.write_text(content, encoding="utf-8")
            typer.echo(f"Cut plan written to {output_file}")
        else:
            typer.echo(content)
    elif output_format == "svg":
        files = _write_svg_files(result, output_dir)
        typer.echo(f"\nExported {len(files)} diagram(s):")
        for path in files:
            typer.echo(f"  {path}")
    elif output_format == "parts":
        typer.echo(PartsListFormatter().format(list(result.parts)))
    elif output_format == "diagram":
        typer.echo(CutDiagramRenderer().render_all_ascii(summary))
    else:
        if result.name:
            typer.echo(f"Project: {result.name}")
            typer.echo()
        typer.echo(CutDiagramRenderer().render_summary(summary))

    # The summary format already lists warnings
    if output_format != "summary":
        for warning in summary.warnings:
            typer.echo(f"Warning: {warning}", err=True)

    if strict and result.has_warnings:
        raise typer.Exit(code=2)


if __name__ == "__main__":
    app()
