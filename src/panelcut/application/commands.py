"""Application commands (use cases) for cut plan calculation."""

from __future__ import annotations

from dataclasses import dataclass

from panelcut.application.config import (
    ProjectConfiguration,
    config_to_cut_plan,
    config_to_parts,
)
from panelcut.domain import Part
from panelcut.infrastructure.bin_packing import CutPlanService, ProjectSummary


@dataclass(frozen=True)
class CutPlanOutput:
    """Result of the optimize command.

    Attributes:
        name: Project name, if the project file has one.
        parts: Parts list the plan was computed for.
        summary: Aggregated cut plan.
    """

    name: str | None
    parts: tuple[Part, ...]
    summary: ProjectSummary

    @property
    def has_warnings(self) -> bool:
        return bool(self.summary.warnings)


class OptimizeCutPlanCommand:
    """Command to compute the cut plan of a loaded project."""

    def __init__(self, max_workers: int = 1) -> None:
        self.max_workers = max_workers

    def execute(self, config: ProjectConfiguration) -> CutPlanOutput:
        """Execute the cut plan calculation.

        Args:
            config: Validated project configuration.

        Returns:
            CutPlanOutput with the parts list and aggregated summary.
        """
        parts = config_to_parts(config)
        service = CutPlanService(
            config_to_cut_plan(config.settings),
            max_workers=self.max_workers,
        )
        return CutPlanOutput(
            name=config.name,
            parts=tuple(parts),
            summary=service.calculate(parts),
        )
