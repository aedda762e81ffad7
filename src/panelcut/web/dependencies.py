"""FastAPI dependency injection for cut plan services."""

from typing import Annotated

from fastapi import Depends, Request

from panelcut.application.commands import OptimizeCutPlanCommand


def get_optimize_command(request: Request) -> OptimizeCutPlanCommand:
    """Dependency for OptimizeCutPlanCommand using the app's worker count."""
    return OptimizeCutPlanCommand(max_workers=request.app.state.max_workers)


OptimizeCommandDep = Annotated[OptimizeCutPlanCommand, Depends(get_optimize_command)]
