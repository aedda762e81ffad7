"""Cut plan optimization endpoints."""

from fastapi import APIRouter

from panelcut.application.config import load_config_from_dict
from panelcut.infrastructure import JsonExporter
from panelcut.web.dependencies import OptimizeCommandDep
from panelcut.web.schemas.requests import OptimizeRequest
from panelcut.web.schemas.responses import CutPlanSchema, ErrorResponseSchema

router = APIRouter(prefix="/optimize", tags=["optimize"])


@router.post(
    "",
    response_model=CutPlanSchema,
    responses={422: {"model": ErrorResponseSchema}},
)
async def optimize_cut_plan(
    request: OptimizeRequest,
    command: OptimizeCommandDep,
) -> CutPlanSchema:
    """Compute the cut plan for a project.

    Oversized parts do not fail the request; they are reported in
    ``warnings`` and flagged with an ``error`` on their placement.

    Args:
        request: Request containing the project JSON.
        command: Injected OptimizeCutPlanCommand.

    Returns:
        Cut plan with per-thickness placements and totals.

    Raises:
        ConfigError: If the project fails validation (handled as 422).
    """
    config = load_config_from_dict(request.config)
    output = command.execute(config)
    return CutPlanSchema(name=output.name, **JsonExporter().to_dict(output.summary))
