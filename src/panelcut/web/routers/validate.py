"""Project validation endpoints."""

from fastapi import APIRouter

from panelcut.application.config import (
    ConfigError,
    ValidationResult,
    load_config_from_dict,
    validate_config,
)
from panelcut.web.schemas.requests import ConfigValidateRequest
from panelcut.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_project(
    request: ConfigValidateRequest,
) -> ValidationResultSchema:
    """Validate a project without computing the cut plan.

    Schema errors are reported as ``errors`` rather than an error status.
    """
    try:
        config = load_config_from_dict(request.config)
    except ConfigError as e:
        result = ValidationResult.from_config_error(e)
    else:
        result = validate_config(config)

    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[
            {"message": w.message, "path": w.path, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    )
