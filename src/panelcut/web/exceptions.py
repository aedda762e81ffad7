"""Error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from panelcut.application.config import ConfigError
from panelcut.web.schemas.responses import ErrorResponseSchema


def _json_safe(details: list[dict]) -> list[dict]:
    return [
        {key: value for key, value in detail.items() if key != "value"}
        for detail in details
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        body = ErrorResponseSchema(
            error="Project validation failed",
            error_type=exc.error_type,
            details=_json_safe(exc.details),
        )
        return JSONResponse(status_code=422, content=body.model_dump())
