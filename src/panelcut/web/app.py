"""FastAPI application factory.

``create_app`` builds a cut plan service. Its settings are kept on
``app.state`` so request dependencies can build commands from them.
"""

import logging
from typing import Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from panelcut.web.exceptions import register_exception_handlers
from panelcut.web.routers import optimize_router, validate_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def create_app(
    *,
    max_workers: int = 1,
    cors_origins: Sequence[str] = ("*",),
) -> FastAPI:
    """Create the cut plan API.

    Args:
        max_workers: Thickness groups packed concurrently per request.
        cors_origins: Origins allowed to call the API from a browser.
            Credentials are only allowed for an explicit origin list.

    Returns:
        Configured FastAPI application instance.

    Raises:
        ValueError: If max_workers is less than 1.
    """
    if max_workers < 1:
        raise ValueError("max_workers must be at least 1")

    app = FastAPI(
        title="Panel Cut Plan API",
        description="Computes sheet stock cutting plans from a parts list",
        version="1.0.0",
    )
    app.state.max_workers = max_workers

    origins = list(cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    for router in (optimize_router, validate_router):
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/health")
    async def health_check() -> dict[str, str | int]:
        """Liveness check reporting the packing concurrency."""
        return {"status": "healthy", "max_workers": app.state.max_workers}

    logger.info(
        "Cut plan API ready at %s with %d packing worker(s)",
        API_PREFIX,
        max_workers,
    )
    return app


app = create_app()
