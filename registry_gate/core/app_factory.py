"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build isolated instances.
"""

from __future__ import annotations

from fastapi import FastAPI

from registry_gate import __version__
from registry_gate.api.routes import documents_router, health_router
from registry_gate.core.config import settings
from registry_gate.core.exception_handlers import setup_exception_handlers
from registry_gate.core.logging import configure_logging
from registry_gate.core.middleware import request_id_middleware


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Registry Gate",
        description=(
            "Submits documents to the registry's create-document endpoint "
            "without exceeding the configured number of requests per time "
            "window. Excess requests wait for admission instead of failing."
        ),
        version=__version__,
        debug=settings.app.debug,
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(documents_router, prefix="/v1")
    app.include_router(health_router)

    return app
