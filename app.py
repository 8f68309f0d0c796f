"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import ServiceConfig, router, set_config


def create_app(config: ServiceConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts an optional config for testing; uses the defaults if omitted.
    """
    if config is None:
        config = ServiceConfig()

    set_config(config)

    app = FastAPI(
        title="Big Integer API",
        description=(
            "Arbitrary-precision signed integer arithmetic over canonical "
            "decimal strings: add, subtract, multiply, truncated divide, "
            "compare, negate and abs."
        ),
        version="0.1.0",
    )
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
