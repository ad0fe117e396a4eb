"""FastAPI application factory.

Routers
-------
All endpoint groups are mounted under their respective path prefix:

    /health    liveness check
    /ai        job-posting fetch, parsing and analysis
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from careercoach import __version__
from careercoach.api.routers import ai as ai_router
from careercoach.api.routers import health as health_router
from careercoach.logging_config import configure_logging


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()

    app = FastAPI(
        title="Career Coach API",
        description=(
            "AI endpoints for the career-coach backend: fetch a job posting, "
            "extract a structured job record from it, and analyse a job "
            "against a candidate resume."
        ),
        version=__version__,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router.router, prefix="/health", tags=["health"])
    app.include_router(ai_router.router, prefix="/ai", tags=["ai"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn careercoach.api.app:app --reload
app = create_app()
