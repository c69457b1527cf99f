"""
Main application module for the polygon clipping backend.

This file sets up the FastAPI application, configures CORS so the
visualisation front end can make cross-origin requests, mounts the
static frontend files when they exist, and exposes a simple health
check endpoint.  The clipping router is included under the ``/api``
namespace.
"""

from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .api.routes_clip import router as clip_router


def create_app() -> FastAPI:
    """Factory to create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    app = FastAPI(title="polyclip")

    # Allow all origins by default.  Restrict this when the API is
    # deployed behind a known front end.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(clip_router, prefix="/api", tags=["clip"])

    # The frontend directory is located two levels up from this file.
    frontend_dir = Path(__file__).resolve().parents[2] / "frontend"
    if frontend_dir.exists():
        app.mount(
            "/",
            StaticFiles(directory=str(frontend_dir), html=True),
            name="frontend",
        )

    return app


# Uvicorn imports this when running `uvicorn polyclip.main:app` from
# within the backend directory.
app = create_app()
