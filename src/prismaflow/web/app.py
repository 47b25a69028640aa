"""FastAPI web application for PRISMA flow diagrams.

This module defines the FastAPI application, configures Jinja2 templates,
maps flow diagram errors to HTTP 422 and includes the API routes. It also
provides a convenience function to launch the server via Uvicorn.
"""

from __future__ import annotations

from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
import uvicorn

from .routes import router
from ..core.exceptions import FlowDiagramError
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="PRISMA Flow Diagram",
    description="Build PRISMA 2020 flow diagrams for systematic reviews",
    version="0.1.0",
)

# Setup templates
BASE_DIR = Path(__file__).parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

# Include API routes
app.include_router(router)


@app.exception_handler(FlowDiagramError)
async def flow_diagram_error_handler(request: Request, exc: FlowDiagramError) -> JSONResponse:
    logger.warning(f"Rejected {request.url.path}: {exc}", extra={"path": request.url.path, "error": type(exc).__name__})
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    """Upload form for the CSV template."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": "PRISMA Flow Diagram",
        },
    )


def start_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = True) -> None:
    """Start the Uvicorn web server.

    Parameters
    ----------
    host: str
        Host to bind the server to. Defaults to ``0.0.0.0``.
    port: int
        Port to listen on. Defaults to 8000.
    reload: bool
        Whether to enable auto-reload. Useful during development.
    """
    uvicorn.run(
        "prismaflow.web.app:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    start_server()
