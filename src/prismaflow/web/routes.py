"""API routes for the flow diagram web front-end.

JSON endpoints take ``{"data": {...}, "options": {...}}`` where ``data``
holds the counts, box text, tooltips and URLs of a
:class:`~prismaflow.core.models.FlowDiagramInput` and ``options`` the
rendering parameters of :class:`~prismaflow.core.models.DiagramOptions`.
The upload endpoint accepts the filled-in CSV template instead.
"""

from __future__ import annotations

import io
from dataclasses import asdict
from typing import Any, Dict

import pandas as pd
from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel, Field, ValidationError

from ..core.models import DiagramOptions, FlowDiagramInput
from ..io.reader import read_prisma_data
from ..io.template import template_bytes
from ..prisma.diagram import FlowDiagram, prisma_flowdiagram
from ..utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


class DiagramRequest(BaseModel):
    """Flow diagram data and rendering options."""

    data: Dict[str, Any] = Field(default_factory=dict)
    options: Dict[str, Any] = Field(default_factory=dict)


def _build(data: Dict[str, Any], options: Dict[str, Any]) -> FlowDiagram:
    try:
        diagram_input = FlowDiagramInput.model_validate(data)
        diagram_options = DiagramOptions.model_validate(options)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return prisma_flowdiagram(diagram_input, diagram_options)


@router.get("/api/template")
async def download_template() -> Response:
    """Return the blank CSV template."""
    return Response(
        content=template_bytes(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="PRISMA.csv"'},
    )


@router.post("/api/diagram")
async def create_diagram(request: DiagramRequest) -> Dict[str, Any]:
    """Build a diagram and return its DOT source, element ids and active columns."""
    diagram = _build(request.data, request.options)
    return {
        "dot": diagram.dot,
        "element_ids": diagram.element_ids(),
        "wings": asdict(diagram.wings),
    }


@router.post("/api/diagram/html", response_class=HTMLResponse)
async def create_diagram_html(request: DiagramRequest) -> HTMLResponse:
    """Build a diagram and return the interactive HTML widget."""
    diagram = _build(request.data, request.options)
    return HTMLResponse(diagram.to_html())


@router.post("/api/diagram/upload", response_class=HTMLResponse)
async def upload_template(
    file: UploadFile = File(...),
    interactive: bool = Form(True),
    previous: bool = Form(True),
    other: bool = Form(True),
) -> HTMLResponse:
    """Build a diagram from an uploaded CSV template."""
    contents = await file.read()
    try:
        df = pd.read_csv(io.BytesIO(contents), dtype=str, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise HTTPException(status_code=422, detail=f"Could not read CSV: {e}")
    data = read_prisma_data(df)
    logger.info(f"Template uploaded: {file.filename}")
    diagram = prisma_flowdiagram(
        data,
        DiagramOptions(interactive=interactive, previous=previous, other=other),
    )
    return HTMLResponse(diagram.to_html())
