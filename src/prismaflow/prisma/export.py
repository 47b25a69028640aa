"""Export a flow diagram to files.

DOT and HTML are written directly; SVG, PDF and PNG are produced by the
Graphviz executable through the ``graphviz`` package.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

import graphviz

from ..config.settings import settings
from ..core.exceptions import RenderError
from ..utils.logging import get_logger

if TYPE_CHECKING:
    from .diagram import FlowDiagram

logger = get_logger(__name__)

RASTER_FORMATS = ("svg", "pdf", "png")
SUPPORTED_FORMATS = ("html", "dot") + RASTER_FORMATS


def render_bytes(dot: str, fmt: str, engine: Optional[str] = None) -> bytes:
    """Lay out ``dot`` with Graphviz and return the rendered bytes."""
    if fmt not in RASTER_FORMATS:
        raise ValueError(f"Unsupported render format: {fmt}")
    source = graphviz.Source(dot, engine=engine or settings.layout_engine)
    try:
        return source.pipe(format=fmt)
    except graphviz.ExecutableNotFound as e:
        raise RenderError("Graphviz executables not found; install Graphviz to export images") from e
    except graphviz.CalledProcessError as e:
        raise RenderError(f"Graphviz failed to render {fmt}: {e}") from e


def export_diagram(diagram: "FlowDiagram", path: Union[str, Path], fmt: Optional[str] = None) -> Path:
    """Write ``diagram`` to ``path``; the format defaults to the file extension."""
    path = Path(path)
    fmt = (fmt or path.suffix.lstrip(".") or "html").lower()
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported export format '{fmt}' (choose from {', '.join(SUPPORTED_FORMATS)})")
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "dot":
        path.write_text(diagram.dot, encoding="utf-8")
    elif fmt == "html":
        path.write_text(diagram.to_html(), encoding="utf-8")
    else:
        path.write_bytes(render_bytes(diagram.dot, fmt))
    logger.info(f"Flow diagram saved to {path}", extra={"path": str(path), "format": fmt})
    return path


def prisma_pdf(diagram: "FlowDiagram", filename: Union[str, Path] = "prisma.pdf") -> Path:
    return export_diagram(diagram, filename, fmt="pdf")


def prisma_png(diagram: "FlowDiagram", filename: Union[str, Path] = "prisma.png") -> Path:
    return export_diagram(diagram, filename, fmt="png")
