"""PRISMA 2020 flow diagram generation.

``prisma_flowdiagram`` builds the diagram for one review and returns a
:class:`FlowDiagram` that can be serialized to DOT, rendered to an
interactive HTML widget, or exported to SVG, PDF and PNG.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.models import DiagramOptions, FlowDiagramInput
from ..graph.model import FlowGraph
from ..graph.writer import to_dot
from ..utils.logging import get_logger
from .builder import FlowDiagramBuilder
from .export import export_diagram
from .interactive import NodeLink, axis_label_script, build_node_links, link_script
from .layout import Wings
from .widget import render_widget

logger = get_logger(__name__)


@dataclass
class FlowDiagram:
    """A built flow diagram and everything needed to render it."""

    data: FlowDiagramInput
    options: DiagramOptions
    graph: FlowGraph
    wings: Wings
    _dot: Optional[str] = field(default=None, repr=False)

    @property
    def dot(self) -> str:
        if self._dot is None:
            self._dot = to_dot(self.graph)
        return self._dot

    def element_ids(self) -> Dict[str, str]:
        return self.graph.element_ids()

    def node_links(self) -> List[NodeLink]:
        return build_node_links(self.graph, self.data.urls)

    def decoration_script(self) -> str:
        """Section labels always; hyperlinks only for interactive diagrams."""
        parts = [axis_label_script(self.graph, self.wings, font=self.options.font)]
        if self.options.interactive:
            parts.append(link_script(self.node_links()))
        return "\n".join(part for part in parts if part)

    def to_html(self, title: str = "PRISMA 2020 flow diagram") -> str:
        return render_widget(
            self.dot,
            decorations=self.decoration_script(),
            title=title,
            font=self.options.font,
        )

    def save(self, path: Union[str, Path], fmt: Optional[str] = None) -> Path:
        return export_diagram(self, path, fmt=fmt)


def prisma_flowdiagram(
    data: FlowDiagramInput,
    options: Optional[DiagramOptions] = None,
    **overrides: Any,
) -> FlowDiagram:
    """Build a PRISMA 2020 flow diagram.

    Args:
        data: Counts, box text, tooltips and URLs, e.g. from
            :func:`prismaflow.io.reader.read_prisma_data`.
        options: Rendering options; defaults to :class:`DiagramOptions`.
        **overrides: Individual option overrides such as ``interactive=True``
            or ``previous=False``.

    Returns:
        The built :class:`FlowDiagram`.
    """
    options = options or DiagramOptions()
    if overrides:
        options = DiagramOptions(**{**options.model_dump(), **overrides})
    builder = FlowDiagramBuilder(data, options)
    graph = builder.build()
    logger.debug(
        f"Flow diagram built with {len(graph.nodes)} nodes ({builder.wings.key})",
        extra={"nodes": len(graph.nodes), "wings": builder.wings.key},
    )
    return FlowDiagram(data=data, options=options, graph=graph, wings=builder.wings)
