"""PRISMA 2020 flow diagrams for systematic reviews.

The diagram shows how many records were identified, removed before
screening, screened, sought, assessed and finally included, with optional
columns for studies carried over from a previous version of the review and
for studies found via other methods (websites, organisations, citation
searching). Diagrams can be exported as DOT, SVG, PDF, PNG or an
interactive HTML page with tooltips and hyperlinked boxes.
"""

from .builder import build, build_flow_graph
from .diagram import FlowDiagram, prisma_flowdiagram
from .export import export_diagram, prisma_pdf, prisma_png

__all__ = [
    "build",
    "build_flow_graph",
    "FlowDiagram",
    "prisma_flowdiagram",
    "export_diagram",
    "prisma_pdf",
    "prisma_png",
]
