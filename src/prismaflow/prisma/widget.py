"""Self-contained HTML widget for a flow diagram.

The page lays the DOT document out in the browser with viz.js, then runs
the decoration script (section labels, hyperlinks) against the SVG.
"""

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..config.settings import settings

TEMPLATE_DIR = Path(__file__).parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=True,
)


def render_widget(
    dot: str,
    decorations: str = "",
    title: str = "PRISMA 2020 flow diagram",
    font: str = "Helvetica",
    container_id: str = "prisma-flowdiagram",
    viz_js_url: Optional[str] = None,
) -> str:
    """Render the widget page for ``dot``.

    Args:
        dot: DOT source of the diagram.
        decorations: JavaScript run once the SVG exists; it sees the SVG
            element as ``svg``.
        title: Page title.
        font: Page font family.
        container_id: Id of the element the SVG is inserted into.
        viz_js_url: viz.js build to load; defaults to ``settings.viz_js_url``.
    """
    template = _env.get_template("widget.html")
    return template.render(
        dot=dot,
        decorations=decorations,
        title=title,
        font=font,
        container_id=container_id,
        viz_js_url=viz_js_url or settings.viz_js_url,
    )
