"""Decoration pass for the rendered HTML widget.

The SVG renderer names node groups ``node1``..``nodeK`` in declaration
order. The mapping from logical box names to those ids is taken from the
graph model, so omitting a wing shifts the ids automatically.
"""

import html
import json
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..graph.model import FlowGraph
from .layout import SECTION_LABELS, Wings, axis_label_positions


@dataclass(frozen=True)
class NodeLink:
    """Generated element id, logical box name and optional target URL."""
    element_id: str
    box: str
    url: Optional[str] = None


def build_node_links(graph: FlowGraph, urls: Dict[str, str]) -> List[NodeLink]:
    """One entry per linkable node (routing anchors excluded), in document order."""
    ids = graph.element_ids()
    links: List[NodeLink] = []
    for node in graph.nodes:
        if node.box is None:
            continue
        url = (urls.get(node.box) or "").strip() or None
        links.append(NodeLink(element_id=ids[node.box], box=node.box, url=url))
    return links


def link_script(links: List[NodeLink]) -> str:
    """JavaScript wrapping each linked node's content in an anchor.

    Expects ``svg`` to be the rendered SVG element. Nodes without a URL are
    left untouched.
    """
    lines: List[str] = []
    for link in links:
        if not link.url:
            continue
        anchor = f'<a href="{html.escape(link.url, quote=True)}" target="_blank">'
        lines.append(
            f"(function (el) {{ if (el) {{ el.innerHTML = {json.dumps(anchor)} + el.innerHTML + \"</a>\"; }} }})"
            f"(svg.getElementById({json.dumps(link.element_id)}));"
        )
    return "\n".join(lines)


def axis_label_script(graph: FlowGraph, wings: Wings, font: str = "Helvetica") -> str:
    """JavaScript appending the rotated section labels to the three section bars."""
    ids = graph.element_ids()
    lines: List[str] = []
    for bar, (x, y) in axis_label_positions(wings).items():
        if bar not in ids:
            continue
        text = (
            f"<text text-anchor='middle' style='transform: rotate(-90deg);' x='{x}' y='{y}' "
            f"font-family='{html.escape(font, quote=True)},sans-Serif' font-size='14.00'>"
            f"{SECTION_LABELS[bar]}</text>"
        )
        lines.append(
            f"(function (el) {{ if (el) {{ el.innerHTML += {json.dumps(text)}; }} }})"
            f"(svg.getElementById({json.dumps(ids[bar])}));"
        )
    return "\n".join(lines)
