"""Serialize a :class:`FlowGraph` to DOT using the ``graphviz`` package."""

from typing import Dict, Optional

import graphviz

from .model import EdgeStyle, FlowGraph, Node


def _num(value: float) -> str:
    return f"{value:g}"


def _escape(text: str) -> graphviz.nohtml:
    """Escape text for a quoted DOT string; newlines become ``\\n`` line breaks."""
    escaped = text.replace("\\", "\\\\").replace("\n", "\\n")
    return graphviz.nohtml(escaped)


def _node_attrs(node: Node) -> Dict[str, str]:
    attrs: Dict[str, str] = {
        "shape": node.shape,
        "style": node.style,
        "color": node.color,
        "width": _num(node.width),
        "height": _num(node.height),
        "pos": f"{_num(node.pos[0])},{_num(node.pos[1])}!",
        "tooltip": _escape(node.tooltip),
    }
    if node.fillcolor is not None:
        attrs["fillcolor"] = node.fillcolor
    if node.fontname is not None:
        attrs["fontname"] = node.fontname
    if node.fontsize is not None:
        attrs["fontsize"] = str(node.fontsize)
    return attrs


def _edge_attrs(style: EdgeStyle) -> Dict[str, str]:
    attrs: Dict[str, str] = {
        "color": style.color,
        "arrowhead": style.arrowhead,
        "arrowtail": style.arrowtail,
    }
    if style.style is not None:
        attrs["style"] = style.style
    if style.constraint is not None:
        attrs["constraint"] = "true" if style.constraint else "false"
    return attrs


def to_digraph(graph: FlowGraph, engine: Optional[str] = None) -> graphviz.Digraph:
    """Build a ``graphviz.Digraph`` mirroring ``graph``.

    Order is significant: nodes are emitted in declaration order so that the
    SVG element ids match :meth:`FlowGraph.element_ids`.
    """
    dot = graphviz.Digraph(name=graph.name, engine=engine)
    if graph.attributes:
        dot.attr("graph", **{k: _escape(v) for k, v in graph.attributes.items()})

    for node in graph.nodes:
        dot.node(node.name, label=_escape(node.label), **_node_attrs(node))

    for cluster in graph.clusters:
        with dot.subgraph(name=cluster.name) as sub:
            for edge in cluster.edges:
                sub.edge(edge.tail, edge.head, **_edge_attrs(edge.style))

    for edge in graph.edges:
        dot.edge(edge.tail, edge.head, **_edge_attrs(edge.style))

    for group in graph.ranks:
        with dot.subgraph() as rank:
            rank.attr(rank="same")
            for member in group.members:
                rank.node(member)

    return dot


def to_dot(graph: FlowGraph) -> str:
    """Return the DOT source for ``graph``."""
    return to_digraph(graph).source
