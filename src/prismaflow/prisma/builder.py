"""PRISMA 2020 diagram definition builder.

Turns a :class:`FlowDiagramInput` and :class:`DiagramOptions` into a
:class:`FlowGraph` with the fixed PRISMA topology, then into DOT text.
The topology is one of four variants depending on which wings are drawn
(both, previous only, other only, neither); everything else is presence
checks on individual counts.
"""

from typing import Optional

from ..core.models import DiagramOptions, FlowDiagramInput
from ..graph.model import INVISIBLE, Edge, EdgeStyle, FlowGraph, Node
from ..graph.writer import to_dot
from ..utils.logging import get_logger
from . import labels
from .layout import (
    BOX_HEIGHT,
    BOX_NAMES,
    BOX_WIDTH,
    EXCLUDED_Y,
    SECTION_BAR_COLOUR,
    SECTION_BAR_WIDTH,
    TOOLTIP_INDEX,
    WIDE_BOX_WIDTH,
    Wings,
    excluded_y,
    position,
    resolve_wings,
    section_bars,
)

logger = get_logger(__name__)

GRAPH_ATTRIBUTES = {
    "splines": "ortho",
    "layout": "neato",
    "tooltip": "Click the boxes for further information",
    "outputorder": "edgesfirst",
}


class FlowDiagramBuilder:
    """Assemble the flow diagram graph for one input record.

    Example:
        >>> graph = FlowDiagramBuilder(data, DiagramOptions(previous=False)).build()
        >>> "19" in graph.node_names()
        False
    """

    def __init__(self, data: FlowDiagramInput, options: Optional[DiagramOptions] = None) -> None:
        self.data = data
        self.options = options or DiagramOptions()
        self.wings: Wings = resolve_wings(self.data, self.options)
        self.graph = FlowGraph(name="TD", attributes=dict(GRAPH_ATTRIBUTES))

    # ------------------------------------------------------------------
    # Node helpers
    # ------------------------------------------------------------------
    def _box(
        self,
        name: str,
        label: str,
        color: str,
        style: str = "solid",
        width: float = BOX_WIDTH,
        fillcolor: Optional[str] = None,
        dy: float = 0.0,
    ) -> Node:
        index = TOOLTIP_INDEX.get(name)
        return self.graph.add_node(Node(
            name=name,
            label=label,
            pos=position(name, self.wings, dy),
            width=width,
            height=BOX_HEIGHT,
            style=style,
            color=color,
            fillcolor=fillcolor,
            fontname=self.options.font,
            fontsize=self.options.fontsize,
            tooltip=self.data.tooltip(index) if index else "",
            box=BOX_NAMES.get(name),
        ))

    def _anchor(self, name: str) -> Node:
        return self.graph.add_node(Node(
            name=name,
            label="",
            pos=position(name, self.wings),
            width=0,
            height=0,
            shape="square",
            color="White",
            fontname=self.options.font,
            fontsize=self.options.fontsize,
            box=BOX_NAMES.get(name),
        ))

    def _excluded_shift(self, rows) -> float:
        return excluded_y(labels.exclusion_breaks(rows)) - EXCLUDED_Y

    def _arrow(self, head: Optional[str] = None, tail: Optional[str] = None,
               constraint: Optional[bool] = None) -> EdgeStyle:
        return EdgeStyle(
            color=self.options.arrow_colour,
            arrowhead=self.options.arrow_head if head is None else head,
            arrowtail=self.options.arrow_tail if tail is None else tail,
            constraint=constraint,
        )

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------
    def _add_section_bars(self) -> None:
        for name, (x, y, height) in section_bars(self.wings).items():
            self.graph.add_node(Node(
                name=name,
                label="",
                pos=(x, y),
                width=SECTION_BAR_WIDTH,
                height=height,
                style="rounded,filled",
                color=SECTION_BAR_COLOUR,
                fontname=self.options.font,
                fontsize=self.options.fontsize,
                box=name,
            ))

    def _add_previous_nodes(self) -> None:
        grey = self.options.greybox_colour
        self._box("1", self.data.previous_text, grey, style="rounded,filled")
        self._box("2", labels.previous_label(self.data), grey, style="filled")

    def _add_core_nodes(self) -> None:
        data = self.data
        main = self.options.main_colour
        self._box("3", data.newstud_text, self.options.title_colour,
                  style="rounded,filled", width=WIDE_BOX_WIDTH)
        self._box("4", labels.identified_label(data), main)
        self._box("5", labels.removed_label(data), main)
        self._box("6", labels.count_label(data.records_screened_text, data.records_screened), main)
        self._box("7", labels.count_label(data.records_excluded_text, data.records_excluded), main)
        self._box("8", labels.count_label(data.dbr_sought_reports_text, data.dbr_sought_reports), main)
        self._box("9", labels.count_label(data.dbr_notretrieved_reports_text, data.dbr_notretrieved_reports), main)
        self._box("10", labels.count_label(data.dbr_assessed_text, data.dbr_assessed), main)
        self._box(
            "11",
            labels.exclusion_label(data.dbr_excluded_text, data.dbr_excluded),
            main,
            style="filled",
            fillcolor="White",
            dy=self._excluded_shift(data.dbr_excluded),
        )
        self._box("12", labels.new_included_label(data), main)

    def _add_other_nodes(self) -> None:
        data = self.data
        grey = self.options.greybox_colour
        self._box("13", data.other_text, grey, style="rounded,filled", width=WIDE_BOX_WIDTH)
        self._box("14", labels.other_identified_label(data), grey, style="filled")
        self._box("15", labels.count_label(data.other_sought_reports_text, data.other_sought_reports),
                  grey, style="filled")
        self._box("16", labels.count_label(data.other_notretrieved_reports_text, data.other_notretrieved_reports),
                  grey, style="filled")
        self._box("17", labels.count_label(data.other_assessed_text, data.other_assessed), grey, style="filled")
        self._box(
            "18",
            labels.exclusion_label(data.other_excluded_text, data.other_excluded),
            grey,
            style="filled",
            dy=self._excluded_shift(data.other_excluded),
        )

    def _add_routing_anchor(self) -> None:
        self.graph.add_node(Node(
            name="C",
            label="",
            pos=position("C", self.wings),
            width=BOX_WIDTH,
            height=BOX_HEIGHT,
            shape="square",
            style="invis",
            color="White",
        ))

    # ------------------------------------------------------------------
    # Edges and ranks
    # ------------------------------------------------------------------
    def _add_edges(self) -> None:
        white = EdgeStyle(color="White", arrowhead="none", arrowtail="none")
        arrow = self._arrow()

        if self.wings.previous:
            self.graph.add_cluster("cluster0", [
                Edge("1", "2", white),
                Edge("2", "A", self._arrow(head="none")),
                Edge("A", "19", self._arrow(tail="none", constraint=False)),
            ])

        core = [
            Edge("3", "4", INVISIBLE),
            Edge("3", "5", INVISIBLE),
        ]
        core += [Edge(t, h, arrow) for t, h in (
            ("4", "5"), ("4", "6"), ("6", "7"), ("6", "8"),
            ("8", "9"), ("8", "10"), ("10", "C"), ("10", "12"),
        )]
        core += [Edge(t, h, INVISIBLE) for t, h in (("5", "7"), ("7", "9"), ("9", "11"))]
        if self.wings.other:
            core.append(Edge("16", "18", INVISIBLE))
        self.graph.add_cluster("cluster1", core)

        if self.wings.other:
            self.graph.add_cluster("cluster2", [
                Edge("13", "14", white),
                Edge("14", "15", arrow),
                Edge("15", "16", arrow),
                Edge("15", "17", arrow),
                Edge("17", "18", arrow),
                Edge("17", "B", self._arrow(head="none")),
                Edge("B", "12", self._arrow(tail="none", constraint=False)),
            ])

        if self.wings.previous:
            self.graph.add_edge(Edge("12", "19", arrow))

    def _add_ranks(self) -> None:
        previous, other = self.wings.previous, self.wings.other

        def row(*members: Optional[str]) -> None:
            self.graph.add_rank(*[m for m in members if m])

        if previous:
            row("A", "19")
        row("1" if previous else None, "3", "13" if other else None)
        row("2" if previous else None, "4", "5", "14" if other else None)
        row("6", "7")
        row("8", "9", *(("15", "16") if other else ()))
        row("10", "11", *(("17", "18") if other else ()))
        row("12", "B" if other else None)

    def build(self) -> FlowGraph:
        logger.debug(f"Building flow diagram ({self.wings.key})")
        self._add_section_bars()
        if self.wings.previous:
            self._add_previous_nodes()
        self._add_core_nodes()
        if self.wings.other:
            self._add_other_nodes()
        if self.wings.previous:
            self._box("19", labels.total_included_label(self.data), self.options.greybox_colour, style="filled")
            self._anchor("A")
        if self.wings.other:
            self._anchor("B")
        self._add_routing_anchor()
        self._add_edges()
        self._add_ranks()
        return self.graph


def build_flow_graph(data: FlowDiagramInput, options: Optional[DiagramOptions] = None) -> FlowGraph:
    """Build the diagram model for ``data``."""
    return FlowDiagramBuilder(data, options).build()


def build(data: FlowDiagramInput, options: Optional[DiagramOptions] = None) -> str:
    """Build the DOT document for ``data``."""
    return to_dot(build_flow_graph(data, options))
