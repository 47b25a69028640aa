"""In-memory model of a positioned Graphviz diagram.

The flow diagram is assembled as nodes, clusters of edges, free edges and
rank groups, and only then serialized (see :mod:`prismaflow.graph.writer`).
Structural mistakes such as an edge to an undeclared node are rejected
when the model is built rather than surfacing as a broken DOT document.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..core.exceptions import GraphStructureError


@dataclass(frozen=True)
class Node:
    """A box with a pinned position."""
    name: str
    label: str
    pos: Tuple[float, float]
    width: float = 3.5
    height: float = 0.5
    shape: str = "box"
    style: str = "solid"
    color: str = "Black"
    fillcolor: Optional[str] = None
    fontname: Optional[str] = None
    fontsize: Optional[int] = None
    tooltip: str = ""
    # Logical name used for hyperlinks; None for pure routing anchors.
    box: Optional[str] = None


@dataclass(frozen=True)
class EdgeStyle:
    color: str = "Black"
    arrowhead: str = "normal"
    arrowtail: str = "none"
    style: Optional[str] = None
    constraint: Optional[bool] = None


INVISIBLE = EdgeStyle(style="invis")


@dataclass(frozen=True)
class Edge:
    tail: str
    head: str
    style: EdgeStyle = EdgeStyle()


@dataclass
class Cluster:
    name: str
    edges: List[Edge] = field(default_factory=list)


@dataclass(frozen=True)
class RankGroup:
    """Nodes forced onto the same visual row."""
    members: Tuple[str, ...]


@dataclass
class FlowGraph:
    """Ordered collection of nodes, clusters, edges and rank groups."""

    name: str = "TD"
    attributes: Dict[str, str] = field(default_factory=dict)
    nodes: List[Node] = field(default_factory=list)
    clusters: List[Cluster] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    ranks: List[RankGroup] = field(default_factory=list)

    def add_node(self, node: Node) -> Node:
        if self.has_node(node.name):
            raise GraphStructureError(f"Node '{node.name}' declared twice")
        self.nodes.append(node)
        return node

    def has_node(self, name: str) -> bool:
        return any(n.name == name for n in self.nodes)

    def node(self, name: str) -> Node:
        for n in self.nodes:
            if n.name == name:
                return n
        raise KeyError(name)

    def node_names(self) -> List[str]:
        return [n.name for n in self.nodes]

    def _check_edge(self, edge: Edge) -> Edge:
        for endpoint in (edge.tail, edge.head):
            if not self.has_node(endpoint):
                raise GraphStructureError(
                    f"Edge {edge.tail}->{edge.head} references undeclared node '{endpoint}'"
                )
        return edge

    def add_cluster(self, name: str, edges: List[Edge]) -> Cluster:
        if not name.startswith("cluster"):
            raise GraphStructureError(f"Cluster name must start with 'cluster': {name}")
        if any(c.name == name for c in self.clusters):
            raise GraphStructureError(f"Cluster '{name}' declared twice")
        cluster = Cluster(name=name, edges=[self._check_edge(e) for e in edges])
        self.clusters.append(cluster)
        return cluster

    def add_edge(self, edge: Edge) -> Edge:
        self.edges.append(self._check_edge(edge))
        return edge

    def add_rank(self, *members: str) -> RankGroup:
        for name in members:
            if not self.has_node(name):
                raise GraphStructureError(f"Rank group references undeclared node '{name}'")
        group = RankGroup(members=tuple(members))
        self.ranks.append(group)
        return group

    def all_edges(self) -> List[Edge]:
        edges: List[Edge] = []
        for cluster in self.clusters:
            edges.extend(cluster.edges)
        edges.extend(self.edges)
        return edges

    def element_ids(self) -> Dict[str, str]:
        """Map each node's logical name to the id the SVG renderer generates.

        Graphviz numbers node groups ``node1``, ``node2``, ... in declaration
        order, so the mapping follows directly from the node list.
        """
        return {
            (n.box or n.name): f"node{index}"
            for index, n in enumerate(self.nodes, start=1)
        }
