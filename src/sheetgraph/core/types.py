"""
Core type definitions for sheetgraph.

The graph model is deliberately small: nodes keyed by the raw cell value,
edges derived one per valid row, plus the layout and search annotations
that the renderer consumes.
"""

from typing import Any, Dict, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import GraphInvariantError


class Position(BaseModel):
    """Center point of a node in layout coordinates."""
    x: float
    y: float

    model_config = ConfigDict(frozen=True)


class Size(BaseModel):
    """Bounding box of a rendered node label."""
    width: float
    height: float

    model_config = ConfigDict(frozen=True)


class Node(BaseModel):
    """
    A vertex keyed by a user-supplied identifier.

    The display label is the id itself, fixed at creation.
    """
    id: str
    width: float = 0.0
    height: float = 0.0
    position: Optional[Position] = None
    matched: bool = False
    hidden: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def label(self) -> str:
        return self.id

    def __hash__(self):
        return hash(self.id)


class Edge(BaseModel):
    """
    Directed connection between two nodes, one per valid row.
    """
    id: str
    source: str
    target: str
    label: str = ""
    tooltip: str = ""
    hidden: bool = False

    model_config = ConfigDict(frozen=True)

    def __hash__(self):
        return hash(self.id)


class GraphStats(BaseModel):
    """Counts shown next to the canvas."""
    total_nodes: int = 0
    total_edges: int = 0
    visible_nodes: int = 0
    visible_edges: int = 0
    matched_nodes: int = 0


class Graph(BaseModel):
    """
    Immutable-by-reference snapshot of nodes and edges.

    Every stage (build, layout, filter) returns a new Graph instead of
    mutating this one, so a reference captured by one stage is never
    changed underneath it by another.
    """
    nodes: Dict[str, Node] = Field(default_factory=dict)
    edges: List[Edge] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def is_empty(self) -> bool:
        return not self.nodes

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def iter_nodes(self) -> Iterator[Node]:
        return iter(self.nodes.values())

    def iter_edges(self) -> Iterator[Edge]:
        return iter(self.edges)

    def replace(self, nodes: Optional[List[Node]] = None,
                edges: Optional[List[Edge]] = None) -> "Graph":
        """Return a new Graph with the given nodes and/or edges swapped in."""
        node_map = self.nodes if nodes is None else {n.id: n for n in nodes}
        return Graph(
            nodes=dict(node_map),
            edges=list(self.edges if edges is None else edges),
        )

    def check_invariants(self) -> None:
        """
        Verify that node keys match node ids, edge ids are unique and no
        edge dangles.

        Raises:
            GraphInvariantError: on the first violation found.
        """
        for key, node in self.nodes.items():
            if key != node.id:
                raise GraphInvariantError(f"Node stored under '{key}' has id '{node.id}'")

        seen_edges = set()
        for edge in self.edges:
            if edge.id in seen_edges:
                raise GraphInvariantError(f"Duplicate edge id '{edge.id}'")
            seen_edges.add(edge.id)
            for endpoint in (edge.source, edge.target):
                if endpoint not in self.nodes:
                    raise GraphInvariantError(
                        f"Edge '{edge.id}' references missing node '{endpoint}'"
                    )

    def stats(self) -> GraphStats:
        return GraphStats(
            total_nodes=self.node_count,
            total_edges=self.edge_count,
            visible_nodes=sum(1 for n in self.iter_nodes() if not n.hidden),
            visible_edges=sum(1 for e in self.iter_edges() if not e.hidden),
            matched_nodes=sum(1 for n in self.iter_nodes() if n.matched),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Renderer payload: positions, sizes, flags, labels and tooltips."""
        return {
            "nodes": [node.model_dump() for node in self.iter_nodes()],
            "edges": [edge.model_dump() for edge in self.iter_edges()],
            "stats": self.stats().model_dump(),
        }
