"""
Graph Builder.

Folds validated rows into a deduplicated node set and one edge per row.
Output is a pure function of the input order: same rows in, same node
insertion order, edge order and derived strings out.
"""

import logging
from typing import Dict, Iterable, List

from ..core.types import Edge, Graph, Node
from .validation import ValidRow

logger = logging.getLogger(__name__)

# Spreadsheet cells cannot hold real newlines, so authors type "\n".
ESCAPED_NEWLINE = "\\n"


def derive_tooltip(label: str, link: str) -> str:
    """Prefer the link column, fall back to the label; unescape ``\\n``."""
    return (link or label or "").replace(ESCAPED_NEWLINE, "\n")


def edge_id(source: str, target: str, ordinal: int) -> str:
    return f"e-{source}-{target}-{ordinal}"


class GraphBuilder:
    """
    Incremental builder; ``add_row`` may be called across several sheets.

    The first row that references an id creates its node. Later rows never
    touch an existing node.
    """

    def __init__(self):
        self._nodes: Dict[str, Node] = {}
        self._edges: List[Edge] = []

    def add_row(self, row: ValidRow) -> Edge:
        for node_id in (row.source, row.target):
            if node_id not in self._nodes:
                self._nodes[node_id] = Node(id=node_id)

        edge = Edge(
            id=edge_id(row.source, row.target, len(self._edges) + 1),
            source=row.source,
            target=row.target,
            label=row.label,
            tooltip=derive_tooltip(row.label, row.link),
        )
        self._edges.append(edge)
        return edge

    def build(self) -> Graph:
        graph = Graph(nodes=dict(self._nodes), edges=list(self._edges))
        logger.debug(f"Built graph with {graph.node_count} nodes, {graph.edge_count} edges")
        return graph


def build(rows: Iterable[ValidRow]) -> Graph:
    """Build a Graph from validated rows in file order."""
    builder = GraphBuilder()
    for row in rows:
        builder.add_row(row)
    return builder.build()
