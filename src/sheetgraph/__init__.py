"""
Sheetgraph - spreadsheet edge lists as searchable node-link graphs.

Reads rows of (source, target, label, tooltip) from an Excel workbook,
builds a deduplicated graph, lays it out left-to-right and annotates it
for incremental search.

Key Components:
- ingest: Workbook decoding, row validation and graph building
- layout: Node sizing and layered layout
- search: Filter algorithm and debounced evaluation
- session: Owner of the current graph

Usage:
    from sheetgraph import GraphSession

    session = GraphSession()
    session.ingest_workbook(Path("links.xlsx"))
    graph = session.search_now("billing")
"""

__version__ = "0.1.0"

from .core.types import Edge, Graph, GraphStats, Node, Position, Size
from .session import GraphSession

__all__ = [
    "__version__",
    "Node",
    "Edge",
    "Graph",
    "GraphStats",
    "Position",
    "Size",
    "GraphSession",
]
