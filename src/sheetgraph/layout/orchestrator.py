"""
Layout orchestration.

Adapts a Graph to the layered-layout engine and merges the returned
positions back onto fresh node copies. Edges and search flags pass through
untouched.
"""

import logging
from typing import Optional

from ..config import LayoutSettings
from ..core.exceptions import GraphInvariantError
from ..core.types import Graph
from .layered import LayeredLayoutEngine, LayoutConfig, NodeBox, SugiyamaLayout
from .sizing import NodeSizer

logger = logging.getLogger(__name__)


class LayoutOrchestrator:
    """
    Measures every node, runs the engine and returns a positioned Graph.
    """

    def __init__(
        self,
        engine: Optional[LayeredLayoutEngine] = None,
        sizer: Optional[NodeSizer] = None,
        config: Optional[LayoutConfig] = None,
    ):
        self.engine = engine or SugiyamaLayout()
        self.sizer = sizer or NodeSizer()
        self.config = config or LayoutConfig()

    @classmethod
    def from_settings(cls, settings: LayoutSettings, sizer: Optional[NodeSizer] = None) -> "LayoutOrchestrator":
        return cls(
            sizer=sizer,
            config=LayoutConfig(
                rank_direction=settings.rank_direction,
                node_separation=settings.node_separation,
                rank_separation=settings.rank_separation,
            ),
        )

    def layout(self, graph: Graph) -> Graph:
        """
        Return a copy of ``graph`` with every node sized and positioned.

        An empty graph is returned as-is.

        Raises:
            GraphInvariantError: If the graph has dangling edges, or the
                engine leaves a node without a position.
        """
        if graph.is_empty():
            return graph
        graph.check_invariants()

        sizes = {node.id: self.sizer.measure(node.label) for node in graph.iter_nodes()}
        boxes = [NodeBox(node_id, size.width, size.height) for node_id, size in sizes.items()]
        pairs = [(edge.source, edge.target) for edge in graph.iter_edges()]

        positions = self.engine.layout(boxes, pairs, self.config)

        nodes = []
        for node in graph.iter_nodes():
            if node.id not in positions:
                raise GraphInvariantError(f"Layout engine returned no position for '{node.id}'")
            size = sizes[node.id]
            nodes.append(node.model_copy(update={
                "position": positions[node.id],
                "width": size.width,
                "height": size.height,
            }))

        logger.info(f"Laid out {len(nodes)} nodes and {graph.edge_count} edges")
        return graph.replace(nodes=nodes)


def layout(graph: Graph, orchestrator: Optional[LayoutOrchestrator] = None) -> Graph:
    """Lay out ``graph`` with the default engine and sizer."""
    return (orchestrator or LayoutOrchestrator()).layout(graph)
