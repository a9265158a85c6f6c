"""
Layered graph drawing.

A compact Sugiyama-style layout built on networkx:

1. Break cycles by reversing DFS back edges.
2. Rank nodes by longest path from the sources.
3. Order nodes inside each rank with barycenter sweeps.
4. Assign coordinates from node sizes and the separation constants.

Any engine satisfying ``LayeredLayoutEngine`` can replace it.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Protocol, Sequence, Tuple

import networkx as nx

from ..config import NODE_SEPARATION, RANK_DIRECTION, RANK_SEPARATION
from ..core.types import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeBox:
    id: str
    width: float
    height: float


@dataclass(frozen=True)
class LayoutConfig:
    rank_direction: str = RANK_DIRECTION
    node_separation: float = NODE_SEPARATION
    rank_separation: float = RANK_SEPARATION

    @property
    def horizontal(self) -> bool:
        return self.rank_direction.upper() in ("LR", "RL")


class LayeredLayoutEngine(Protocol):
    """Assigns a center position to every node."""

    def layout(
        self,
        nodes: Sequence[NodeBox],
        edges: Sequence[Tuple[str, str]],
        config: LayoutConfig,
    ) -> Dict[str, Position]:
        ...


class SugiyamaLayout:
    """Default engine. Accepts isolated nodes, self loops and parallel edges."""

    def __init__(self, sweeps: int = 4):
        self.sweeps = sweeps

    def layout(
        self,
        nodes: Sequence[NodeBox],
        edges: Sequence[Tuple[str, str]],
        config: LayoutConfig,
    ) -> Dict[str, Position]:
        if not nodes:
            return {}

        g = nx.DiGraph()
        g.add_nodes_from(box.id for box in nodes)
        g.add_edges_from((u, v) for u, v in edges if u != v)

        dag = self._make_acyclic(g)
        ranks = self._assign_ranks(dag)
        layers = self._order_layers(dag, ranks)
        boxes = {box.id: box for box in nodes}

        logger.debug(f"Layered {len(nodes)} nodes into {len(layers)} ranks")
        return self._assign_coordinates(layers, boxes, config)

    @staticmethod
    def _make_acyclic(g: nx.DiGraph) -> nx.DiGraph:
        """
        Reverse every DFS back edge.

        Tree, forward and cross edges all point from a later to an earlier
        finish time; a reversed back edge does too, so one pass suffices.
        """
        on_stack = set()
        back_edges: List[Tuple[str, str]] = []
        for u, v, kind in nx.dfs_labeled_edges(g):
            if kind == "forward":
                on_stack.add(v)
            elif kind == "reverse":
                on_stack.discard(v)
            elif kind == "nontree" and v in on_stack:
                back_edges.append((u, v))

        dag = g.copy()
        for u, v in back_edges:
            dag.remove_edge(u, v)
            dag.add_edge(v, u)
        return dag

    @staticmethod
    def _assign_ranks(dag: nx.DiGraph) -> Dict[str, int]:
        ranks: Dict[str, int] = {}
        for node in nx.topological_sort(dag):
            ranks[node] = max((ranks[p] + 1 for p in dag.predecessors(node)), default=0)
        return ranks

    def _order_layers(self, dag: nx.DiGraph, ranks: Dict[str, int]) -> List[List[str]]:
        depth = max(ranks.values()) + 1
        layers: List[List[str]] = [[] for _ in range(depth)]
        for node in dag.nodes:
            layers[ranks[node]].append(node)

        index = {node: i for layer in layers for i, node in enumerate(layer)}
        for _ in range(self.sweeps):
            for r in range(1, depth):
                layers[r] = self._by_barycenter(layers[r], index, dag.predecessors)
            for r in range(depth - 2, -1, -1):
                layers[r] = self._by_barycenter(layers[r], index, dag.successors)
        return layers

    @staticmethod
    def _by_barycenter(layer: List[str], index: Dict[str, int], neighbors) -> List[str]:
        """Reorder one layer and refresh ``index`` for its nodes."""
        keyed = []
        for i, node in enumerate(layer):
            positions = [index[n] for n in neighbors(node)]
            bary = sum(positions) / len(positions) if positions else float(i)
            keyed.append((bary, i, node))
        keyed.sort()

        ordered = [node for _, _, node in keyed]
        for i, node in enumerate(ordered):
            index[node] = i
        return ordered

    @staticmethod
    def _assign_coordinates(
        layers: List[List[str]],
        boxes: Dict[str, NodeBox],
        config: LayoutConfig,
    ) -> Dict[str, Position]:
        horizontal = config.horizontal

        def along(box: NodeBox) -> float:
            return box.width if horizontal else box.height

        def across(box: NodeBox) -> float:
            return box.height if horizontal else box.width

        positions: Dict[str, Tuple[float, float]] = {}
        offset = 0.0
        for layer in layers:
            thickness = max(along(boxes[n]) for n in layer)
            primary = offset + thickness / 2

            span = sum(across(boxes[n]) for n in layer) + config.node_separation * (len(layer) - 1)
            cursor = -span / 2
            for node in layer:
                extent = across(boxes[node])
                positions[node] = (primary, cursor + extent / 2)
                cursor += extent + config.node_separation

            offset += thickness + config.rank_separation

        # Shift so the top-left corner of the drawing sits at the origin.
        min_secondary = min(s - across(boxes[n]) / 2 for n, (_, s) in positions.items())
        result: Dict[str, Position] = {}
        for node, (p, s) in positions.items():
            s -= min_secondary
            if config.rank_direction.upper() in ("RL", "BT"):
                p = offset - config.rank_separation - p
            x, y = (p, s) if horizontal else (s, p)
            result[node] = Position(x=x, y=y)
        return result
