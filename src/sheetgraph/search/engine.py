"""
Search filter.

Given a query, a node is *matched* when its label contains the query and
*visible* when it is matched or is an endpoint of an edge that either
touches a matched node or whose label/tooltip contains the query. An edge
is visible when both endpoints are. One pass over nodes, one over edges;
there is no expansion beyond one hop.
"""

from dataclasses import dataclass
from typing import FrozenSet

from ..core.types import Graph


@dataclass(frozen=True)
class Visibility:
    matched: FrozenSet[str]
    visible: FrozenSet[str]


def compute_visibility(graph: Graph, query: str) -> Visibility:
    """Matched and visible node ids for a non-empty query."""
    q = query.lower()
    matched = {node.id for node in graph.iter_nodes() if q in node.label.lower()}
    visible = set(matched)

    for edge in graph.iter_edges():
        hit = q in edge.label.lower() or q in edge.tooltip.lower()
        if hit or edge.source in matched or edge.target in matched:
            visible.add(edge.source)
            visible.add(edge.target)

    return Visibility(matched=frozenset(matched), visible=frozenset(visible))


def clear_filter(graph: Graph) -> Graph:
    """Reset every flag so the whole graph shows again."""
    nodes = [n.model_copy(update={"matched": False, "hidden": False}) for n in graph.iter_nodes()]
    edges = [e.model_copy(update={"hidden": False}) for e in graph.iter_edges()]
    return graph.replace(nodes=nodes, edges=edges)


def apply_filter(graph: Graph, query: str) -> Graph:
    """
    Return a copy of ``graph`` annotated for ``query``.

    Node and edge identities are preserved; only ``matched`` and ``hidden``
    change. The empty query clears all flags.

    Raises:
        GraphInvariantError: If the graph has dangling edges.
    """
    graph.check_invariants()
    if not query:
        return clear_filter(graph)

    vis = compute_visibility(graph, query)
    nodes = [
        n.model_copy(update={"matched": n.id in vis.matched, "hidden": n.id not in vis.visible})
        for n in graph.iter_nodes()
    ]
    edges = [
        e.model_copy(update={"hidden": not (e.source in vis.visible and e.target in vis.visible)})
        for e in graph.iter_edges()
    ]
    return graph.replace(nodes=nodes, edges=edges)
