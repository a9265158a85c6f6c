"""Unit tests for the search filter."""

import pytest

from conftest import valid_rows

from sheetgraph.core.exceptions import GraphInvariantError
from sheetgraph.core.types import Edge, Graph, Node
from sheetgraph.ingest.builder import build
from sheetgraph.search.engine import apply_filter, compute_visibility


def flags(graph):
    nodes = {n.id: (n.matched, n.hidden) for n in graph.iter_nodes()}
    edges = {(e.source, e.target): e.hidden for e in graph.iter_edges()}
    return nodes, edges


@pytest.fixture
def wider():
    """A -knows-> B -> C, D -owns-> E, plus an isolated-by-search F."""
    return build(valid_rows([
        ("A", "B", "knows", "see docs"),
        ("B", "C", "", ""),
        ("D", "E", "owns", "Finance\\nteam"),
        ("F", "E", "", ""),
    ]))


class TestApplyFilter:
    def test_scenario_c_node_match(self, scenario_a):
        result = apply_filter(scenario_a, "b")
        nodes, edges = flags(result)

        assert nodes == {"A": (False, False), "B": (True, False), "C": (False, False)}
        assert not any(edges.values())

    def test_scenario_d_tooltip_match(self, scenario_a):
        result = apply_filter(scenario_a, "docs")
        nodes, edges = flags(result)

        assert nodes == {"A": (False, False), "B": (False, False), "C": (False, True)}
        assert edges == {("A", "B"): False, ("B", "C"): True}

    def test_case_insensitive(self, scenario_a):
        assert flags(apply_filter(scenario_a, "DOCS")) == flags(apply_filter(scenario_a, "docs"))

    def test_label_match_reveals_endpoints_unmatched(self, wider):
        result = apply_filter(wider, "owns")
        visible = {n.id for n in result.iter_nodes() if not n.hidden}

        assert visible == {"D", "E"}
        assert not any(n.matched for n in result.iter_nodes())

    def test_tooltip_match_spans_newlines(self, wider):
        result = apply_filter(wider, "finance")
        assert {n.id for n in result.iter_nodes() if not n.hidden} == {"D", "E"}

    def test_one_hop_only(self):
        chain = build(valid_rows([("X", "Y"), ("Y", "Z")]))
        result = apply_filter(chain, "x")
        visible = {n.id for n in result.iter_nodes() if not n.hidden}
        # Z is two hops from the match.
        assert visible == {"X", "Y"}
        assert [e.hidden for e in result.edges] == [False, True]

    def test_isolated_match(self):
        g = Graph(nodes={"solo": Node(id="solo"), "x": Node(id="x")})
        result = apply_filter(g, "solo")
        assert flags(result)[0] == {"solo": (True, False), "x": (False, True)}

    def test_no_match_hides_everything(self, wider):
        result = apply_filter(wider, "zzz")
        assert all(n.hidden for n in result.iter_nodes())
        assert all(e.hidden for e in result.iter_edges())

    def test_empty_query_resets(self, wider):
        filtered = apply_filter(wider, "owns")
        reset = apply_filter(filtered, "")

        assert not any(n.hidden or n.matched for n in reset.iter_nodes())
        assert not any(e.hidden for e in reset.iter_edges())

    @pytest.mark.parametrize("query", ["a", "docs", "e", "zzz", ""])
    def test_idempotent(self, wider, query):
        once = apply_filter(wider, query)
        assert apply_filter(once, query) == once

    @pytest.mark.parametrize("query", ["a", "b", "docs", "owns", "f"])
    def test_visibility_invariants(self, wider, query):
        result = apply_filter(wider, query)
        vis = compute_visibility(wider, query)
        q = query.lower()

        for edge in result.iter_edges():
            if not edge.hidden:
                assert not result.nodes[edge.source].hidden
                assert not result.nodes[edge.target].hidden

        for node in result.iter_nodes():
            if node.hidden:
                continue
            justified = node.matched or any(
                node.id in (e.source, e.target)
                and (e.source in vis.matched or e.target in vis.matched
                     or q in e.label.lower() or q in e.tooltip.lower())
                for e in result.iter_edges()
            )
            assert justified

    def test_identities_preserved(self, wider):
        result = apply_filter(wider, "a")
        assert list(result.nodes) == list(wider.nodes)
        assert [e.id for e in result.edges] == [e.id for e in wider.edges]
        assert wider.nodes["C"].hidden is False

    def test_dangling_edge(self):
        g = Graph(nodes={"A": Node(id="A")}, edges=[Edge(id="e", source="A", target="B")])
        with pytest.raises(GraphInvariantError):
            apply_filter(g, "a")
