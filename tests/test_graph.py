"""Tests for mermaid_sankey.ir.graph — FlowGraph construction and node totals."""

from mermaid_sankey.ir.graph import FlowGraph
from mermaid_sankey.syntax.types import Record


def _record(source: str, target: str, weight: float) -> Record:
    return Record(source=source, target=target, weight=weight)


class TestBasicConstruction:
    def test_empty_graph(self):
        g = FlowGraph.from_records([])
        assert g.node_count() == 0
        assert g.edge_count() == 0

    def test_single_record_creates_nodes(self):
        g = FlowGraph.from_records([_record("A", "B", 5)])
        assert g.node_count() == 2
        assert g.edge_count() == 1

    def test_first_seen_order(self):
        g = FlowGraph.from_records([_record("C", "A", 1), _record("B", "C", 1)])
        assert g.nodes() == ["C", "A", "B"]

    def test_parallel_records_are_summed(self):
        g = FlowGraph.from_records([_record("A", "B", 2), _record("A", "B", 3.5)])
        assert g.edge_count() == 1
        assert g.digraph["A"]["B"]["weight"] == 5.5


class TestFlows:
    def setup_method(self):
        self.g = FlowGraph.from_records(
            [
                _record("Coal", "Electricity", 10),
                _record("Solar", "Electricity", 4),
                _record("Electricity", "Homes", 9),
                _record("Electricity", "Losses", 3),
            ]
        )

    def test_inflow_outflow(self):
        assert self.g.inflow("Electricity") == 14
        assert self.g.outflow("Electricity") == 12
        assert self.g.inflow("Coal") == 0
        assert self.g.outflow("Homes") == 0

    def test_node_value_is_max_of_in_and_out(self):
        assert self.g.node_value("Electricity") == 14
        assert self.g.node_value("Coal") == 10
        assert self.g.node_value("Losses") == 3

    def test_unknown_node(self):
        assert self.g.inflow("Nowhere") == 0.0
        assert self.g.node_value("Nowhere") == 0.0

    def test_is_dag(self):
        assert self.g.is_dag()


def test_cycle_is_kept():
    g = FlowGraph.from_records([_record("A", "B", 1), _record("B", "A", 1)])
    assert g.edge_count() == 2
    assert not g.is_dag()
