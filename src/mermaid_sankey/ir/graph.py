"""Flow graph IR — collects parsed records into a networkx DiGraph for layout.

This is the hand-off structure for downstream sankey layout. It performs no
validation: parallel records between the same pair of nodes simply add up,
and cycles or unbalanced nodes are left for the consumer to judge.
"""

from __future__ import annotations

from collections.abc import Iterable

import networkx as nx

from mermaid_sankey.syntax.types import Record


class FlowGraph:
    """Weighted flow graph built from a sequence of records.

    Wraps a networkx DiGraph whose edges carry a `weight` attribute and
    exposes helpers for the node totals a sankey layout needs.
    """

    def __init__(self, digraph: nx.DiGraph) -> None:
        self.digraph = digraph

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> FlowGraph:
        digraph: nx.DiGraph = nx.DiGraph()
        for record in records:
            for node in (record.source, record.target):
                if node not in digraph:
                    digraph.add_node(node)
            if digraph.has_edge(record.source, record.target):
                digraph[record.source][record.target]["weight"] += record.weight
            else:
                digraph.add_edge(record.source, record.target, weight=record.weight)
        return cls(digraph)

    def nodes(self) -> list[str]:
        """Node names in first-seen order."""
        return list(self.digraph.nodes)

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def inflow(self, node: str) -> float:
        if node not in self.digraph:
            return 0.0
        return float(self.digraph.in_degree(node, weight="weight"))

    def outflow(self, node: str) -> float:
        if node not in self.digraph:
            return 0.0
        return float(self.digraph.out_degree(node, weight="weight"))

    def node_value(self, node: str) -> float:
        return max(self.inflow(node), self.outflow(node))

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)
