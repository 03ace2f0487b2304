"""Intermediate representation handed to downstream layout."""

from mermaid_sankey.ir.graph import FlowGraph

__all__ = [
    "FlowGraph",
]
