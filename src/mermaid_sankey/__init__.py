"""mermaid-sankey: Mermaid sankey diagram source to typed flow records."""

from mermaid_sankey.config import ParserConfig
from mermaid_sankey.ir.graph import FlowGraph
from mermaid_sankey.parsers import parse
from mermaid_sankey.services import SankeyServices, create_sankey_services
from mermaid_sankey.syntax.types import Diagnostic, ParseResult, Record, SankeyParseError, Span, Token
from mermaid_sankey.types import DiagnosticCode, Severity, TokenKind

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "FlowGraph",
    "ParseResult",
    "ParserConfig",
    "Record",
    "SankeyParseError",
    "SankeyServices",
    "Severity",
    "Span",
    "Token",
    "TokenKind",
    "create_sankey_services",
    "parse",
    "parse_flows",
]


def parse_flows(src: str, recover: bool = True) -> list[Record]:
    """Parse sankey source and return its records, raising on any error.

    Args:
        src: Mermaid sankey source string.
        recover: Keep parsing past malformed lines (errors are still raised).

    Returns:
        The parsed records in source order.

    Raises:
        SankeyParseError: If any error diagnostic was produced.
    """
    result = parse(src, ParserConfig(recover=recover))
    result.raise_for_errors(src)
    return list(result.records)
