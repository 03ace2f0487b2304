"""Token, diagnostic, and record data structures."""

from mermaid_sankey.syntax.types import (
    Diagnostic,
    ParseResult,
    Record,
    SankeyParseError,
    Span,
    Token,
)

__all__ = [
    "Diagnostic",
    "ParseResult",
    "Record",
    "SankeyParseError",
    "Span",
    "Token",
]
