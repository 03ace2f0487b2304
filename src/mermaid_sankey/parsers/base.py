"""Capability protocols for the pluggable parser services."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

from mermaid_sankey.syntax.types import ParseResult, Token
from mermaid_sankey.types import TokenKind


class Tokenizer(Protocol):
    """Produces the token stream the grammar layer pulls from."""

    def tokenize(self, src: str) -> Iterator[Token]:
        """Lazily tokenize the full source text, left to right."""
        ...


class ValueConverter(Protocol):
    """Materializes the value of one field token."""

    def convert(self, token: Token, kind: TokenKind | None = None) -> str | float:
        """Convert a field token; raises ValueConversionError on bad input."""
        ...


class Parser(Protocol):
    """Protocol that all diagram parsers must implement."""

    def parse(self, src: str) -> ParseResult:
        """Parse source text into records plus diagnostics."""
        ...
