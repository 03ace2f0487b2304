"""Value converter — turns a field token's raw text into its semantic value."""

from __future__ import annotations

import math
import re

from mermaid_sankey.config import ParserConfig
from mermaid_sankey.syntax.types import Diagnostic, Token
from mermaid_sankey.types import DiagnosticCode, TokenKind

_STRICT_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class ValueConversionError(ValueError):
    """A field's text does not convert to the requested value; carries the diagnostic."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic


class SankeyValueConverter:
    """Pure conversion of field tokens to `str` or `float` values.

    The grammar layer calls `convert` once per field as it consumes it, so a
    failure is reported against exactly that token.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()

    def convert(self, token: Token, kind: TokenKind | None = None) -> str | float:
        """Convert `token` as `kind` (defaults to the token's own kind).

        Passing a kind lets a number-shaped node name such as `2020` be read
        as a string, and a quoted weight such as `'12'` be read as a number.
        """
        kind = kind or token.kind
        if kind == TokenKind.NumberField:
            return self.to_number(token)
        if kind == TokenKind.StringField:
            return self.to_string(token)
        raise ValueError(f"{kind.name} tokens carry no value")

    def to_string(self, token: Token) -> str:
        text = token.text
        if len(text) >= 2 and text[0] in self.config.quote_chars and text[-1] == text[0]:
            quote = text[0]
            return text[1:-1].replace(quote * 2, quote)
        return text.strip()

    def to_number(self, token: Token) -> float:
        text = self.to_string(token).strip()
        if _STRICT_NUMBER_RE.fullmatch(text):
            value = float(text)
            if math.isfinite(value):
                return value
        raise ValueConversionError(
            Diagnostic(
                code=DiagnosticCode.InvalidNumber,
                message=f"invalid number {token.text!r}",
                span=token.span,
            )
        )
