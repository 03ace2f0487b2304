"""Shared type definitions for mermaid-sankey.

Enums used across the tokenizer, value converter, and parser.
"""

from __future__ import annotations

from enum import Enum, auto


class TokenKind(Enum):
    StringField = auto()  # Agricultural waste / 'Ag, waste'
    NumberField = auto()  # 124.729
    Comma = auto()  # ,
    Newline = auto()  # \n, \r\n, \r
    Comment = auto()  # %% ...
    Whitespace = auto()  # spaces and tabs

    @property
    def is_skippable(self) -> bool:
        return self in (TokenKind.Comment, TokenKind.Whitespace)

    @property
    def is_field(self) -> bool:
        return self in (TokenKind.StringField, TokenKind.NumberField)


class DiagnosticCode(Enum):
    UnterminatedQuotedField = auto()
    InvalidNumber = auto()
    MalformedRecord = auto()
    UnexpectedToken = auto()


class Severity(Enum):
    Error = auto()
    Warning = auto()  # reserved for host-supplied diagnostics; the core only emits Error
