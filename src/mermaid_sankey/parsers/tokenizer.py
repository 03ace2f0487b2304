"""Sankey tokenizer — hand-rolled scanner over the raw diagram text.

A single regex table cannot tell a quoted field from an unquoted one that
happens to share its first character, nor honour doubled-quote escapes
across commas and newlines, so each token kind gets its own scanning
routine and the routines are tried in a fixed priority order:

    comment > quoted field > number > unquoted field > comma/newline > whitespace

Every character of the input ends up in exactly one token, including the
skippable whitespace and comment tokens.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from mermaid_sankey.config import ParserConfig
from mermaid_sankey.syntax.types import Diagnostic, Span, Token
from mermaid_sankey.types import DiagnosticCode, TokenKind

# ─── Patterns ────────────────────────────────────────────────────────────────

_WHITESPACE_RE = re.compile(r"[ \t]+")
_NEWLINE_RE = re.compile(r"\r\n|\n|\r")
_REST_OF_LINE_RE = re.compile(r"[^\r\n]*")
_FIELD_RUN_RE = re.compile(r"[^,\r\n]*")

# Sign alone is allowed here; the value converter rejects it.
_NUMBER_RE = re.compile(r"[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)?")

_DELIMITERS = ",\r\n"
_HSPACE = " \t"


@dataclass
class _Cursor:
    """Position in the source, tracked as offset plus 1-based line/column."""

    src: str
    pos: int = 0
    line: int = 1
    column: int = 1

    def eof(self) -> bool:
        return self.pos >= len(self.src)

    def peek(self, s: str) -> bool:
        return self.src.startswith(s, self.pos)

    def advance_to(self, end: int) -> Span:
        """Move to `end` and return the span of everything consumed."""
        span = Span(start=self.pos, end=end, line=self.line, column=self.column)
        chunk = self.src[self.pos : end]
        last = None
        for last in _NEWLINE_RE.finditer(chunk):
            self.line += 1
        if last is None:
            self.column += len(chunk)
        else:
            self.column = len(chunk) - last.end() + 1
        self.pos = end
        return span


class SankeyTokenizer:
    """Turns sankey source text into a lazy, left-to-right stream of tokens."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()

    def tokenize(self, src: str) -> Iterator[Token]:
        """Yield tokens for `src`; each call starts from offset 0 with its own cursor."""
        cursor = _Cursor(src=src)
        while not cursor.eof():
            yield self._next_token(cursor)

    # ── Dispatch ──────────────────────────────────────────────────────────────

    def _next_token(self, cursor: _Cursor) -> Token:
        src, pos = cursor.src, cursor.pos
        ch = src[pos]

        if cursor.peek(self.config.comment_lead):
            end = _REST_OF_LINE_RE.match(src, pos).end()
            return self._emit(cursor, TokenKind.Comment, end)

        if ch in self.config.quote_chars:
            return self._scan_quoted(cursor)

        m = _NUMBER_RE.match(src, pos)
        if m.end() > pos and self._at_field_end(src, m.end()):
            return self._emit(cursor, TokenKind.NumberField, m.end())

        if ch not in _DELIMITERS and ch not in _HSPACE:
            return self._emit(cursor, TokenKind.StringField, self._unquoted_end(src, pos))

        if ch == ",":
            return self._emit(cursor, TokenKind.Comma, pos + 1)

        m = _NEWLINE_RE.match(src, pos)
        if m:
            return self._emit(cursor, TokenKind.Newline, m.end())

        return self._emit(cursor, TokenKind.Whitespace, _WHITESPACE_RE.match(src, pos).end())

    def _emit(self, cursor: _Cursor, kind: TokenKind, end: int, diagnostic: Diagnostic | None = None) -> Token:
        start = cursor.pos
        span = cursor.advance_to(end)
        return Token(kind=kind, text=cursor.src[start:end], span=span, diagnostic=diagnostic)

    # ── Field scanners ────────────────────────────────────────────────────────

    def _scan_quoted(self, cursor: _Cursor) -> Token:
        src, start = cursor.src, cursor.pos
        quote = src[start]
        i = start + 1
        while True:
            j = src.find(quote, i)
            if j == -1:
                break
            if src.startswith(quote, j + 1):
                i = j + 2
                continue
            return self._emit(cursor, TokenKind.StringField, j + 1)

        # Unterminated: the token swallows the rest of the input.
        span = Span(start=start, end=len(src), line=cursor.line, column=cursor.column)
        diagnostic = Diagnostic(
            code=DiagnosticCode.UnterminatedQuotedField,
            message=f"unterminated quoted field: missing closing {quote}",
            span=span,
        )
        return self._emit(cursor, TokenKind.StringField, len(src), diagnostic)

    def _unquoted_end(self, src: str, pos: int) -> int:
        end = _FIELD_RUN_RE.match(src, pos).end()
        lead = self.config.comment_lead
        idx = src.find(lead, pos, end)
        while idx != -1:
            if src[idx - 1] in _HSPACE:
                end = idx
                break
            idx = src.find(lead, idx + 1, end)
        while end > pos and src[end - 1] in _HSPACE:
            end -= 1
        return end

    def _at_field_end(self, src: str, pos: int) -> bool:
        """True when `pos` is at a delimiter or EOF, or at a comment after horizontal space."""
        m = _WHITESPACE_RE.match(src, pos)
        if m:
            pos = m.end()
            if src.startswith(self.config.comment_lead, pos):
                return True
        return pos >= len(src) or src[pos] in _DELIMITERS
