"""Sankey parser — drives the record state machine over the token stream.

Each diagram line is matched as

    ExpectSourceField → ExpectComma1 → ExpectTargetField → ExpectComma2
        → ExpectWeightField → ExpectTerminator → ExpectSourceField ...

Skippable tokens never reach the state machine. Any unexpected token moves
to Error, which discards tokens up to the next newline and then resumes at
ExpectSourceField, so one bad line costs only that line.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum, auto

from mermaid_sankey.config import ParserConfig
from mermaid_sankey.parsers.base import Tokenizer, ValueConverter
from mermaid_sankey.parsers.converter import ValueConversionError
from mermaid_sankey.syntax.types import Diagnostic, ParseResult, Record, Span, Token
from mermaid_sankey.types import DiagnosticCode, TokenKind

logger = logging.getLogger(__name__)


class _State(Enum):
    ExpectSourceField = auto()
    ExpectComma1 = auto()
    ExpectTargetField = auto()
    ExpectComma2 = auto()
    ExpectWeightField = auto()
    ExpectTerminator = auto()
    Error = auto()
    Done = auto()


_NEXT_AFTER_COMMA = {
    _State.ExpectComma1: _State.ExpectTargetField,
    _State.ExpectComma2: _State.ExpectWeightField,
}


def _describe(token: Token) -> str:
    if token.kind == TokenKind.Newline:
        return "end of line"
    return repr(token.text)


@dataclass
class _RecordMatcher:
    """Per-parse state: owned by a single `parse` call and discarded afterwards."""

    converter: ValueConverter
    config: ParserConfig
    state: _State = _State.ExpectSourceField
    records: list[Record] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    values: list[str | float] = field(default_factory=list)
    line_span: Span | None = None
    last: Token | None = None
    seen_content: bool = False
    maybe_header: bool = False

    @property
    def stopped(self) -> bool:
        return not self.config.recover and bool(self.diagnostics)

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    # ── Token dispatch ────────────────────────────────────────────────────────

    def feed(self, token: Token) -> None:
        self.last = token
        if self.state == _State.Error:
            if token.kind == TokenKind.Newline:
                self._reset()
            return
        if token.is_error:
            # Tokenizer already reported it; just abandon the line.
            self._abandon(token)
            return

        if self.state == _State.ExpectSourceField:
            self._expect_source(token)
        elif self.state in _NEXT_AFTER_COMMA:
            self._expect_comma(token)
        elif self.state in (_State.ExpectTargetField, _State.ExpectWeightField):
            self._expect_field(token)
        elif self.state == _State.ExpectTerminator:
            self._expect_terminator(token)

    def _expect_source(self, token: Token) -> None:
        if token.kind == TokenKind.Newline:
            return  # blank line
        if token.kind == TokenKind.Comma:
            self._fail(DiagnosticCode.UnexpectedToken, "expected a source field, found ','", token)
            return
        self.maybe_header = (
            not self.seen_content
            and token.kind == TokenKind.StringField
            and re.fullmatch(re.escape(self.config.header_prefix) + r"\S*", token.text, re.IGNORECASE) is not None
        )
        self.seen_content = True
        self.line_span = token.span
        self._take(token, TokenKind.StringField, _State.ExpectComma1)

    def _expect_comma(self, token: Token) -> None:
        if token.kind == TokenKind.Comma:
            self.maybe_header = False
            self.line_span = self.line_span.cover(token.span)
            self.state = _NEXT_AFTER_COMMA[self.state]
        elif token.kind == TokenKind.Newline:
            self._end_short_line()
            self._reset()
        else:
            self._fail(DiagnosticCode.MalformedRecord, f"expected ',' between fields, found {_describe(token)}", token)

    def _expect_field(self, token: Token) -> None:
        if not token.kind.is_field:
            role = "target" if self.state == _State.ExpectTargetField else "weight"
            self._fail(DiagnosticCode.UnexpectedToken, f"expected a {role} field, found {_describe(token)}", token)
            return
        self.line_span = self.line_span.cover(token.span)
        if self.state == _State.ExpectTargetField:
            self._take(token, TokenKind.StringField, _State.ExpectComma2)
        else:
            self._take(token, TokenKind.NumberField, _State.ExpectTerminator)

    def _expect_terminator(self, token: Token) -> None:
        if token.kind == TokenKind.Newline:
            self._emit_record()
            self._reset()
        elif token.kind == TokenKind.Comma:
            self._fail(DiagnosticCode.MalformedRecord, "too many fields: a record has exactly 3", token)
        else:
            self._fail(DiagnosticCode.MalformedRecord, f"expected end of line, found {_describe(token)}", token)

    def finish(self) -> None:
        """Close out whatever record is in progress at end of input."""
        if self.state in _NEXT_AFTER_COMMA:
            self._end_short_line()
        elif self.state in (_State.ExpectTargetField, _State.ExpectWeightField):
            role = "target" if self.state == _State.ExpectTargetField else "weight"
            self.report(
                Diagnostic(
                    code=DiagnosticCode.UnexpectedToken,
                    message=f"expected a {role} field, found end of input",
                    span=self._eof_span(),
                )
            )
        elif self.state == _State.ExpectTerminator:
            self._emit_record()
        self.state = _State.Done

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _take(self, token: Token, kind: TokenKind, next_state: _State) -> None:
        try:
            self.values.append(self.converter.convert(token, kind))
        except ValueConversionError as e:
            self.report(e.diagnostic)
            self._abandon(token)
            return
        self.state = next_state

    def _end_short_line(self) -> None:
        if self.maybe_header:
            self.maybe_header = False
            return
        self.report(
            Diagnostic(
                code=DiagnosticCode.MalformedRecord,
                message=f"expected 3 fields, found {len(self.values)}",
                span=self.line_span,
            )
        )

    def _emit_record(self) -> None:
        source, target, weight = self.values
        self.records.append(Record(source=source, target=target, weight=weight, span=self.line_span))

    def _fail(self, code: DiagnosticCode, message: str, token: Token) -> None:
        self.report(Diagnostic(code=code, message=message, span=token.span))
        self._abandon(token)

    def _abandon(self, token: Token) -> None:
        if token.kind == TokenKind.Newline:
            self._reset()
        else:
            self.values = []
            self.state = _State.Error

    def _reset(self) -> None:
        self.values = []
        self.line_span = None
        self.state = _State.ExpectSourceField

    def _eof_span(self) -> Span:
        # Only reached right after a comma, whitespace, or comment: no newlines inside.
        if self.last is None:
            return Span.empty(0, 1, 1)
        span = self.last.span
        return Span.empty(span.end, span.line, span.column + len(self.last.text))


class SankeyParser:
    """Parser assembly: binds a tokenizer and a value converter to the record grammar."""

    def __init__(
        self,
        tokenizer: Tokenizer,
        value_converter: ValueConverter,
        config: ParserConfig | None = None,
    ) -> None:
        self.tokenizer = tokenizer
        self.value_converter = value_converter
        self.config = config or ParserConfig()

    def parse(self, src: str) -> ParseResult:
        matcher = _RecordMatcher(converter=self.value_converter, config=self.config)
        for token in self.tokenizer.tokenize(src):
            if token.diagnostic is not None:
                matcher.report(token.diagnostic)
            if token.kind.is_skippable:
                matcher.last = token
            else:
                matcher.feed(token)
            if matcher.stopped:
                break
        else:
            matcher.finish()

        if matcher.stopped:
            logger.debug(f"parse stopped at first diagnostic: {matcher.diagnostics[0].message}")
            return ParseResult(records=(), diagnostics=tuple(matcher.diagnostics))

        logger.debug(f"parsed {len(matcher.records)} records with {len(matcher.diagnostics)} diagnostics")
        return ParseResult(records=tuple(matcher.records), diagnostics=tuple(matcher.diagnostics))
