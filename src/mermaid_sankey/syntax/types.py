"""Data structures produced by the sankey front end.

Tokens and diagnostics carry a Span into the original source; records and
the ParseResult are what downstream layout consumes. Everything here is a
frozen dataclass created fresh for each parse call.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mermaid_sankey.types import DiagnosticCode, Severity, TokenKind


@dataclass(frozen=True)
class Span:
    """Half-open [start, end) character range with the 1-based line/column of start."""

    start: int
    end: int
    line: int = 1
    column: int = 1

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span [{self.start}, {self.end})")

    @classmethod
    def empty(cls, offset: int, line: int, column: int) -> Span:
        return cls(start=offset, end=offset, line=line, column=column)

    def __len__(self) -> int:
        return self.end - self.start

    def cover(self, other: Span) -> Span:
        """Smallest span covering both; line/column follow whichever starts first."""
        first = self if self.start <= other.start else other
        return Span(
            start=first.start,
            end=max(self.end, other.end),
            line=first.line,
            column=first.column,
        )


@dataclass(frozen=True)
class Diagnostic:
    code: DiagnosticCode
    message: str
    span: Span
    severity: Severity = Severity.Error

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.Error

    def format(self, source: str | None = None) -> str:
        """Render as `line:col: error[Code]: message`, plus a caret line when source is given."""
        head = (
            f"{self.span.line}:{self.span.column}: "
            f"{self.severity.name.lower()}[{self.code.name}]: {self.message}"
        )
        if source is None:
            return head
        line_start = max(source.rfind("\n", 0, self.span.start), source.rfind("\r", 0, self.span.start)) + 1
        line_end = len(source)
        for stop in ("\n", "\r"):
            idx = source.find(stop, self.span.start)
            if idx != -1:
                line_end = min(line_end, idx)
        text = source[line_start:line_end]
        width = max(1, min(self.span.end, line_end) - self.span.start)
        caret = " " * (self.span.start - line_start) + "^" * width
        return f"{head}\n    {text}\n    {caret}"


@dataclass(frozen=True)
class Token:
    """A classified, positioned substring of the source text.

    `text` is always exactly `source[span.start:span.end]`. A token that
    carries a diagnostic is error-marked: the tokenizer produced it on a
    best-effort basis so that parsing can continue.
    """

    kind: TokenKind
    text: str
    span: Span
    diagnostic: Diagnostic | None = None

    @property
    def is_error(self) -> bool:
        return self.diagnostic is not None


@dataclass(frozen=True)
class Record:
    """One `source,target,weight` line of a sankey diagram."""

    source: str
    target: str
    weight: float
    span: Span = field(compare=False, default=Span(0, 0))


class SankeyParseError(ValueError):
    """Raised by ParseResult.raise_for_errors() when error diagnostics are present."""

    def __init__(self, diagnostics: tuple[Diagnostic, ...], source: str | None = None) -> None:
        self.diagnostics = diagnostics
        super().__init__("\n".join(d.format(source) for d in diagnostics))


@dataclass(frozen=True)
class ParseResult:
    records: tuple[Record, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def ok(self) -> bool:
        return not any(d.is_error for d in self.diagnostics)

    def raise_for_errors(self, source: str | None = None) -> ParseResult:
        """Return self unchanged, or raise SankeyParseError listing every error diagnostic."""
        errors = tuple(d for d in self.diagnostics if d.is_error)
        if errors:
            raise SankeyParseError(errors, source)
        return self
