"""Tests for mermaid_sankey.syntax.types — spans, diagnostics, and results."""

import pytest

from mermaid_sankey import parse_flows
from mermaid_sankey.syntax.types import Diagnostic, ParseResult, Record, SankeyParseError, Span
from mermaid_sankey.types import DiagnosticCode, Severity, TokenKind

# ─── Span ────────────────────────────────────────────────────────────────────


def test_span_length():
    assert len(Span(start=3, end=7)) == 4


def test_span_rejects_inverted_range():
    with pytest.raises(ValueError):
        Span(start=5, end=2)


def test_span_cover_keeps_first_position():
    a = Span(start=10, end=12, line=2, column=3)
    b = Span(start=14, end=20, line=2, column=7)
    assert a.cover(b) == Span(start=10, end=20, line=2, column=3)
    assert b.cover(a) == Span(start=10, end=20, line=2, column=3)


# ─── Enums ───────────────────────────────────────────────────────────────────


def test_token_kind_variants():
    assert len(TokenKind) == 6
    assert TokenKind.StringField.is_field
    assert TokenKind.NumberField.is_field
    assert not TokenKind.Comma.is_field


def test_diagnostic_code_variants():
    assert len(DiagnosticCode) == 4


# ─── Diagnostic ──────────────────────────────────────────────────────────────


def test_diagnostic_format_without_source():
    d = Diagnostic(code=DiagnosticCode.InvalidNumber, message="invalid number 'x'", span=Span(4, 5, 1, 5))
    assert d.format() == "1:5: error[InvalidNumber]: invalid number 'x'"


def test_diagnostic_format_with_caret():
    d = Diagnostic(code=DiagnosticCode.InvalidNumber, message="invalid number 'xy'", span=Span(10, 12, 2, 5))
    assert d.format("A,B,1\nC,D,xy\n") == (
        "2:5: error[InvalidNumber]: invalid number 'xy'\n"
        "    C,D,xy\n"
        "        ^^"
    )


def test_diagnostic_is_immutable():
    d = Diagnostic(code=DiagnosticCode.MalformedRecord, message="m", span=Span(0, 1))
    with pytest.raises(AttributeError):
        d.message = "other"


# ─── ParseResult ─────────────────────────────────────────────────────────────


def test_result_ok():
    assert ParseResult().ok
    warning = Diagnostic(DiagnosticCode.MalformedRecord, "w", Span(0, 1), severity=Severity.Warning)
    assert ParseResult(diagnostics=(warning,)).ok


def test_raise_for_errors():
    error = Diagnostic(DiagnosticCode.MalformedRecord, "expected 3 fields, found 2", Span(0, 3))
    result = ParseResult(diagnostics=(error,))
    with pytest.raises(SankeyParseError) as excinfo:
        result.raise_for_errors("A,B\n")
    assert excinfo.value.diagnostics == (error,)
    assert "expected 3 fields" in str(excinfo.value)


def test_raise_for_errors_passes_clean_result():
    result = ParseResult(records=(Record("A", "B", 1.0),))
    assert result.raise_for_errors() is result


def test_parse_flows():
    assert parse_flows("sankey-beta\nA,B,1\n") == [Record("A", "B", 1.0)]


def test_parse_flows_raises():
    with pytest.raises(SankeyParseError):
        parse_flows("A,B,oops\n")
