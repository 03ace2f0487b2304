"""Parser registry — detect the diagram type and dispatch to the right parser."""

from __future__ import annotations

from mermaid_sankey.config import ParserConfig
from mermaid_sankey.syntax.types import ParseResult

_HEADER_KEYWORDS: list[tuple[str, str]] = [
    ("sankey", "sankey"),
]


def detect_type(src: str) -> str:
    """Detect the diagram type from source text. Returns 'sankey' etc.

    Only registered header keywords are recognized; anything else, including a
    malformed first data line, is left to the sankey parser to diagnose.
    """
    for line in src.splitlines():
        line = line.strip().lower()
        if not line or line.startswith("%%"):
            continue
        for keyword, diagram_type in _HEADER_KEYWORDS:
            if line.startswith(keyword):
                return diagram_type
        break
    return "sankey"


def _sankey_parser(config: ParserConfig | None):
    from mermaid_sankey.services import create_sankey_services

    return create_sankey_services(config).parser


_PARSERS = {
    "sankey": _sankey_parser,
}


def parse(src: str, config: ParserConfig | None = None) -> ParseResult:
    """Auto-detect diagram type and parse to records plus diagnostics."""
    diagram_type = detect_type(src)
    factory = _PARSERS.get(diagram_type)
    if factory is None:
        raise ValueError(f"Unsupported diagram type: {diagram_type}")
    return factory(config).parse(src)
