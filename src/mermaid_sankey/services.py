"""Service composition — explicit wiring of tokenizer, value converter, and parser.

A hosting engine calls `create_sankey_services()` and may swap any of the
pluggable pieces by passing its own implementation; everything not
overridden falls back to the sankey defaults.
"""

from __future__ import annotations

from dataclasses import dataclass

from mermaid_sankey.config import ParserConfig
from mermaid_sankey.parsers.base import Parser, Tokenizer, ValueConverter
from mermaid_sankey.parsers.converter import SankeyValueConverter
from mermaid_sankey.parsers.sankey import SankeyParser
from mermaid_sankey.parsers.tokenizer import SankeyTokenizer


@dataclass(frozen=True)
class SankeyServices:
    config: ParserConfig
    tokenizer: Tokenizer
    value_converter: ValueConverter
    parser: Parser


def create_sankey_services(
    config: ParserConfig | None = None,
    *,
    tokenizer: Tokenizer | None = None,
    value_converter: ValueConverter | None = None,
) -> SankeyServices:
    """Build the sankey service set, applying any overrides."""
    config = config or ParserConfig()
    tokenizer = tokenizer or SankeyTokenizer(config)
    value_converter = value_converter or SankeyValueConverter(config)
    parser = SankeyParser(tokenizer, value_converter, config)
    return SankeyServices(
        config=config,
        tokenizer=tokenizer,
        value_converter=value_converter,
        parser=parser,
    )
