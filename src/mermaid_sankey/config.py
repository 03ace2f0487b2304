"""Centralized configuration for mermaid-sankey."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for the tokenizer and parser."""

    comment_lead: str = "%%"
    quote_chars: tuple[str, ...] = ("'", '"')
    header_prefix: str = "sankey"
    recover: bool = True

    def __post_init__(self) -> None:
        if not self.comment_lead:
            raise ValueError("comment_lead must not be empty")
        for q in self.quote_chars:
            if len(q) != 1 or q in ",\r\n \t":
                raise ValueError(f"invalid quote character {q!r}")
