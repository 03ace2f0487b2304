"""CLI entry point for mermaid-sankey."""

import json
import sys

import click

from mermaid_sankey.config import ParserConfig
from mermaid_sankey.ir.graph import FlowGraph
from mermaid_sankey.parsers import parse
from mermaid_sankey.syntax.types import ParseResult


def _format_number(value: float) -> str:
    return f"{value:g}"


def _render_text(result: ParseResult, summary: bool) -> str:
    lines = [f"{r.source} -> {r.target}: {_format_number(r.weight)}" for r in result.records]
    if summary:
        graph = FlowGraph.from_records(result.records)
        lines.append(f"{graph.node_count()} nodes, {graph.edge_count()} flows")
        for node in graph.nodes():
            lines.append(f"  {node}: {_format_number(graph.node_value(node))}")
    return "".join(f"{line}\n" for line in lines)


def _render_json(result: ParseResult, summary: bool) -> str:
    payload: dict = {
        "records": [{"source": r.source, "target": r.target, "weight": r.weight} for r in result.records],
        "diagnostics": [
            {
                "code": d.code.name,
                "severity": d.severity.name.lower(),
                "message": d.message,
                "line": d.span.line,
                "column": d.span.column,
                "start": d.span.start,
                "end": d.span.end,
            }
            for d in result.diagnostics
        ],
    }
    if summary:
        graph = FlowGraph.from_records(result.records)
        payload["nodes"] = {node: graph.node_value(node) for node in graph.nodes()}
    return json.dumps(payload, indent=2) + "\n"


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--format", "-f", "fmt", type=click.Choice(["text", "json"]), default="text", help="Output format")
@click.option("--no-recover", "no_recover", is_flag=True, help="Stop at the first error instead of skipping the line")
@click.option("--summary", "-s", "summary", is_flag=True, help="Append node totals from the flow graph")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
def main(input: str | None, fmt: str, no_recover: bool, summary: bool, output: str | None) -> None:
    """Mermaid sankey diagram to typed flow records."""
    if input:
        try:
            with open(input, encoding="utf-8-sig") as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        result = parse(text, ParserConfig(recover=not no_recover))
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    for diagnostic in result.diagnostics:
        click.echo(diagnostic.format(text), err=True)

    rendered = _render_json(result, summary) if fmt == "json" else _render_text(result, summary)

    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)

    if not result.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
