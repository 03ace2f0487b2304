"""End-to-end CLI tests."""

import json

from click.testing import CliRunner

from mermaid_sankey.__main__ import main


def _write(tmp_path, text: str):
    path = tmp_path / "diagram.mmd"
    path.write_text(text)
    return str(path)


def test_text_output(tmp_path):
    result = CliRunner().invoke(main, [_write(tmp_path, "sankey-beta\nA,B,1.5\n")])
    assert result.exit_code == 0
    assert result.stdout == "A -> B: 1.5\n"


def test_stdin_input():
    result = CliRunner().invoke(main, [], input="A,B,2\n")
    assert result.exit_code == 0
    assert result.stdout == "A -> B: 2\n"


def test_json_output(tmp_path):
    result = CliRunner().invoke(main, [_write(tmp_path, "'Ag, waste',Bio,12\n"), "--format", "json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["records"] == [{"source": "Ag, waste", "target": "Bio", "weight": 12.0}]
    assert payload["diagnostics"] == []


def test_json_reports_diagnostics(tmp_path):
    result = CliRunner().invoke(main, [_write(tmp_path, "A,B,x\nC,D,1\n"), "-f", "json"])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert len(payload["records"]) == 1
    assert payload["diagnostics"][0]["code"] == "InvalidNumber"
    assert payload["diagnostics"][0]["line"] == 1
    assert payload["diagnostics"][0]["column"] == 5


def test_diagnostics_go_to_stderr(tmp_path):
    result = CliRunner().invoke(main, [_write(tmp_path, "A,B\nC,D,1\n")])
    assert result.exit_code == 1
    assert result.stdout == "C -> D: 1\n"
    assert "error[MalformedRecord]" in result.output


def test_no_recover(tmp_path):
    result = CliRunner().invoke(main, [_write(tmp_path, "A,B\nC,D,1\n"), "--no-recover"])
    assert result.exit_code == 1
    assert result.stdout == ""


def test_summary(tmp_path):
    path = _write(tmp_path, "A,B,3\nA,C,1\nB,C,2\n")
    result = CliRunner().invoke(main, [path, "--summary"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert "3 nodes, 3 flows" in lines
    assert "  C: 3" in lines


def test_output_file(tmp_path):
    out = tmp_path / "out.txt"
    result = CliRunner().invoke(main, [_write(tmp_path, "A,B,1\n"), "-o", str(out)])
    assert result.exit_code == 0
    assert out.read_text() == "A -> B: 1\n"


def test_missing_input_file(tmp_path):
    result = CliRunner().invoke(main, [str(tmp_path / "nope.mmd")])
    assert result.exit_code != 0


def test_utf8_bom_is_ignored(tmp_path):
    path = tmp_path / "bom.mmd"
    path.write_bytes("\ufeffsankey-beta\nA,B,1\n".encode("utf-8"))
    result = CliRunner().invoke(main, [str(path)])
    assert result.exit_code == 0
    assert result.stdout == "A -> B: 1\n"
