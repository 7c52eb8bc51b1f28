"""Test the command-line interface."""

import io
import subprocess
import sys

import valuefmt
from valuefmt.__main__ import main


def test_cli_module_runs():
    result = subprocess.run(
        [sys.executable, "-m", "valuefmt", "3", "--text"],
        capture_output=True,
        text=True
    )
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert result.stdout == "int{3}\n"


def test_cli_literal_text(capsys):
    assert main(["[1]", "--text"]) == 0
    assert capsys.readouterr().out == "[\n    Any(\n        int{1}\n    ),\n]\n"


def test_cli_literal_file(tmp_path, capsys):
    path = tmp_path / "value.py"
    path.write_text("(True, 'x')")
    assert main([str(path), "--indent", "2"]) == 0
    out = capsys.readouterr().out
    assert out == '[\n  Any(\n    bool{true}\n  ),\n  Any(\n    string{"x"}\n  ),\n]\n'


def test_cli_json_sorted(tmp_path, capsys):
    path = tmp_path / "value.json"
    path.write_text('{"b": 1, "a": null}')
    assert main([str(path), "--json", "--sort-maps", "--tabs"]) == 0
    out = capsys.readouterr().out
    assert out == (
        'map{\n'
        '\tAny(\n\t\tstring{"a"}\n\t): Any(<nil>),\n'
        '\tAny(\n\t\tstring{"b"}\n\t): Any(\n\t\tint{1}\n\t),\n'
        '}\n'
    )


def test_cli_json_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("2.5"))
    assert main(["-", "--json"]) == 0
    assert capsys.readouterr().out == "float{2.5}\n"


def test_cli_object(capsys):
    assert main(["json:dumps", "--object"]) == 0
    assert capsys.readouterr().out.startswith("func json.dumps(Any, ")


def test_cli_bad_literal(capsys):
    assert main(["[1,", "--text"]) == 1
    assert "Error loading value" in capsys.readouterr().err


def test_cli_missing_object(capsys):
    assert main(["json:nothing_here", "--object"]) == 1
    assert "Error loading value" in capsys.readouterr().err


def test_cli_output_failure(monkeypatch, capsys):
    closed = io.StringIO()
    closed.close()
    monkeypatch.setattr(sys, "stdout", closed)
    assert main(["1", "--text"]) == 3
    assert "Error writing output" in capsys.readouterr().err


def test_cli_version_matches_package():
    assert valuefmt.__version__ == "0.1.0"
