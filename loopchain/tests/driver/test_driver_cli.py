# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from loopchain import cli


def _write(tmp_path: Path, src: str, name: str = "chain.txt") -> Path:
	path = tmp_path / name
	path.write_text(src)
	return path


def test_cli_prints_python_expansion(tmp_path: Path, capsys) -> None:
	path = _write(tmp_path, "for i in range(2); for j in range(2); then { record(i, j) }")
	assert cli.main([str(path)]) == 0
	out = capsys.readouterr().out
	assert out == "for i in range(2):\n    for j in range(2):\n        record(i, j)\n"


def test_cli_braces_with_space_indent(tmp_path: Path, capsys) -> None:
	path = _write(tmp_path, "for i in 0..2; loop; then { tick(i) }")
	assert cli.main([str(path), "--target", "braces", "--indent", "2"]) == 0
	assert capsys.readouterr().out == "for i in 0..2 {\n  loop {\n    tick(i)\n  }\n}\n"


def test_cli_writes_output_file(tmp_path: Path, capsys) -> None:
	path = _write(tmp_path, "then { x = 1 }")
	out_path = tmp_path / "out.py"
	assert cli.main([str(path), "-o", str(out_path)]) == 0
	assert out_path.read_text() == "x = 1\n"
	assert capsys.readouterr().out == ""


def test_cli_check_is_silent_on_success(tmp_path: Path, capsys) -> None:
	path = _write(tmp_path, "while x < 2; then { x += 1 }")
	assert cli.main([str(path), "--check"]) == 0
	captured = capsys.readouterr()
	assert captured.out == ""
	assert captured.err == ""


def test_cli_run_executes_chain(tmp_path: Path, capsys) -> None:
	path = _write(tmp_path, "for i in range(3); then { print(i) }")
	assert cli.main([str(path), "--run"]) == 0
	assert capsys.readouterr().out == "0\n1\n2\n"


def test_cli_reads_stdin(monkeypatch, capsys) -> None:
	monkeypatch.setattr("sys.stdin", io.StringIO("then { y = 2 }"))
	assert cli.main(["-"]) == 0
	assert capsys.readouterr().out == "y = 2\n"


def test_cli_human_diagnostics(tmp_path: Path, capsys) -> None:
	path = _write(tmp_path, "for i in xs;\nwhile; then { }", name="bad.txt")
	assert cli.main([str(path)]) == 1
	err = capsys.readouterr().err
	assert f"{path}:2:1: error: E-CHAIN-UNRECOGNIZED:" in err


def test_cli_json_diagnostics(tmp_path: Path, capsys) -> None:
	path = _write(tmp_path, "for i in xs;", name="bad.txt")
	assert cli.main([str(path), "--json"]) == 1
	payload = json.loads(capsys.readouterr().out)
	assert payload["exit_code"] == 1
	(diag,) = payload["diagnostics"]
	assert diag["phase"] == "parser"
	assert diag["severity"] == "error"
	assert diag["file"] == str(path)
	assert (diag["line"], diag["column"]) == (1, 12)
	assert diag["message"].startswith("E-CHAIN-NO-TERMINAL")


def test_cli_json_success_payload(tmp_path: Path, capsys) -> None:
	path = _write(tmp_path, "then { }")
	assert cli.main([str(path), "--check", "--json"]) == 0
	assert json.loads(capsys.readouterr().out) == {"exit_code": 0, "diagnostics": []}


def test_cli_for_chain_dialect(tmp_path: Path, capsys) -> None:
	path = _write(tmp_path, "while busy(); then { }")
	assert cli.main([str(path), "--dialect", "for_chain", "--json"]) == 1
	payload = json.loads(capsys.readouterr().out)
	assert "for_chain dialect" in payload["diagnostics"][0]["message"]
	assert payload["diagnostics"][0]["notes"]


def test_cli_missing_source_is_a_driver_diagnostic(tmp_path: Path, capsys) -> None:
	missing = tmp_path / "nope.txt"
	assert cli.main([str(missing), "--json"]) == 1
	(diag,) = json.loads(capsys.readouterr().out)["diagnostics"]
	assert diag["phase"] == "driver"
	assert "cannot read source" in diag["message"]


def test_cli_rejects_bad_flag_combinations(tmp_path: Path) -> None:
	path = _write(tmp_path, "then { }")
	with pytest.raises(SystemExit):
		cli.main([str(path), "--run", "--target", "braces"])
	with pytest.raises(SystemExit):
		cli.main([str(path), "--run", "--check"])
	with pytest.raises(SystemExit):
		cli.main([str(path), "--indent", "wide"])


def test_cli_default_indent_is_a_tab(tmp_path: Path, capsys) -> None:
	path = _write(tmp_path, "for i in 0..2; then { tick(i) }")
	assert cli.main([str(path), "--target", "braces"]) == 0
	assert capsys.readouterr().out == "for i in 0..2 {\n\ttick(i)\n}\n"


def test_cli_json_payload_carries_expansion(tmp_path: Path, capsys) -> None:
	path = _write(tmp_path, "for i in xs; then { f(i) }")
	assert cli.main([str(path), "--json"]) == 0
	payload = json.loads(capsys.readouterr().out)
	assert payload == {"exit_code": 0, "diagnostics": [], "output": "for i in xs:\n    f(i)\n"}


def test_cli_json_with_output_file_leaves_payload_bare(tmp_path: Path, capsys) -> None:
	path = _write(tmp_path, "then { x = 1 }")
	out_path = tmp_path / "out.py"
	assert cli.main([str(path), "--json", "-o", str(out_path)]) == 0
	assert json.loads(capsys.readouterr().out) == {"exit_code": 0, "diagnostics": []}
	assert out_path.read_text() == "x = 1\n"
