# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
loopchain command line.

Reads a chain from a file (or `-` for stdin), expands it and writes the
result to stdout or `-o`. `--check` only validates, `--run` executes the
Python expansion. With `--json`, diagnostics are printed as a structured
payload (`exit_code` plus phase/message/severity/file/line/column/notes),
with the expansion under `output` unless it went to `-o`;
otherwise they go to stderr as `file:line:column: severity: message`.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loopchain.core.diagnostics import Diagnostic
from loopchain.core.errors import ChainError
from loopchain.driver import TARGETS, ExpandOptions, expand, run_chain
from loopchain.parser import Dialect


def _report(diags: List[Diagnostic], *, as_json: bool, source_name: str, output: Optional[str] = None) -> int:
	exit_code = 1 if any(d.severity == "error" for d in diags) else 0
	if as_json:
		payload = {
			"exit_code": exit_code,
			"diagnostics": [d.to_json("parser", source_name) for d in diags],
		}
		if output is not None:
			payload["output"] = output
		print(json.dumps(payload))
	else:
		for d in diags:
			print(f"{d.span.file or source_name}:{d.span.describe()}: {d.severity}: {d.message}", file=sys.stderr)
			for note in d.notes:
				print(f"  note: {note}", file=sys.stderr)
	return exit_code


def _read_source(path: str) -> str:
	if path == "-":
		return sys.stdin.read()
	return Path(path).read_text()


def _indent(value: str) -> str:
	"""`--indent` argument: a space count, or `tab`."""
	if value == "tab":
		return "\t"
	try:
		count = int(value)
	except ValueError:
		raise argparse.ArgumentTypeError(f"expected a number of spaces or 'tab', got {value!r}") from None
	if count < 0:
		raise argparse.ArgumentTypeError("indent must not be negative")
	return " " * count


def main(argv: list[str] | None = None) -> int:
	parser = argparse.ArgumentParser(
		prog="loopchain",
		description="Expand a flat chain of loop clauses into nested control flow",
	)
	parser.add_argument("source", help="Path to a chain source file, or - for stdin")
	parser.add_argument("-o", "--output", type=Path, help="Write the expansion to this path instead of stdout")
	parser.add_argument("--target", choices=TARGETS, default="python", help="Output language (default: python)")
	parser.add_argument(
		"--dialect",
		choices=[d.value for d in Dialect],
		default=Dialect.LOOP_CHAIN.value,
		help="Accepted clause kinds: loop_chain (all) or for_chain (for + statements)",
	)
	parser.add_argument(
		"--indent",
		type=_indent,
		default="tab",
		help="Indentation for brace output: number of spaces or 'tab' (default: tab)",
	)
	mode = parser.add_mutually_exclusive_group()
	mode.add_argument("--check", action="store_true", help="Validate the chain without printing the expansion")
	mode.add_argument("--run", action="store_true", help="Execute the Python expansion")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/message/severity/file/line/column)",
	)
	args = parser.parse_args(argv)

	source_name = "<stdin>" if args.source == "-" else args.source
	if args.run and args.target != "python":
		parser.error("--run requires --target python")
	try:
		source = _read_source(args.source)
	except OSError as err:
		diag = Diagnostic(message=f"cannot read source: {err}", phase="driver", severity="error")
		return _report([diag], as_json=args.json, source_name=source_name)

	options = ExpandOptions(
		target=args.target,
		dialect=args.dialect,
		indent=args.indent,
		filename=source_name,
	)
	try:
		if args.run:
			run_chain(source, options=options)
			expanded = None
		else:
			expanded = expand(source, options)
	except ChainError as err:
		return _report([err.to_diagnostic("parser")], as_json=args.json, source_name=source_name)

	payload_output = None
	if expanded is not None and not args.check:
		if args.output is not None:
			args.output.write_text(expanded)
		elif args.json:
			# stdout stays a single JSON document
			payload_output = expanded
		else:
			sys.stdout.write(expanded)
	if args.json:
		return _report([], as_json=True, source_name=source_name, output=payload_output)
	return 0


if __name__ == "__main__":
	raise SystemExit(main())
