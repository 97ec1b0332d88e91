# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
loopchain: write nested loops as a flat chain of clauses.

	for i in range(2); for j in range(2); then { record(i, j) }

expands to the same code as nesting the two loops by hand. The pipeline is
lexer -> splitter -> classifier (`loopchain.parser`), nesting builder
(`loopchain.nesting`) and emitters (`loopchain.emit`). The CLI entrypoint is
`loopchain.cli:main`.
"""

from loopchain.core import (
	ChainError,
	Diagnostic,
	MalformedFragmentError,
	MissingTerminalBlockError,
	Span,
	UnrecognizedClauseError,
)
from loopchain.driver import ExpandOptions, build, check_chain, expand, expand_to_python, run_chain
from loopchain.emit import render_braces, render_python
from loopchain.nesting import Block, Leaf, Scope, build_nesting, nesting_depth
from loopchain.parser import Dialect, parse_chain

__all__ = [
	"Block",
	"ChainError",
	"Diagnostic",
	"Dialect",
	"ExpandOptions",
	"Leaf",
	"MalformedFragmentError",
	"MissingTerminalBlockError",
	"Scope",
	"Span",
	"UnrecognizedClauseError",
	"build",
	"build_nesting",
	"check_chain",
	"expand",
	"expand_to_python",
	"nesting_depth",
	"parse_chain",
	"render_braces",
	"render_python",
	"run_chain",
]
