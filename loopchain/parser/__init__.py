# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Chain front end: tokens -> fragments -> clauses.

`parse_chain` runs the lexer, the splitter and the classifier and returns a
`ClauseSequence`. Nothing here builds nesting; see `loopchain.nesting`.
"""

from __future__ import annotations

from typing import Optional, Union

from .ast import ClauseSequence, Dialect, Snippet, TerminalBlock
from .classifier import classify_fragment
from .hosts import BraceHost, Host, PythonHost, host_for_target
from .lexer import tokenize
from .splitter import split_chain


def parse_chain(
	source: str,
	*,
	host: Optional[Host] = None,
	dialect: Union[Dialect, str] = Dialect.LOOP_CHAIN,
	filename: Optional[str] = None,
) -> ClauseSequence:
	"""
	Parse chain source into clauses and the terminal block.

	Raises `MissingTerminalBlockError`, `MalformedFragmentError` or
	`UnrecognizedClauseError`; nothing is returned for partially valid input.
	"""
	host = host if host is not None else PythonHost()
	dialect = Dialect(dialect)
	tokens = tokenize(source, filename=filename, syntax=host.syntax)
	split = split_chain(tokens, source, filename=filename)
	clauses = tuple(classify_fragment(fragment, host, dialect) for fragment in split.fragments)
	body = tuple(
		Snippet(
			text=stmt.text,
			span=stmt.span,
			node=host.parse_statements(stmt.text, stmt.span, margin=stmt.margin),
			margin=stmt.margin,
		)
		for stmt in split.body
	)
	terminal = TerminalBlock(span=split.terminal.span, body=body, terminated=split.terminated)
	return ClauseSequence(clauses=clauses, terminal=terminal)


__all__ = [
	"BraceHost",
	"ClauseSequence",
	"Dialect",
	"Host",
	"PythonHost",
	"host_for_target",
	"parse_chain",
]
