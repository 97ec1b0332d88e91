# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Host grammars for opaque snippets.

The classifier decides *which* clause a fragment is; a host decides whether
the pieces inside it (bindings, expressions, patterns, statements) are valid
in the target language, and parses them into the form its emitter needs.

- `PythonHost` delegates to Python's own grammar via the stdlib `ast` module
  and returns ast nodes relocated to their chain source lines.
- `BraceHost` keeps every snippet as text; it only rejects empty ones.
"""

from __future__ import annotations

import ast
from typing import Any, Tuple

from loopchain.core.errors import UnrecognizedClauseError
from loopchain.core.span import Span

from .ast import dedent_snippet


class Host:
	"""Interface implemented by every host grammar."""

	name = "host"
	# Token grammar used to lex chains for this host.
	syntax = "python"

	def parse_binding(self, text: str, span: Span) -> Any:
		raise NotImplementedError

	def parse_expression(self, text: str, span: Span) -> Any:
		raise NotImplementedError

	def parse_pattern(self, text: str, span: Span) -> Any:
		raise NotImplementedError

	def parse_statements(self, text: str, span: Span, *, margin: str = "") -> Any:
		raise NotImplementedError


def _relocate(node: ast.AST, span: Span, wrapper_line: int = 1) -> ast.AST:
	"""Shift line numbers parsed from a standalone snippet onto the chain source."""
	if span.line is not None and span.line != wrapper_line:
		ast.increment_lineno(node, span.line - wrapper_line)
	return node


def _syntax_error(what: str, text: str, span: Span, err: Exception) -> UnrecognizedClauseError:
	detail = getattr(err, "msg", None) or str(err)
	return UnrecognizedClauseError(
		f"not a valid Python {what}: {text.strip()!r}",
		loc=span,
		notes=[detail],
	)


class PythonHost(Host):
	"""
	Snippets are Python source, validated and parsed with `ast`.

	Statements are split on top-level `;` by the chain grammar before Python
	sees them, including inside the terminal block. `then { if x > 2: break; x += 1 }`
	therefore holds two statements and `x += 1` is not part of the `if`, unlike
	the same text on one line of a Python file. A compound statement keeps its
	suite only when the suite is written on indented lines without a top-level
	`;`.
	"""

	name = "python"

	def parse_binding(self, text: str, span: Span) -> ast.expr:
		try:
			loop = ast.parse(f"for {text} in _: pass").body[0]
		except (SyntaxError, ValueError) as err:
			raise _syntax_error("loop binding", text, span, err) from err
		if not isinstance(loop, ast.For):
			raise UnrecognizedClauseError(f"not a valid Python loop binding: {text.strip()!r}", loc=span)
		return _relocate(loop.target, span)

	def parse_expression(self, text: str, span: Span) -> ast.expr:
		# Parenthesize so an expression may span several lines.
		try:
			tree = ast.parse(f"({text}\n)", mode="eval")
		except (SyntaxError, ValueError) as err:
			raise _syntax_error("expression", text, span, err) from err
		return _relocate(tree.body, span)

	def parse_pattern(self, text: str, span: Span) -> ast.pattern:
		try:
			match = ast.parse(f"match _:\n case {text}:\n  pass").body[0]
		except (SyntaxError, ValueError) as err:
			raise _syntax_error("pattern", text, span, err) from err
		if not isinstance(match, ast.Match) or len(match.cases) != 1:
			raise UnrecognizedClauseError(f"not a valid Python pattern: {text.strip()!r}", loc=span)
		return _relocate(match.cases[0].pattern, span, wrapper_line=2)

	def parse_statements(self, text: str, span: Span, *, margin: str = "") -> Tuple[ast.stmt, ...]:
		source = dedent_snippet(text, margin)
		try:
			module = ast.parse(source)
		except (SyntaxError, ValueError) as err:
			raise _syntax_error("statement", text, span, err) from err
		if not module.body:
			raise UnrecognizedClauseError(f"not a valid Python statement: {text.strip()!r}", loc=span)
		return tuple(_relocate(stmt, span) for stmt in module.body)


class BraceHost(Host):
	"""Snippets are opaque brace-language text (the original macro's host)."""

	name = "braces"
	syntax = "braces"

	def _require_text(self, what: str, text: str, span: Span) -> None:
		if not text.strip():
			raise UnrecognizedClauseError(f"empty {what}", loc=span)

	def parse_binding(self, text: str, span: Span) -> None:
		self._require_text("loop binding", text, span)

	def parse_expression(self, text: str, span: Span) -> None:
		self._require_text("expression", text, span)

	def parse_pattern(self, text: str, span: Span) -> None:
		self._require_text("pattern", text, span)

	def parse_statements(self, text: str, span: Span, *, margin: str = "") -> None:
		self._require_text("statement", text, span)


_HOSTS = {
	PythonHost.name: PythonHost,
	BraceHost.name: BraceHost,
}


def host_for_target(target: str) -> Host:
	"""Host matching an emitter target name (`python` or `braces`)."""
	try:
		return _HOSTS[target]()
	except KeyError:
		raise ValueError(f"unknown target {target!r} (expected one of: {', '.join(sorted(_HOSTS))})") from None


__all__ = ["BraceHost", "Host", "PythonHost", "host_for_target"]
