# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Clause classifier.

Looks at the leading keyword(s) of a raw fragment and builds the matching
`Clause`. Rules are tried in order and the first match wins; `while let` is
checked before plain `while` because it is the more specific prefix.

1. `for <binding> in <source>`          -> Iteration
2. `while let <pattern> = <scrutinee>`  -> PatternConditionalRepeat
3. `while <condition>`                  -> ConditionalRepeat
4. `loop`                               -> UnconditionalRepeat
5. anything else                        -> Statement (parsed by the host)
"""

from __future__ import annotations

from typing import Callable, Optional

from lark import Token

from loopchain.core.errors import UnrecognizedClauseError
from loopchain.core.span import Span

from .ast import (
	Clause,
	ConditionalRepeat,
	Dialect,
	Iteration,
	PatternConditionalRepeat,
	Snippet,
	Statement,
	UnconditionalRepeat,
)
from .hosts import Host
from .lexer import is_name
from .splitter import Fragment


def _find_top_level(fragment: Fragment, start: int, predicate: Callable[[Token], bool]) -> Optional[int]:
	"""Index of the first depth-zero token at or after `start` matching `predicate`."""
	depth = 0
	for idx in range(start, len(fragment)):
		token = fragment.tokens[idx]
		if token.type in ("LPAR", "LSQB", "LBRACE"):
			depth += 1
		elif token.type in ("RPAR", "RSQB", "RBRACE"):
			depth -= 1
		elif depth == 0 and predicate(token):
			return idx
	return None


def _snippet(fragment: Fragment, node: object = None) -> Snippet:
	return Snippet(text=fragment.text, span=fragment.span, node=node, margin=fragment.margin)


def _require(fragment: Fragment, what: str, clause: str, whole: Fragment) -> Fragment:
	if not len(fragment):
		raise UnrecognizedClauseError(f"`{clause}` clause is missing its {what}", loc=whole.span)
	return fragment


def classify_statement(fragment: Fragment, host: Host) -> Statement:
	node = host.parse_statements(fragment.text, fragment.span, margin=fragment.margin)
	return Statement(span=fragment.span, body=_snippet(fragment, node))


def classify_fragment(fragment: Fragment, host: Host, dialect: Dialect = Dialect.LOOP_CHAIN) -> Clause:
	if not len(fragment):
		raise UnrecognizedClauseError("empty clause", loc=Span(file=fragment.filename))
	head = fragment.tokens[0]
	if is_name(head, "for"):
		return _classify_iteration(fragment, host)
	if is_name(head, "while"):
		if dialect is Dialect.FOR_CHAIN:
			_reject_in_for_chain(fragment, "while")
		if len(fragment) > 1 and is_name(fragment.tokens[1], "let"):
			return _classify_while_let(fragment, host)
		condition = _require(fragment.sub(1), "condition", "while", fragment)
		node = host.parse_expression(condition.text, condition.span)
		return ConditionalRepeat(span=fragment.span, condition=_snippet(condition, node))
	if is_name(head, "loop") and len(fragment) == 1:
		if dialect is Dialect.FOR_CHAIN:
			_reject_in_for_chain(fragment, "loop")
		return UnconditionalRepeat(span=fragment.span)
	return classify_statement(fragment, host)


def _classify_iteration(fragment: Fragment, host: Host) -> Iteration:
	in_idx = _find_top_level(fragment, 1, lambda tok: is_name(tok, "in"))
	if in_idx is None:
		raise UnrecognizedClauseError("`for` clause is missing `in`", loc=fragment.span)
	binding = _require(fragment.sub(1, in_idx), "binding", "for", fragment)
	source = _require(fragment.sub(in_idx + 1), "source expression", "for", fragment)
	return Iteration(
		span=fragment.span,
		binding=_snippet(binding, host.parse_binding(binding.text, binding.span)),
		source=_snippet(source, host.parse_expression(source.text, source.span)),
	)


def _classify_while_let(fragment: Fragment, host: Host) -> PatternConditionalRepeat:
	eq_idx = _find_top_level(fragment, 2, lambda tok: tok.type == "OP" and tok.value == "=")
	if eq_idx is None:
		raise UnrecognizedClauseError("`while let` clause is missing `=`", loc=fragment.span)
	pattern = _require(fragment.sub(2, eq_idx), "pattern", "while let", fragment)
	scrutinee = _require(fragment.sub(eq_idx + 1), "scrutinee expression", "while let", fragment)
	return PatternConditionalRepeat(
		span=fragment.span,
		pattern=_snippet(pattern, host.parse_pattern(pattern.text, pattern.span)),
		scrutinee=_snippet(scrutinee, host.parse_expression(scrutinee.text, scrutinee.span)),
	)


def _reject_in_for_chain(fragment: Fragment, keyword: str) -> None:
	raise UnrecognizedClauseError(
		f"`{keyword}` clauses are not accepted by the {Dialect.FOR_CHAIN.value} dialect",
		loc=fragment.span,
		notes=["only `for` clauses and plain statements may precede `then`"],
	)


__all__ = ["classify_fragment", "classify_statement"]
