# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import ast

import pytest

from loopchain.core.errors import UnrecognizedClauseError
from loopchain.parser import BraceHost, Dialect, PythonHost, parse_chain
from loopchain.parser.ast import (
	ConditionalRepeat,
	Iteration,
	PatternConditionalRepeat,
	Statement,
	UnconditionalRepeat,
)


def _clauses(src: str, **kwargs):
	return parse_chain(src, host=BraceHost(), **kwargs).clauses


def test_classify_every_clause_kind() -> None:
	clauses = _clauses("for (a, b) in pairs; while n < 3; while let Some(x) = it.next(); loop; n += 1; then { }")
	assert [type(c) for c in clauses] == [
		Iteration,
		ConditionalRepeat,
		PatternConditionalRepeat,
		UnconditionalRepeat,
		Statement,
	]
	it, cond, pat, _loop, stmt = clauses
	assert (it.binding.text, it.source.text) == ("(a, b)", "pairs")
	assert cond.condition.text == "n < 3"
	assert (pat.pattern.text, pat.scrutinee.text) == ("Some(x)", "it.next()")
	assert stmt.body.text == "n += 1"


def test_classify_while_let_wins_over_while() -> None:
	(clause,) = _clauses("while let x = f(a == b); then { }")
	assert isinstance(clause, PatternConditionalRepeat)
	assert clause.pattern.text == "x"
	assert clause.scrutinee.text == "f(a == b)"


def test_classify_while_let_splits_on_top_level_equals_only() -> None:
	(clause,) = _clauses("while let Point(x=0, y=y) = next_point(); then { }")
	assert clause.pattern.text == "Point(x=0, y=y)"
	assert clause.scrutinee.text == "next_point()"


def test_classify_for_splits_on_first_top_level_in() -> None:
	(clause,) = _clauses("for x in [y for y in ys if y in keep]; then { }")
	assert clause.binding.text == "x"
	assert clause.source.text == "[y for y in ys if y in keep]"


def test_classify_loop_with_trailing_tokens_is_a_statement() -> None:
	(clause,) = _clauses("loop_count += 1; then { }")
	assert isinstance(clause, Statement)
	(clause,) = _clauses("loop x; then { }")
	assert isinstance(clause, Statement)


def test_classify_clause_span() -> None:
	(clause,) = _clauses("x = 1;\n  while x < 3; then { }")[1:]
	assert (clause.span.line, clause.span.column) == (2, 3)
	assert (clause.condition.span.line, clause.condition.span.column) == (2, 9)


@pytest.mark.parametrize(
	("src", "message"),
	[
		("for x; then { }", "missing `in`"),
		("for in xs; then { }", "missing its binding"),
		("for x in; then { }", "missing its source expression"),
		("while; then { }", "missing its condition"),
		("while let x; then { }", "missing `=`"),
		("while let = f(); then { }", "missing its pattern"),
		("while let x =; then { }", "missing its scrutinee expression"),
	],
)
def test_classify_incomplete_loop_clauses(src: str, message: str) -> None:
	with pytest.raises(UnrecognizedClauseError, match=message):
		_clauses(src)


@pytest.mark.parametrize("src", ["while x; then { }", "while let a = b; then { }", "loop; then { }"])
def test_for_chain_dialect_rejects_non_iteration_loops(src: str) -> None:
	with pytest.raises(UnrecognizedClauseError, match="for_chain dialect"):
		_clauses(src, dialect=Dialect.FOR_CHAIN)


def test_for_chain_dialect_accepts_iterations_and_statements() -> None:
	clauses = _clauses("for i in xs; total += i; for j in ys; then { f(i, j) }", dialect="for_chain")
	assert [type(c) for c in clauses] == [Iteration, Statement, Iteration]


def test_classify_with_python_host_parses_snippets() -> None:
	seq = parse_chain(
		"for i, j in pairs; while let [head, *rest] = items; print(i); then { done = True }",
		host=PythonHost(),
	)
	it, pat, stmt = seq.clauses
	assert isinstance(it.binding.node, ast.Tuple)
	assert isinstance(it.source.node, ast.Name)
	assert isinstance(pat.pattern.node, ast.MatchSequence)
	assert [type(s) for s in stmt.body.node] == [ast.Expr]
	assert [type(s) for s in seq.terminal.body[0].node] == [ast.Assign]


def test_classify_rejects_invalid_python_statement() -> None:
	with pytest.raises(UnrecognizedClauseError, match="not a valid Python statement") as excinfo:
		parse_chain("for i in xs; x = = 1; then { }")
	assert (excinfo.value.loc.line, excinfo.value.loc.column) == (1, 14)
	assert excinfo.value.notes


def test_classify_python_while_with_colon_is_rejected() -> None:
	with pytest.raises(UnrecognizedClauseError, match="not a valid Python expression"):
		parse_chain("while x: pass; then { }")
