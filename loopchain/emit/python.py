# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Python emitter: NestingNode -> `ast.Module`.

Clause kinds map onto Python loops as follows:

	Iteration                 for <binding> in <source>:
	ConditionalRepeat         while <condition>:
	PatternConditionalRepeat  while True:
	                              match <scrutinee>:
	                                  case <pattern>: pass
	                                  case _: break
	UnconditionalRepeat       while True:

The prelude and the inner node follow the loop header in the loop body.
Snippet nodes are deep-copied, so emitting twice from one tree never shares
ast objects between modules.
"""

from __future__ import annotations

import ast
import copy
from types import CodeType
from typing import List

from loopchain.core.span import Span
from loopchain.nesting import Block, Leaf, NestingNode, Scope
from loopchain.parser.ast import (
	ConditionalRepeat,
	Iteration,
	LoopClause,
	PatternConditionalRepeat,
	Snippet,
	UnconditionalRepeat,
)


def _at(node: ast.AST, span: Span) -> ast.AST:
	if span.line is not None:
		node.lineno = span.line
		node.col_offset = max((span.column or 1) - 1, 0)
		node.end_lineno = span.end_line or span.line
		node.end_col_offset = max((span.end_column or 1) - 1, 0)
	return node


def _statements(snippets) -> List[ast.stmt]:
	out: List[ast.stmt] = []
	for snippet in snippets:
		if snippet.node is None:
			raise TypeError("Python emission needs snippets parsed by PythonHost")
		out.extend(copy.deepcopy(stmt) for stmt in snippet.node)
	return out


def _node(snippet: Snippet):
	if snippet.node is None:
		raise TypeError("Python emission needs snippets parsed by PythonHost")
	return copy.deepcopy(snippet.node)


def is_irrefutable(pattern: ast.pattern) -> bool:
	"""Capture/wildcard patterns (or or-patterns containing one) always match."""
	if isinstance(pattern, ast.MatchAs):
		return pattern.pattern is None or is_irrefutable(pattern.pattern)
	if isinstance(pattern, ast.MatchOr):
		return any(is_irrefutable(alt) for alt in pattern.patterns)
	return False


def _loop(clause: LoopClause, body: List[ast.stmt]) -> List[ast.stmt]:
	if isinstance(clause, Iteration):
		loop = ast.For(
			target=_node(clause.binding),
			iter=_node(clause.source),
			body=body,
			orelse=[],
			type_comment=None,
		)
	elif isinstance(clause, ConditionalRepeat):
		loop = ast.While(test=_node(clause.condition), body=body, orelse=[])
	elif isinstance(clause, PatternConditionalRepeat):
		pattern = _node(clause.pattern)
		cases = [ast.match_case(pattern=pattern, guard=None, body=[ast.Pass()])]
		if not is_irrefutable(pattern):
			cases.append(ast.match_case(pattern=ast.MatchAs(pattern=None, name=None), guard=None, body=[ast.Break()]))
		match = _at(ast.Match(subject=_node(clause.scrutinee), cases=cases), clause.span)
		loop = ast.While(test=ast.Constant(value=True), body=[match] + body, orelse=[])
	elif isinstance(clause, UnconditionalRepeat):
		loop = ast.While(test=ast.Constant(value=True), body=body, orelse=[])
	else:
		raise TypeError(f"unsupported loop clause: {clause!r}")
	if not loop.body:
		loop.body = [ast.Pass()]
	return [_at(loop, clause.span)]


def emit_statements(node: NestingNode) -> List[ast.stmt]:
	"""Render one NestingNode as a flat list of statements."""
	if isinstance(node, Leaf):
		return _statements(node.statements)
	if isinstance(node, Block):
		return _statements(node.prelude) + emit_statements(node.inner)
	if isinstance(node, Scope):
		return _loop(node.clause, _statements(node.prelude) + emit_statements(node.inner))
	raise TypeError(f"unsupported nesting node: {node!r}")


def emit_python_module(node: NestingNode) -> ast.Module:
	module = ast.Module(body=emit_statements(node) or [ast.Pass()], type_ignores=[])
	return ast.fix_missing_locations(module)


def render_python(node: NestingNode) -> str:
	return ast.unparse(emit_python_module(node)) + "\n"


def compile_chain(node: NestingNode, filename: str = "<chain>") -> CodeType:
	return compile(emit_python_module(node), filename, "exec")


__all__ = ["compile_chain", "emit_python_module", "emit_statements", "is_irrefutable", "render_python"]
