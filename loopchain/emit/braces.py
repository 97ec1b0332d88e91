# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Brace emitter: NestingNode -> text in the original macro's surface syntax.

	for i in 0..2 {
		for j in 0..2 {
			record(i, j)
		}
	}

Prelude statements are always followed by `;`. The last statement of the
terminal body keeps or omits its `;` exactly as written, since in
brace-delimited languages a trailing expression can be the block's value.
"""

from __future__ import annotations

from typing import List, Sequence

from loopchain.nesting import Block, Leaf, NestingNode, Scope
from loopchain.parser.ast import (
	ConditionalRepeat,
	Iteration,
	LoopClause,
	PatternConditionalRepeat,
	Snippet,
	UnconditionalRepeat,
)


def loop_header(clause: LoopClause) -> str:
	if isinstance(clause, Iteration):
		return f"for {clause.binding.text} in {clause.source.text}"
	if isinstance(clause, ConditionalRepeat):
		return f"while {clause.condition.text}"
	if isinstance(clause, PatternConditionalRepeat):
		return f"while let {clause.pattern.text} = {clause.scrutinee.text}"
	if isinstance(clause, UnconditionalRepeat):
		return "loop"
	raise TypeError(f"unsupported loop clause: {clause!r}")


class _BraceWriter:
	def __init__(self, indent: str) -> None:
		self.indent = indent
		self.lines: List[str] = []

	def line(self, level: int, text: str) -> None:
		prefix = self.indent * level
		for part in text.split("\n"):
			self.lines.append(prefix + part if part.strip() else "")

	def statements(self, level: int, snippets: Sequence[Snippet], terminated: bool = True) -> None:
		for idx, snippet in enumerate(snippets):
			last = idx == len(snippets) - 1
			suffix = ";" if terminated or not last else ""
			self.line(level, snippet.block_text() + suffix)

	def node(self, level: int, node: NestingNode) -> None:
		if isinstance(node, Leaf):
			self.statements(level, node.statements, node.terminated)
		elif isinstance(node, Block):
			self.line(level, "{")
			self.statements(level + 1, node.prelude)
			self.node(level + 1, node.inner)
			self.line(level, "}")
		elif isinstance(node, Scope):
			self.line(level, loop_header(node.clause) + " {")
			self.statements(level + 1, node.prelude)
			self.node(level + 1, node.inner)
			self.line(level, "}")
		else:
			raise TypeError(f"unsupported nesting node: {node!r}")


def render_braces(node: NestingNode, indent: str = "\t") -> str:
	writer = _BraceWriter(indent)
	writer.node(0, node)
	return "\n".join(writer.lines) + "\n"


__all__ = ["loop_header", "render_braces"]
