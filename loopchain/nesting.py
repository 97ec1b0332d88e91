# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Nesting builder.

Folds a flat `ClauseSequence` into a tree of scopes:

	for a in xs; s1; while c; s2; then { t }

becomes

	Scope(for a in xs, prelude=[s1],
	      inner=Scope(while c, prelude=[s2], inner=Leaf([t])))

The fold runs from the terminal block back toward the first clause and keeps
an explicit `pending` list of statements seen since the last loop clause.
When a loop clause is reached those statements become its prelude: they run
once per iteration of that loop, before control descends into the next one.
Statements written before the first loop clause run once, up front.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

from loopchain.parser.ast import ClauseSequence, LoopClause, Snippet, Statement


@dataclass(frozen=True)
class Leaf:
	statements: Tuple[Snippet, ...]
	# Whether the last statement carried a `;` in the source.
	terminated: bool = False


@dataclass(frozen=True)
class Scope:
	clause: LoopClause
	prelude: Tuple[Snippet, ...]
	inner: "NestingNode"


@dataclass(frozen=True)
class Block:
	"""Statements run once before the outermost scope; adds no loop level."""

	prelude: Tuple[Snippet, ...]
	inner: "NestingNode"


NestingNode = Union[Scope, Block, Leaf]


def build_nesting(sequence: ClauseSequence) -> NestingNode:
	terminal = sequence.terminal
	current: NestingNode = Leaf(statements=terminal.body, terminated=terminal.terminated)
	pending: List[Snippet] = []
	opened = False
	for clause in reversed(sequence.clauses):
		if isinstance(clause, Statement):
			pending.insert(0, clause.body)
			continue
		current = Scope(clause=clause, prelude=tuple(pending), inner=current)
		pending = []
		opened = True
	if not opened:
		# Leading statements are separated from the body by `;`, so the leaf
		# stays terminated whenever they end up last.
		terminated = terminal.terminated if terminal.body else bool(pending)
		return Leaf(statements=tuple(pending) + terminal.body, terminated=terminated)
	if pending:
		return Block(prelude=tuple(pending), inner=current)
	return current


def iter_scopes(node: NestingNode) -> Iterator[Scope]:
	"""Yield every Scope, outermost first."""
	while not isinstance(node, Leaf):
		if isinstance(node, Scope):
			yield node
		node = node.inner


def nesting_depth(node: NestingNode) -> int:
	return sum(1 for _ in iter_scopes(node))


__all__ = ["Block", "Leaf", "NestingNode", "Scope", "build_nesting", "iter_scopes", "nesting_depth"]
