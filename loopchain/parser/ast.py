# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Clause-level AST produced by the classifier.

Expressions, patterns and statements are opaque `Snippet`s: the exact
source text plus whatever the host parsed it into. The chain machinery
never looks inside them.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Tuple

from loopchain.core.span import Span


class Dialect(Enum):
	"""Which clause kinds a chain may use."""

	LOOP_CHAIN = "loop_chain"  # for, while, while let, loop, statements
	FOR_CHAIN = "for_chain"  # for and statements only


def dedent_snippet(text: str, margin: str) -> str:
	"""
	Dedent a multi-line snippet as if it started at its source column.

	`margin` is the whitespace equivalent of whatever preceded the snippet on
	its first line. When a continuation line sits left of the first one (an
	open bracket, for instance) the raw text is returned unchanged.
	"""
	if "\n" not in text:
		return text
	dedented = textwrap.dedent(margin + text)
	if dedented[:1].isspace():
		return text
	return dedented


@dataclass(frozen=True)
class Snippet:
	text: str
	span: Span
	# Host-parsed form: a Python ast node (or tuple of statements) for the
	# Python host, None for the brace host.
	node: Any = field(default=None, compare=False)
	# Whitespace preceding `text` on its first source line.
	margin: str = field(default="", compare=False, repr=False)

	def block_text(self) -> str:
		"""`text` with continuation lines dedented to the snippet's own column."""
		return dedent_snippet(self.text, self.margin)


class Clause:
	"""Base class for all chain clauses."""

	span: Span


class LoopClause(Clause):
	"""A clause that opens one nesting level."""

	kind: str


@dataclass(frozen=True)
class Iteration(LoopClause):
	"""`for binding in source`"""

	span: Span
	binding: Snippet
	source: Snippet
	kind = "iteration"


@dataclass(frozen=True)
class ConditionalRepeat(LoopClause):
	"""`while condition`"""

	span: Span
	condition: Snippet
	kind = "conditional-repeat"


@dataclass(frozen=True)
class PatternConditionalRepeat(LoopClause):
	"""`while let pattern = scrutinee`"""

	span: Span
	pattern: Snippet
	scrutinee: Snippet
	kind = "pattern-conditional-repeat"


@dataclass(frozen=True)
class UnconditionalRepeat(LoopClause):
	"""`loop`"""

	span: Span
	kind = "unconditional-repeat"


@dataclass(frozen=True)
class Statement(Clause):
	"""A plain statement; never opens a nesting level."""

	span: Span
	body: Snippet


@dataclass(frozen=True)
class TerminalBlock:
	"""The `then { ... }` body, run once per full pass through every scope."""

	span: Span
	body: Tuple[Snippet, ...]
	# Whether the last body statement was followed by `;` in the source.
	terminated: bool = False


@dataclass(frozen=True)
class ClauseSequence:
	clauses: Tuple[Clause, ...]
	terminal: TerminalBlock

	@property
	def loop_clauses(self) -> Tuple[LoopClause, ...]:
		return tuple(c for c in self.clauses if isinstance(c, LoopClause))


__all__ = [
	"Clause",
	"ClauseSequence",
	"ConditionalRepeat",
	"Dialect",
	"Iteration",
	"LoopClause",
	"PatternConditionalRepeat",
	"Snippet",
	"Statement",
	"TerminalBlock",
	"UnconditionalRepeat",
	"dedent_snippet",
]
