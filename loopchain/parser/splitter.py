# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Clause splitter.

Partitions a chain's token stream into raw clause fragments and the terminal
`then { ... }` block. Splitting happens only on `;` at delimiter depth zero,
so semicolons inside parentheses, brackets or braces (including a statement's
own brace-delimited body) never end a fragment.

The terminal block needs unbounded lookahead: a fragment only becomes the
terminal when it *starts* with `then` followed by `{`, and the block must be
the last thing in the input. The scan therefore walks the whole stream once,
tracking depth, and only then decides.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from lark import Token

from loopchain.core.errors import MalformedFragmentError, MissingTerminalBlockError, UnrecognizedClauseError
from loopchain.core.span import Span

from .lexer import is_name, margin_before

_OPENERS = {"LPAR": "RPAR", "LSQB": "RSQB", "LBRACE": "RBRACE"}
_CLOSERS = {closer: opener for opener, closer in _OPENERS.items()}


@dataclass(frozen=True)
class Fragment:
	"""A contiguous run of tokens plus the source they were lexed from."""

	tokens: Tuple[Token, ...]
	source: str = field(repr=False)
	filename: Optional[str] = None

	@property
	def span(self) -> Span:
		return Span.between(self.tokens[0], self.tokens[-1], file=self.filename)

	@property
	def text(self) -> str:
		return self.source[self.tokens[0].start_pos : self.tokens[-1].end_pos]

	@property
	def margin(self) -> str:
		return margin_before(self.source, self.tokens[0])

	def sub(self, start: int, end: Optional[int] = None) -> "Fragment":
		return Fragment(tokens=self.tokens[start:end], source=self.source, filename=self.filename)

	def __len__(self) -> int:
		return len(self.tokens)


@dataclass(frozen=True)
class SplitChain:
	fragments: Tuple[Fragment, ...]
	terminal: Fragment  # `then { ... }` including braces
	body: Tuple[Fragment, ...]  # statements inside the terminal block
	terminated: bool  # body ended with `;`


class DelimiterTracker:
	"""Track bracket nesting over a token stream, rejecting unbalanced input."""

	def __init__(self, filename: Optional[str] = None) -> None:
		self.filename = filename
		self.stack: List[Token] = []

	@property
	def depth(self) -> int:
		return len(self.stack)

	def feed(self, token: Token) -> None:
		ttype = token.type
		if ttype in _OPENERS:
			self.stack.append(token)
		elif ttype in _CLOSERS:
			if not self.stack:
				raise MalformedFragmentError(
					f"unmatched closing {token.value!r}",
					loc=Span.from_loc(token, file=self.filename),
				)
			opener = self.stack.pop()
			if _OPENERS[opener.type] != ttype:
				raise MalformedFragmentError(
					f"mismatched closing {token.value!r} for {opener.value!r} opened at {opener.line}:{opener.column}",
					loc=Span.from_loc(token, file=self.filename),
				)

	def finish(self) -> None:
		if self.stack:
			opener = self.stack[-1]
			raise MalformedFragmentError(
				f"unclosed {opener.value!r}",
				loc=Span.from_loc(opener, file=self.filename),
			)


def _starts_terminal(tokens: Sequence[Token], idx: int) -> bool:
	return is_name(tokens[idx], "then") and idx + 1 < len(tokens) and tokens[idx + 1].type == "LBRACE"


def split_chain(tokens: Sequence[Token], source: str, *, filename: Optional[str] = None) -> SplitChain:
	tokens = tuple(tokens)
	fragments: List[Fragment] = []
	start = 0
	tracker = DelimiterTracker(filename)
	for idx, token in enumerate(tokens):
		if tracker.depth == 0 and idx == start and _starts_terminal(tokens, idx):
			return _split_terminal(tokens, idx, fragments, source, filename)
		tracker.feed(token)
		if token.type == "SEMI" and tracker.depth == 0:
			if idx == start:
				raise UnrecognizedClauseError("empty clause", loc=Span.from_loc(token, file=filename))
			fragments.append(Fragment(tokens[start:idx], source, filename))
			start = idx + 1
	tracker.finish()
	if tokens:
		loc = Span.from_loc(tokens[-1], file=filename)
	else:
		loc = Span(file=filename, line=1, column=1)
	raise MissingTerminalBlockError("expected a terminal `then { ... }` block at the end of the chain", loc=loc)


def _split_terminal(
	tokens: Tuple[Token, ...],
	idx: int,
	fragments: List[Fragment],
	source: str,
	filename: Optional[str],
) -> SplitChain:
	tracker = DelimiterTracker(filename)
	open_idx = idx + 1
	close_idx = None
	for pos in range(open_idx, len(tokens)):
		tracker.feed(tokens[pos])
		if tracker.depth == 0:
			close_idx = pos
			break
	if close_idx is None:
		tracker.finish()
	rest = tokens[close_idx + 1 :]
	if rest and rest[0].type == "SEMI":
		rest = rest[1:]
	if rest:
		raise MalformedFragmentError(
			"terminal block must be the last element of the chain",
			loc=Span.from_loc(rest[0], file=filename),
		)
	terminal = Fragment(tokens[idx : close_idx + 1], source, filename)
	inner = tokens[open_idx + 1 : close_idx]
	body = _split_body(inner, source, filename)
	terminated = bool(body) and inner[-1].type == "SEMI"
	return SplitChain(fragments=tuple(fragments), terminal=terminal, body=body, terminated=terminated)


def _split_body(tokens: Tuple[Token, ...], source: str, filename: Optional[str]) -> Tuple[Fragment, ...]:
	"""Split a (balanced) block body on top-level `;`, skipping empty statements."""
	statements: List[Fragment] = []
	depth = 0
	start = 0
	for idx, token in enumerate(tokens):
		if token.type in _OPENERS:
			depth += 1
		elif token.type in _CLOSERS:
			depth -= 1
		elif token.type == "SEMI" and depth == 0:
			if idx > start:
				statements.append(Fragment(tokens[start:idx], source, filename))
			start = idx + 1
	if start < len(tokens):
		statements.append(Fragment(tokens[start:], source, filename))
	return tuple(statements)


__all__ = ["DelimiterTracker", "Fragment", "SplitChain", "split_chain"]
