# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Chain tokenizer.

Wraps lark basic lexers built from the token grammars next to this module:
`grammar.lark` for Python snippets and `braces.lark` for brace-language
snippets. Both produce the same terminal names; they differ in how string
literals and comments are recognized. The lexers are constructed once at
import time and never mutated, so `tokenize` is safe to call from anywhere.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from lark import Lark, Token
from lark.exceptions import UnexpectedInput

from loopchain.core.errors import MalformedFragmentError
from loopchain.core.span import Span

_GRAMMAR_FILES = {
	"python": "grammar.lark",
	"braces": "braces.lark",
}


def _build_lexer(name: str) -> Lark:
	return Lark(
		Path(__file__).with_name(name).read_text(),
		parser="lalr",
		lexer="basic",
		start="chain",
		propagate_positions=True,
	)


_LEXERS: Dict[str, Lark] = {syntax: _build_lexer(name) for syntax, name in _GRAMMAR_FILES.items()}


def tokenize(source: str, *, filename: Optional[str] = None, syntax: str = "python") -> List[Token]:
	"""Split `source` into lark tokens (comments and whitespace dropped)."""
	try:
		lexer = _LEXERS[syntax]
	except KeyError:
		raise ValueError(f"unknown snippet syntax {syntax!r} (expected one of: {', '.join(sorted(_LEXERS))})") from None
	try:
		return list(lexer.lex(source))
	except UnexpectedInput as err:
		char = getattr(err, "char", None)
		what = f"unexpected character {char!r}" if char else "untokenizable input"
		raise MalformedFragmentError(
			f"{what} (unterminated string literal?)",
			loc=Span(file=filename, line=getattr(err, "line", None), column=getattr(err, "column", None), raw=err),
		) from err


def is_name(token: Token, value: str) -> bool:
	return token.type == "NAME" and token.value == value


def margin_before(source: str, token: Token) -> str:
	"""
	Whitespace equivalent of the text preceding `token` on its source line.

	Tabs are kept and every other character becomes a space, so prefixing a
	fragment with the margin reproduces the column layout of its continuation
	lines.
	"""
	pos = token.start_pos
	line_start = source.rfind("\n", 0, pos) + 1
	return "".join(ch if ch == "\t" else " " for ch in source[line_start:pos])


__all__ = ["tokenize", "is_name", "margin_before"]
