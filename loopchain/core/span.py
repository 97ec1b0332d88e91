# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics.

Spans are 1-based (line, column) pairs as reported by the lark lexer, with
optional end positions. `raw` keeps whatever object the span was derived
from so richer renderers can recover token-level detail.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus raw lexer loc)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a lark token, a lark exception, or another Span.

		If `loc` is already a Span it is returned unchanged (with `file` filled
		in when it was missing).
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			if loc.file is None and file is not None:
				return replace(loc, file=file)
			return loc
		return cls(
			file=file or getattr(loc, "file", None),
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
			raw=loc,
		)

	@classmethod
	def between(cls, first: Any, last: Any, *, file: Optional[str] = None) -> "Span":
		"""Span covering two tokens, from the start of `first` to the end of `last`."""
		return cls(
			file=file,
			line=getattr(first, "line", None),
			column=getattr(first, "column", None),
			end_line=getattr(last, "end_line", None),
			end_column=getattr(last, "end_column", None),
		)

	def describe(self) -> str:
		"""`line:column`, with `?` for unknown parts."""
		line = self.line if self.line is not None else "?"
		column = self.column if self.column is not None else "?"
		return f"{line}:{column}"


__all__ = ["Span"]
