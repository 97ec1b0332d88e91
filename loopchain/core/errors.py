# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Errors raised while expanding a clause chain.

Every error is a `ValueError` subclass so callers can treat them as input
rejections, and every error carries a best-effort location (`loc`) so the
driver can turn it into a structured diagnostic instead of a traceback.
All of them are raised before any output is produced.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .diagnostics import Diagnostic
from .span import Span


class ChainError(ValueError):
	"""Base class for rejected chain input."""

	code = "E-CHAIN"

	def __init__(self, message: str, *, loc: Optional[Span] = None, notes: Iterable[str] = ()) -> None:
		super().__init__(message)
		self.loc = loc if loc is not None else Span()
		self.notes = list(notes)

	def to_diagnostic(self, phase: str = "parser") -> Diagnostic:
		return Diagnostic(
			message=f"{self.code}: {self}",
			code=self.code,
			phase=phase,
			severity="error",
			span=self.loc,
			notes=list(self.notes),
		)


class MissingTerminalBlockError(ChainError):
	"""The input ended before a top-level `then { ... }` block was found."""

	code = "E-CHAIN-NO-TERMINAL"


class MalformedFragmentError(ChainError):
	"""
	Unbalanced or mismatched delimiters, untokenizable input, or tokens
	following the terminal block.
	"""

	code = "E-CHAIN-MALFORMED"


class UnrecognizedClauseError(ChainError):
	"""
	A fragment matches none of the clause grammars, or uses a clause kind the
	active dialect does not accept.
	"""

	code = "E-CHAIN-UNRECOGNIZED"


__all__ = [
	"ChainError",
	"MissingTerminalBlockError",
	"MalformedFragmentError",
	"UnrecognizedClauseError",
]
