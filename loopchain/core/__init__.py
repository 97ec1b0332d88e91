# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared infrastructure: spans, diagnostics and the error taxonomy."""

from .diagnostics import Diagnostic
from .errors import ChainError, MalformedFragmentError, MissingTerminalBlockError, UnrecognizedClauseError
from .span import Span

__all__ = [
	"ChainError",
	"Diagnostic",
	"MalformedFragmentError",
	"MissingTerminalBlockError",
	"Span",
	"UnrecognizedClauseError",
]
