# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the chain expander and its driver.

A diagnostic is a message plus an optional span and metadata. The library
raises `ChainError` subclasses; the driver converts them into diagnostics
for human-readable or JSON reporting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .span import Span


@dataclass
class Diagnostic:
	"""Represents an expander diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Pipeline phase that produced the diagnostic (lexer, parser, driver, run).
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		# Normalize missing spans to the sentinel Span() so downstream tooling
		# can rely on a structured object instead of None.
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def to_json(self, default_phase: str, default_file: Optional[str] = None) -> dict:
		"""Render to a structured JSON-friendly dict."""
		return {
			"phase": self.phase or default_phase,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file or default_file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}


__all__ = ["Diagnostic"]
