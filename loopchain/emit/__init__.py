# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Emitters turning a NestingNode into Python ast/source or brace text."""

from .braces import loop_header, render_braces
from .python import compile_chain, emit_python_module, is_irrefutable, render_python

__all__ = [
	"compile_chain",
	"emit_python_module",
	"is_irrefutable",
	"loop_header",
	"render_braces",
	"render_python",
]
