# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Pipeline orchestration.

source --parse_chain--> ClauseSequence --build_nesting--> NestingNode
       --emit--> Python ast/source or brace text

Each call builds everything from scratch; no state survives between calls.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Union

from loopchain.core.diagnostics import Diagnostic
from loopchain.core.errors import ChainError
from loopchain.emit import compile_chain, emit_python_module, render_braces, render_python
from loopchain.nesting import NestingNode, build_nesting
from loopchain.parser import Dialect, host_for_target, parse_chain

TARGETS = ("python", "braces")


@dataclass(frozen=True)
class ExpandOptions:
	target: str = "python"
	dialect: Union[Dialect, str] = Dialect.LOOP_CHAIN
	# Brace output only; Python output is produced by `ast.unparse`.
	indent: str = "\t"
	filename: Optional[str] = None

	def __post_init__(self) -> None:
		if self.target not in TARGETS:
			raise ValueError(f"unknown target {self.target!r} (expected one of: {', '.join(TARGETS)})")
		object.__setattr__(self, "dialect", Dialect(self.dialect))


def _options(options: Optional[ExpandOptions], overrides: Dict[str, Any]) -> ExpandOptions:
	base = options if options is not None else ExpandOptions()
	return replace(base, **overrides) if overrides else base


def build(source: str, options: Optional[ExpandOptions] = None, **overrides: Any) -> NestingNode:
	"""Parse `source` and fold it into a NestingNode for `options.target`."""
	opts = _options(options, overrides)
	sequence = parse_chain(
		source,
		host=host_for_target(opts.target),
		dialect=opts.dialect,
		filename=opts.filename,
	)
	return build_nesting(sequence)


def expand(source: str, options: Optional[ExpandOptions] = None, **overrides: Any) -> str:
	"""Expand a chain into nested source text for the chosen target."""
	opts = _options(options, overrides)
	node = build(source, opts)
	if opts.target == "braces":
		return render_braces(node, indent=opts.indent)
	return render_python(node)


def expand_to_python(source: str, options: Optional[ExpandOptions] = None, **overrides: Any) -> ast.Module:
	opts = replace(_options(options, overrides), target="python")
	return emit_python_module(build(source, opts))


def run_chain(
	source: str,
	namespace: Optional[Dict[str, Any]] = None,
	options: Optional[ExpandOptions] = None,
	**overrides: Any,
) -> Dict[str, Any]:
	"""
	Expand `source` to Python, execute it in `namespace` and return the namespace.

	Exceptions raised by the chain's own expressions and statements propagate
	unchanged, exactly as if the loops had been nested by hand.
	"""
	opts = replace(_options(options, overrides), target="python")
	code = compile_chain(build(source, opts), opts.filename or "<chain>")
	if namespace is None:
		namespace = {}
	exec(code, namespace)
	return namespace


def check_chain(source: str, options: Optional[ExpandOptions] = None, **overrides: Any) -> List[Diagnostic]:
	"""Validate `source`, returning diagnostics instead of raising."""
	try:
		build(source, options, **overrides)
	except ChainError as err:
		return [err.to_diagnostic("parser")]
	return []


__all__ = ["ExpandOptions", "TARGETS", "build", "check_chain", "expand", "expand_to_python", "run_chain"]
