"""Restricted compilation and globals for caller-supplied query programs.

Queries are Python source compiled with RestrictedPython. The evaluation
namespace is an explicit allow-list: traversal helpers, a small set of pure
builtins, ``math``, a ``json`` namespace limited to ``dumps``/``loads``, and a
captured ``log`` function. Nothing reaches the filesystem, network, or
process state.
"""

from __future__ import annotations

import ast
import json
import math
import operator
import re
import textwrap
from enum import StrEnum
from types import CodeType, SimpleNamespace
from typing import Any

from RestrictedPython import compile_restricted_exec, safe_builtins
from RestrictedPython.Eval import default_guarded_getitem, default_guarded_getiter
from RestrictedPython.Guards import (
    full_write_guard,
    guarded_iter_unpack_sequence,
    guarded_unpack_sequence,
    safer_getattr,
)
from RestrictedPython.PrintCollector import PrintCollector

ENTRYPOINT = "run_query"
QUERY_FILENAME = "<figma-query>"

_STATEMENT_KEYWORDS_RE = re.compile(r"\b(const|let|var|if|for|while|return)\b")

_EXTRA_BUILTINS: dict[str, Any] = {
    "all": all,
    "any": any,
    "dict": dict,
    "enumerate": enumerate,
    "filter": filter,
    "list": list,
    "map": map,
    "max": max,
    "min": min,
    "reversed": reversed,
    "set": set,
    "sum": sum,
}

_INPLACE_OPERATORS = {
    "+=": operator.iadd,
    "-=": operator.isub,
    "*=": operator.imul,
    "/=": operator.itruediv,
    "//=": operator.ifloordiv,
    "%=": operator.imod,
    "**=": operator.ipow,
    "|=": operator.ior,
    "&=": operator.iand,
}


class QueryMode(StrEnum):
    """How a query snippet is wrapped before execution."""

    EXPRESSION = "expression"
    STATEMENT = "statement"


def _parses_as_expression(query: str) -> bool:
    try:
        ast.parse(query.strip(), mode="eval")
    except (SyntaxError, ValueError):
        return False
    return True


def detect_mode(query: str) -> QueryMode:
    """Classify a snippet as a single expression or a statement block.

    A semicolon always means statement mode. A statement keyword means
    statement mode unless the whole snippet is still a valid Python
    expression (comprehensions and conditional expressions use ``for``/``if``).
    """
    if ";" in query:
        return QueryMode.STATEMENT
    if _STATEMENT_KEYWORDS_RE.search(query):
        if _parses_as_expression(query):
            return QueryMode.EXPRESSION
        return QueryMode.STATEMENT
    return QueryMode.EXPRESSION


def wrap_query(query: str, mode: QueryMode) -> str:
    """Wrap a snippet as the body of the ``run_query`` entrypoint."""
    source = textwrap.dedent(query).strip("\n")
    if mode == QueryMode.EXPRESSION:
        body = f"return (\n{source}\n)"
    else:
        body = source
    return f"def {ENTRYPOINT}():\n{textwrap.indent(body, '    ')}\n"


def compile_query(query: str, mode: QueryMode) -> CodeType:
    """Compile a wrapped query under RestrictedPython policy.

    Raises SyntaxError for both parse errors and policy violations.
    """
    result = compile_restricted_exec(wrap_query(query, mode), filename=QUERY_FILENAME)
    if result.errors:
        raise SyntaxError("; ".join(result.errors))
    return result.code


def _inplacevar(op: str, x: Any, y: Any) -> Any:
    fn = _INPLACE_OPERATORS.get(op)
    if fn is None:
        raise SyntaxError(f"Unsupported in-place operator: {op}")
    return fn(x, y)


def _apply(func: Any, *args: Any, **kwargs: Any) -> Any:
    return func(*args, **kwargs)


def _join(args: tuple[Any, ...]) -> str:
    return " ".join(str(arg) for arg in args)


def _print_collector(lines: list[str]) -> type[PrintCollector]:
    class QueryPrintCollector(PrintCollector):
        def _call_print(self, *objects: Any, **kwargs: Any) -> None:
            lines.append(_join(objects))

    return QueryPrintCollector


def build_restricted_globals(bindings: dict[str, Any], logs: list[str]) -> dict[str, Any]:
    """Build the allow-listed namespace a query program executes in."""
    builtins = dict(safe_builtins)
    builtins.update(_EXTRA_BUILTINS)

    def log(*args: Any) -> None:
        logs.append(_join(args))

    namespace: dict[str, Any] = {
        "__builtins__": builtins,
        "__name__": "figma_query",
        "_getattr_": safer_getattr,
        "_getitem_": default_guarded_getitem,
        "_getiter_": default_guarded_getiter,
        "_iter_unpack_sequence_": guarded_iter_unpack_sequence,
        "_unpack_sequence_": guarded_unpack_sequence,
        "_write_": full_write_guard,
        "_inplacevar_": _inplacevar,
        "_apply_": _apply,
        "_print_": _print_collector(logs),
        "json": SimpleNamespace(dumps=json.dumps, loads=json.loads),
        "math": math,
        "log": log,
    }
    namespace.update(bindings)
    return namespace
