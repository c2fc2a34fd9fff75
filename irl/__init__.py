# Core type aliases for the irl data model.
# Values and AST nodes share one representation: plain Python types (int, float,
# bool, str, list for arrays, tuple for quoted lists) plus a handful of small
# classes in irl.types (Nil, Symbol, Ident, SExpr, Code, Builtin).
#
# Naming guidance:
# - Node:  Use in reader/optimizer code to denote unevaluated syntax.
# - Value: Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any`; evaluation replaces nodes with values in place,
# so the two are interchangeable.

from typing import Any, Callable

__version__ = "0.3.0"

# Runtime value alias
Value = Any
# Syntax alias (a node is also a value, see above)
Node = Value

# Evaluator function type: (env, stack, node) -> None, pushing one value onto stack
EvaluatorFn = Callable[..., None]
