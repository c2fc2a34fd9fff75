"""Builtins behind the special forms `if`, `define` and `fn`.

Their operands were prepared by irl.evaluation.special_forms, so some of them
arrive on the stack as raw nodes that these procedures evaluate themselves.
"""
from __future__ import annotations

from irl import Value
from irl.errors import IrlArityError, IrlTypeError
from irl.evaluation.evaluator import execute_node
from irl.evaluation.operand_stack import pop_operands
from irl.types.code import Code
from irl.types.environment import Environment
from irl.types.nil import Nil
from irl.types.sexpr import SExpr
from irl.types.symbol import Ident, Symbol
from irl.types.values import to_source


def if_builtin(env: Environment, stack: list[Value], ops: int) -> Value:
    """(if cond then [else]): evaluate only the selected branch; nil when there is none."""
    if ops < 2 or ops > 3:
        raise IrlArityError(f"if takes a condition and 1 or 2 branches, got {ops} operand(s)")
    cond, on_true, *rest = pop_operands(stack, ops)
    if not isinstance(cond, bool):
        raise IrlTypeError(f"if condition must be a boolean, got {to_source(cond)}")
    if cond:
        branch = on_true
    elif rest:
        branch = rest[0]
    else:
        return Nil
    execute_node(env, stack, branch)
    return stack.pop()


def _binding_name(env: Environment, stack: list[Value], target: Value) -> str:
    if isinstance(target, Ident):
        return target.id
    if isinstance(target, SExpr):
        # A computed name: the expression must produce a symbol
        execute_node(env, stack, target)
        name = stack.pop()
        if isinstance(name, Symbol):
            return name.id
        raise IrlTypeError(f"define name expression must produce a symbol, got {to_source(name)}")
    raise IrlTypeError(f"define must take an identifier as first argument, got {to_source(target)}")


def define_builtin(env: Environment, stack: list[Value], ops: int) -> Value:
    """(define name value): bind in the current scope and return the value."""
    if ops != 2:
        raise IrlArityError(f"define requires exactly 2 arguments, got {ops}")
    target, value = pop_operands(stack, ops)
    name = _binding_name(env, stack, target)
    env.declare(name, value)
    return value


def fn_builtin(env: Environment, stack: list[Value], ops: int) -> Value:
    """(fn [params...] body...): build a closure over the current environment."""
    if ops == 0:
        raise IrlArityError("fn requires at least a parameter array")
    params, *body = pop_operands(stack, ops)
    if not isinstance(params, list):
        raise IrlTypeError(f"fn parameters must be an array, got {to_source(params)}")
    return Code(params, body, env)
