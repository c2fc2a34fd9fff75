"""Core evaluator for the irl interpreter.

`execute_node` walks one node and leaves exactly one more value on the shared
stack than it found on entry. S-expressions first prepare their operands
(special forms push some of them unevaluated), then resolve the operator
through the environment chain and call either a native Builtin or a Code
closure, both of which consume the prepared operands from the stack.
"""

from __future__ import annotations

import logging

from irl import Node, Value
from irl.errors import IrlError, IrlNotCallable, IrlTypeError, IrlUnboundSymbol
from irl.evaluation.apply import invoke
from irl.evaluation.operand_stack import trim
from irl.evaluation.special_forms import SPECIAL_FORMS, prepare_call
from irl.types.builtin import Builtin
from irl.types.code import Code
from irl.types.environment import Environment
from irl.types.sexpr import SExpr
from irl.types.symbol import Ident

logger = logging.getLogger(__name__)


def execute_node(env: Environment, stack: list[Value], node: Node) -> None:
    """Evaluate `node` in `env`, pushing its single result onto `stack`."""
    depth = len(stack)
    match node:
        case SExpr():
            execute_sexpr(env, stack, node)
        case Ident():
            stack.append(resolve_value(env, node))
        case _:
            # Atoms, arrays, quoted lists and closures evaluate to themselves
            stack.append(node)
    trim(stack, depth)


def resolve_value(env: Environment, ident: Ident) -> Value:
    binding = env.find(ident.id)
    if binding is None:
        raise IrlUnboundSymbol(f"Cannot lookup unbound symbol {ident.id}")
    if isinstance(binding, Builtin):
        raise IrlTypeError(f"Builtin procedure {ident.id} is not a value")
    return binding


def execute_sexpr(env: Environment, stack: list[Value], node: SExpr) -> None:
    name = node.op.id
    logger.debug("execute_node %s", node)
    try:
        prepare = SPECIAL_FORMS.get(name, prepare_call)
        prepare(node.operands, env, stack, execute_node)
        ops = len(node.operands)

        target = env.find(name)
        if target is None:
            raise IrlUnboundSymbol(f"Cannot call unbound procedure {name}")
        if isinstance(target, Builtin):
            logger.debug("calling builtin %s with %d operand(s)", name, ops)
            stack.append(target.fn(env, stack, ops))
        elif isinstance(target, Code):
            stack.append(invoke(target, stack, ops, execute_node))
        else:
            raise IrlNotCallable(f"{name} is bound to a value and cannot be called")
    except IrlError as e:
        e.with_form(node)
        raise
