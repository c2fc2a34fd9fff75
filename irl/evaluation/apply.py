"""Closure invocation for irl.

A call to a Code value takes its already-evaluated arguments from the top of
the shared stack, binds them in a fresh child of the closure's captured
environment and evaluates the body forms there in order.

Binding rules:
- Plain parameters bind one argument each, in declaration order.
- A trailing rest parameter (`name...`) binds every remaining argument as an
  array, possibly empty.
- Without a rest parameter, surplus trailing arguments are dropped.
- Missing arguments for plain parameters raise IrlArityError.
"""

from __future__ import annotations

import logging

from irl import EvaluatorFn, Value
from irl.errors import IrlArityError
from irl.evaluation.operand_stack import pop_operands
from irl.types.code import Code
from irl.types.environment import Environment
from irl.types.nil import Nil
from irl.types.symbol import Ident
from irl.types.values import to_source

logger = logging.getLogger(__name__)


def check_params(params: list) -> list[Ident]:
    """Validate a parameter list: identifiers only, at most one rest parameter, last."""
    for i, param in enumerate(params):
        if not isinstance(param, Ident):
            raise IrlArityError(f"Malformed parameter list: {to_source(param)} is not a name")
        if param.is_rest:
            if not param.param_name:
                raise IrlArityError("Malformed parameter list: rest marker must follow a name")
            if i != len(params) - 1:
                raise IrlArityError(
                    f"Malformed parameter list: rest parameter {param} must be last"
                )
    return params


def bind_arguments(
    params: list[Ident],
    supplied: list[Value],
    closure_env: Environment,
) -> Environment:
    """Return a new Environment, child of `closure_env`, with `params` bound."""
    local_env = Environment(outer=closure_env)
    for i, param in enumerate(params):
        if param.is_rest:
            local_env.declare(param.param_name, list(supplied[i:]))
            return local_env
        if i >= len(supplied):
            missing = [p.param_name for p in params[i:] if not p.is_rest]
            raise IrlArityError(
                f"Too few arguments; missing {len(missing)} parameter(s): {missing}"
            )
        local_env.declare(param.id, supplied[i])
    return local_env


def invoke(fn: Code, stack: list[Value], ops: int, evaluate_fn: EvaluatorFn) -> Value:
    """Call `fn` with the top `ops` stack values as arguments; return the last body value."""
    args = pop_operands(stack, ops)
    params = check_params(fn.params)
    has_rest = bool(params) and params[-1].is_rest
    if not has_rest and len(args) > len(params):
        logger.debug("dropping %d surplus argument(s)", len(args) - len(params))
        args = args[: len(params)]

    local_env = bind_arguments(params, args, fn.env)
    logger.debug("invoking %s with %s", fn, local_env)

    result: Value = Nil
    for form in fn.body:
        evaluate_fn(local_env, stack, form)
        result = stack.pop()
    return result
