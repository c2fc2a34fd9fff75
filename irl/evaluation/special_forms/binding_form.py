from irl import EvaluatorFn, Node
from irl.types.environment import Environment


def prepare_binding(
    operands: list[Node],
    env: Environment,
    stack: list,
    evaluate_fn: EvaluatorFn,
) -> None:
    """
    (define name value) / (set name index value)
    The target is pushed unevaluated so the builtin sees the identifier itself;
    the remaining operands are evaluated normally.
    """
    if not operands:
        return
    stack.append(operands[0])
    for operand in operands[1:]:
        evaluate_fn(env, stack, operand)
