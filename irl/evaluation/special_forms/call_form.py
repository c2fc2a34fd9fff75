from irl import EvaluatorFn, Node
from irl.types.environment import Environment


def prepare_call(
    operands: list[Node],
    env: Environment,
    stack: list,
    evaluate_fn: EvaluatorFn,
) -> None:
    """Ordinary call: every operand is evaluated left to right."""
    for operand in operands:
        evaluate_fn(env, stack, operand)
