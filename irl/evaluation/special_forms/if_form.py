from irl import EvaluatorFn, Node
from irl.types.environment import Environment


def prepare_if(
    operands: list[Node],
    env: Environment,
    stack: list,
    evaluate_fn: EvaluatorFn,
) -> None:
    # Only the condition is evaluated here; the branches stay raw so that the
    # `if` builtin evaluates just the one it selects.
    if not operands:
        return
    evaluate_fn(env, stack, operands[0])
    stack.extend(operands[1:])
