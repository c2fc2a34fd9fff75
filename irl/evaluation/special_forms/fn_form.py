from irl import EvaluatorFn, Node
from irl.types.environment import Environment


def prepare_fn(
    operands: list[Node],
    env: Environment,
    stack: list,
    evaluate_fn: EvaluatorFn,
) -> None:
    """
    (fn [params...] body...)
    Nothing is evaluated: the parameter array and the body forms are pushed as
    raw nodes for the `fn` builtin to capture.
    """
    stack.extend(operands)
