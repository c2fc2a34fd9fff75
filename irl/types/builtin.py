from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from irl import Value

if TYPE_CHECKING:
    from irl.types.environment import Environment

NativeFn = Callable[["Environment", list, int], Value]


class Builtin:
    """Reference to a native procedure.

    Natives receive the calling environment, the shared operand stack and the
    number of operands the call site pushed; they consume those operands from
    the top of the stack and return exactly one value. Two references are
    equal only when they are the same object.
    """

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: NativeFn):
        self.name = name
        self.fn = fn

    def __call__(self, env: Environment, stack: list, ops: int) -> Value:
        return self.fn(env, stack, ops)

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
