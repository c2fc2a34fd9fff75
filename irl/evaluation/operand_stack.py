"""Helpers for the shared operand stack.

A call site pushes its operands onto the stack; the procedure it resolves to
consumes them by position from the top. The stack is one Python list per
top-level form and is passed by reference through every nested evaluation.
"""

from __future__ import annotations

from irl import Value


def pop_operands(stack: list[Value], ops: int) -> list[Value]:
    """Remove and return the top `ops` values, oldest first."""
    if ops <= 0:
        return []
    operands = stack[-ops:]
    del stack[-ops:]
    return operands


def trim(stack: list[Value], depth: int) -> None:
    """Discard everything above one value past `depth`."""
    del stack[depth + 1:]
