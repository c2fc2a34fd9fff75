"""Closure representation for irl."""

from __future__ import annotations

from io import StringIO

from irl import Node
from irl.types.environment import Environment


class Code:
    """A user-defined closure: parameter list, body forms and captured environment."""

    __slots__ = ("params", "body", "env")

    def __init__(self, params: list[Node], body: list[Node], env: Environment):
        self.params: list[Node] = params
        self.body: list[Node] = body
        # Captured by reference; the defining scope is shared, never copied
        self.env: Environment = env

    def __eq__(self, other) -> bool:
        from irl.types.values import is_equal

        return (
            isinstance(other, Code)
            and self.env is other.env
            and is_equal(self.params, other.params)
            and is_equal(self.body, other.body)
        )

    __hash__ = None

    def __str__(self) -> str:
        from irl.types.values import to_source

        with StringIO() as buffer:
            buffer.write("(fn [")
            buffer.write(" ".join(to_source(p) for p in self.params))
            buffer.write("]")
            for form in self.body:
                buffer.write(" ")
                buffer.write(to_source(form))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)
