from __future__ import annotations

from io import StringIO

from irl import Node
from irl.types.symbol import Ident


class SExpr:
    """An unevaluated call form `(op operand...)`; the operator is always an identifier."""

    __slots__ = ("op", "operands")

    def __init__(self, op: Ident, operands: list[Node] | None = None):
        self.op: Ident = op
        self.operands: list[Node] = list(operands) if operands is not None else []

    def __eq__(self, other) -> bool:
        from irl.types.values import is_equal

        # Operands compare by runtime tag, so 1, 1.0 and true stay distinct
        return (
            isinstance(other, SExpr)
            and self.op == other.op
            and is_equal(self.operands, other.operands)
        )

    __hash__ = None

    def __str__(self) -> str:
        from irl.types.values import to_source

        with StringIO() as buffer:
            buffer.write("(")
            buffer.write(self.op.id)
            for operand in self.operands:
                buffer.write(" ")
                buffer.write(to_source(operand))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"SExpr({self.op.id!r}, {self.operands!r})"
