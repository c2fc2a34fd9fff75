from __future__ import annotations
import sys

from irl.config import REST_MARKER


class Symbol:
    """A quoted symbol value, written 'name in source."""

    __slots__ = ("id",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash and reduce memory
        self.id = sys.intern(name)

    def __eq__(self, other: Symbol) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(("symbol", self.id))

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return f"'{self.id}"


class Ident:
    """An identifier node; resolved through the environment when evaluated."""

    __slots__ = ("id",)

    def __init__(self, name: str):
        self.id = sys.intern(name)

    def __eq__(self, other: Ident) -> bool:
        return isinstance(other, Ident) and self.id == other.id

    def __hash__(self) -> int:
        return hash(("ident", self.id))

    @property
    def is_rest(self) -> bool:
        return self.id.endswith(REST_MARKER)

    @property
    def param_name(self) -> str:
        """Name bound by this identifier when used as a closure parameter."""
        if self.is_rest:
            return self.id[: -len(REST_MARKER)]
        return self.id

    def __repr__(self):
        return f"Ident({self.id!r})"

    def __str__(self):
        return self.id
