"""Runtime environment for irl.

An Environment maps names to bindings (a value or a native Builtin) and links
to an optional outer scope. Closures keep a reference to the environment they
were created in, so several child scopes may share one outer environment.
Outer links always point at environments that already exist, so the chain is
acyclic.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Mapping, Optional, Union

from irl import Value
from irl.errors import IrlTypeError
from irl.types.builtin import Builtin

logger = logging.getLogger(__name__)

Binding = Union[Value, Builtin]


class Environment:
    """Hierarchical mapping from names to bindings."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Binding] = {}
        self.outer: Environment | None = outer

    def declare(self, name: str, value: Binding) -> None:
        """Bind `name` in this scope, shadowing any outer binding of the same name."""
        if not isinstance(name, str):
            raise IrlTypeError(f"Cannot declare {name!r} as a name")
        self.vars[name] = value

    def find_scope(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def find(self, name: str) -> Optional[Binding]:
        """Return the nearest binding of `name`, or None when it is bound nowhere."""
        env = self.find_scope(name)
        if env is None:
            return None
        return env.vars[name]

    def replace(self, name: str, value: Binding) -> bool:
        """Rebind `name` in the nearest scope that already holds it.

        Returns False, leaving every scope untouched, when no scope holds `name`.
        """
        env = self.find_scope(name)
        if env is None:
            return False
        env.vars[name] = value
        logger.debug("replaced %s in env %x", name, id(env))
        return True

    def update(self, mapping: Mapping[str, Binding]) -> None:
        """Bulk-declare a mapping of name -> binding in the current frame."""
        for k, v in mapping.items():
            self.declare(k, v)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env: Optional[Environment] = self
            chain = []
            while env is not None:
                with StringIO() as env_buf:
                    env._write_vars(env_buf)
                    chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
