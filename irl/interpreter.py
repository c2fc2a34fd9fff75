from __future__ import annotations

import logging
import sys

from irl import Node, Value
from irl.builtin.env_builtin import register
from irl.config import FILE_BINDING, Mode, get_default_mode, get_max_depth
from irl.debug_utils.pprint import pformat
from irl.errors import IrlError, IrlRecursionError
from irl.evaluation.evaluator import execute_node
from irl.optimize import optimize
from irl.reader.parser import parse
from irl.types.environment import Environment
from irl.types.nil import Nil

logger = logging.getLogger(__name__)


def ensure_recursion_limit(depth: int) -> None:
    """Raise the Python recursion limit to at least `depth`; never lowers it."""
    if sys.getrecursionlimit() < depth:
        logger.debug("raising recursion limit to %d", depth)
        sys.setrecursionlimit(depth)


class Interpreter:
    """
    Drives one program through the evaluator.
    Owns the root Environment (builtins plus FILE) and the operand stack, which
    is cleared after every top-level form.
    """

    def __init__(self, mode: Mode | None = None):
        self.mode: Mode = mode or get_default_mode()
        ensure_recursion_limit(get_max_depth())
        self.env: Environment = Environment()
        register(self.env)
        self.stack: list[Value] = []
        self.source: str = ""
        self.errors: list[IrlError] = []

    def set_mode(self, mode: Mode) -> None:
        self.mode = mode

    def set_file(self, path: str) -> None:
        self.env.declare(FILE_BINDING, path)

    def load_code(self, code: str) -> None:
        self.source = code

    def _program(self) -> list[Node]:
        nodes = parse(self.source)
        if self.mode != 'debug':
            nodes = optimize(nodes)
        return nodes

    def _execute_form(self, node: Node) -> Value:
        try:
            execute_node(self.env, self.stack, node)
            return self.stack.pop()
        except RecursionError as e:
            raise IrlRecursionError("Maximum evaluation depth exceeded", node) from e
        finally:
            self.stack.clear()

    def run(self) -> Value:
        """Evaluate the loaded program, raising the first error; return the last value."""
        result: Value = Nil
        for node in self._program():
            result = self._execute_form(node)
        return result

    def execute(self) -> int:
        """Evaluate the loaded program form by form and return an exit status.

        An error aborts only the form that raised it: it is logged, kept in
        `self.errors`, and execution continues with the next form.
        """
        logger.debug("execute")
        self.errors = []
        try:
            nodes = self._program()
        except IrlError as e:
            logger.error("%s", e)
            self.errors.append(e)
            return 1
        for node in nodes:
            try:
                self._execute_form(node)
            except IrlError as e:
                logger.error("%s: %s", type(e).__name__, e)
                self.errors.append(e)
        return 1 if self.errors else 0

    def eval(self, code: str) -> Value:
        """Load and run `code` against the live root environment."""
        self.load_code(code)
        return self.run()

    def dump_ast(self) -> str:
        return pformat(parse(self.source))
