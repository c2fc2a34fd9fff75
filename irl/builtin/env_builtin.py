"""Built-in procedures for the irl runtime environment.

Every builtin has the native signature (env, stack, ops): it pops its `ops`
operands from the top of the shared stack and returns one value, which the
evaluator pushes back. `register` installs the full table into a root
environment.
"""
from __future__ import annotations

import sys
from typing import TextIO

from irl import Value
from irl.config import FILE_BINDING
from irl.errors import (
    IrlArityError,
    IrlIndexError,
    IrlSyntaxError,
    IrlTypeError,
    IrlUnboundSymbol,
)
from irl.builtin.form_builtin import define_builtin, fn_builtin, if_builtin
from irl.evaluation.operand_stack import pop_operands
from irl.modules.module_loader import import_builtin
from irl.types.builtin import Builtin
from irl.types.environment import Environment
from irl.types.nil import Nil
from irl.types.symbol import Ident, Symbol
from irl.types.values import is_equal, is_number, to_source, to_text, type_name


# -------------------------------
# Arithmetic and equality
# -------------------------------
def add(env: Environment, stack: list[Value], ops: int) -> Value:
    """Return the numeric sum of all operands; float if any operand is a float."""
    args = pop_operands(stack, ops)
    for arg in args:
        if not is_number(arg):
            raise IrlTypeError(f"All arguments to + must be numbers, got {to_source(arg)}")
    return sum(args)


def equals(env: Environment, stack: list[Value], ops: int) -> bool:
    """Return true if every operand is structurally equal to the first."""
    if ops < 2:
        raise IrlArityError("= needs at least two operands")
    first, *others = pop_operands(stack, ops)
    for other in others:
        if not is_equal(first, other):
            return False
    return True


# -------------------------------
# Output
# -------------------------------
def write_escaped(text: str, out: TextIO) -> None:
    """Write `text`, interpreting the escapes \\\\, \\n and \\t."""
    buffer: list[str] = []
    escape = False
    for ch in text:
        if escape:
            escape = False
            if ch == "\\":
                buffer.append("\\")
            elif ch == "n":
                out.write("".join(buffer) + "\n")
                buffer.clear()
            elif ch == "t":
                out.write("".join(buffer) + "\t")
                buffer.clear()
            else:
                raise IrlSyntaxError(f"\\{ch} not a valid escape sequence")
        elif ch == "\\":
            escape = True
        else:
            buffer.append(ch)
    if escape:
        raise IrlSyntaxError("unterminated escape sequence")
    out.write("".join(buffer))


def print_builtin(env: Environment, stack: list[Value], ops: int) -> Value:
    """Print each operand with no separator or trailing newline; returns 0."""
    if ops < 1:
        raise IrlArityError("print requires at least 1 argument")
    out = sys.stdout
    for arg in pop_operands(stack, ops):
        if isinstance(arg, str):
            write_escaped(arg, out)
        else:
            out.write(to_text(arg))
    return 0


# -------------------------------
# Arrays
# -------------------------------
def _index(name: str, items: list[Value], idx: Value) -> int:
    """Normalize `idx` against `items`; negative indices count from the end."""
    if not isinstance(idx, int) or isinstance(idx, bool):
        raise IrlTypeError(f"{name} index must be an integer, got {to_source(idx)}")
    n = len(items)
    pos = idx + n if idx < 0 else idx
    if pos < 0 or pos >= n:
        raise IrlIndexError(f"{name}: index {idx} is out of range for array of length {n}")
    return pos


def get(env: Environment, stack: list[Value], ops: int) -> Value:
    """(get array index) -> element."""
    if ops != 2:
        raise IrlArityError("get only takes two values (array and index)")
    arr, idx = pop_operands(stack, ops)
    if not isinstance(arr, list):
        raise IrlTypeError(f"get expects an array, got {to_source(arr)}")
    return arr[_index("get", arr, idx)]


def set_builtin(env: Environment, stack: list[Value], ops: int) -> Value:
    """(set name index value): rebind `name` to a copy of its array with one slot replaced.

    `name` is rebound in the nearest scope that holds it. A literal array in
    place of the name leaves nothing to rebind, so the call does nothing.
    """
    if ops != 3:
        raise IrlArityError("set only takes three values (array, index, value)")
    target, idx, value = pop_operands(stack, ops)
    if isinstance(target, list):
        return Nil
    if not isinstance(target, Ident):
        raise IrlTypeError(f"set target must be an identifier, got {to_source(target)}")
    arr = env.find(target.id)
    if arr is None:
        raise IrlUnboundSymbol(f"Cannot set unbound symbol {target.id}")
    if not isinstance(arr, list):
        raise IrlTypeError(f"set target {target.id} is not an array")
    items = list(arr)
    items[_index("set", items, idx)] = value
    env.replace(target.id, items)
    return Nil


def length(env: Environment, stack: list[Value], ops: int) -> Value:
    """(len array) -> element count."""
    if ops != 1:
        raise IrlArityError("len only takes one value (array)")
    (arr,) = pop_operands(stack, ops)
    if not isinstance(arr, list):
        raise IrlTypeError(f"len expects an array, got {to_source(arr)}")
    return len(arr)


# -------------------------------
# Reflection
# -------------------------------
def type_builtin(env: Environment, stack: list[Value], ops: int) -> Value:
    """(type x) -> symbol naming the runtime tag of x."""
    if ops != 1:
        raise IrlArityError("type only takes one object")
    (obj,) = pop_operands(stack, ops)
    return Symbol(type_name(obj))


BUILTINS = {
    name: Builtin(name, fn)
    for name, fn in {
        "+": add,
        "=": equals,
        "print": print_builtin,
        "if": if_builtin,
        "define": define_builtin,
        "fn": fn_builtin,
        "get": get,
        "set": set_builtin,
        "len": length,
        "import": import_builtin,
        "type": type_builtin,
    }.items()
}


def register(env: Environment) -> None:
    """Register all builtin procedures and the FILE binding into the given environment."""
    env.declare(FILE_BINDING, "")
    env.update(BUILTINS)
