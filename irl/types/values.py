"""Runtime tags, structural equality and text forms for irl values."""

from __future__ import annotations

from irl import Value
from irl.errors import IrlTypeError
from irl.types.code import Code
from irl.types.nil import NilType
from irl.types.sexpr import SExpr
from irl.types.symbol import Ident, Symbol

# Maximum number of fractional digits used when printing floats
FLOAT_DIGITS = 15


def _tag(x: Value) -> str | None:
    # bool is checked before int: it is a subclass of int in Python
    match x:
        case bool():
            return "boolean"
        case int():
            return "integer"
        case float():
            return "float"
        case list():
            return "array"
        case tuple():
            return "list"
        case str():
            return "string"
        case Symbol():
            return "symbol"
        case Code():
            return "code"
        case NilType():
            return "nil"
        case Ident():
            return "ident"
        case SExpr():
            return "sexpr"
    return None


def type_name(x: Value) -> str:
    """Name of the runtime tag of `x`, as reported by the `type` builtin."""
    tag = _tag(x)
    if tag is None or tag in ("ident", "sexpr"):
        raise IrlTypeError(f"type: {to_source(x)} has no runtime type")
    return tag


def is_number(x: Value) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def is_equal(a: Value, b: Value) -> bool:
    """Structural equality; values with different tags are never equal."""
    if a is b:
        return True
    tag = _tag(a)
    if tag != _tag(b):
        return False
    if tag in ("array", "list"):
        if len(a) != len(b):
            return False
        return all(is_equal(x, y) for x, y in zip(a, b))
    return a == b


def format_float(x: float) -> str:
    text = f"{x:.{FLOAT_DIGITS}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def to_source(x: Value) -> str:
    """Render a value or node back to source syntax."""
    match x:
        case bool():
            return "true" if x else "false"
        case str():
            return f'"{x}"'
        case list():
            return "[" + " ".join(to_source(i) for i in x) + "]"
        case tuple():
            return "'(" + " ".join(to_source(i) for i in x) + ")"
        case float():
            return repr(x)
    return str(x)


def _item_text(x: Value) -> str:
    # Strings stay quoted and raw nodes keep their source form inside arrays
    if isinstance(x, (int, float, list, tuple, Symbol, NilType)):
        return to_text(x)
    return to_source(x)


def to_text(x: Value) -> str:
    """Canonical printed form of a non-string value."""
    match x:
        case bool():
            return "true" if x else "false"
        case int():
            return str(x)
        case float():
            return format_float(x)
        case Symbol() | NilType():
            return str(x)
        case list():
            return "[" + " ".join(_item_text(i) for i in x) + "]"
        case tuple():
            return "'(" + " ".join(_item_text(i) for i in x) + ")"
    raise IrlTypeError(f"print: cannot print {type_name(x)} value {to_source(x)}")
