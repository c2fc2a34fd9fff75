from io import StringIO
from typing import Iterable

from irl import Node
from irl.evaluation.special_forms import SPECIAL_FORMS
from irl.types.sexpr import SExpr
from irl.types.symbol import Ident, Symbol
from irl.types.values import to_source

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_IDENT = "\033[94m"
COLOR_SYMBOL = "\033[96m"
COLOR_SPECIAL_FORM = "\033[90m"
COLOR_LITERAL = "\033[92m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "indent": 2,
    "color": False,
}


# ----------------- Colorize utility -----------------
def colorize(text: str, color: str, options: dict = DEFAULT_OPTIONS) -> str:
    if not options.get("color", False):
        return text
    return f"{color}{text}{RESET}"


def _label(node: Node, options: dict) -> str:
    if isinstance(node, SExpr):
        color = COLOR_SPECIAL_FORM if node.op.id in SPECIAL_FORMS else COLOR_IDENT
        return "Sexpr " + colorize(node.op.id, color, options)
    if isinstance(node, Ident):
        return "Ident " + colorize(node.id, COLOR_IDENT, options)
    if isinstance(node, Symbol):
        return "Symbol " + colorize(str(node), COLOR_SYMBOL, options)
    if isinstance(node, list):
        return "Array"
    if isinstance(node, tuple):
        return "List"
    return colorize(to_source(node), COLOR_LITERAL, options)


def _dump(node: Node, depth: int, buffer: StringIO, options: dict) -> None:
    buffer.write(" " * (depth * options["indent"]))
    buffer.write(_label(node, options))
    buffer.write("\n")
    if isinstance(node, SExpr):
        children = node.operands
    elif isinstance(node, (list, tuple)):
        children = node
    else:
        return
    for child in children:
        _dump(child, depth + 1, buffer, options)


def pformat(nodes: Iterable[Node], options: dict | None = None) -> str:
    """Indented tree view of a parsed program, one node per line."""
    opts = {**DEFAULT_OPTIONS, **(options or {})}
    with StringIO() as buffer:
        buffer.write("Root\n")
        for node in nodes:
            _dump(node, 1, buffer, opts)
        return buffer.getvalue()
