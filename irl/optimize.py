"""Tree-to-tree rewrite pass run before execution in release mode.

The passes only fold forms whose result is fixed at read time and which have
no side effects, so a program prints and returns the same things with or
without them:

- (+ 1 2.5)         -> 3.5
- (= 'a 'a)         -> true
- (if true a b)     -> a,  (if false a b) -> b,  (if false a) -> nil

Operands that the evaluator pushes unevaluated as data (array and quoted list
literals, the parameter array of fn, the target of define/set) are never
rewritten. A fold is skipped for an operator name the program could rebind:
a define target, a name inside any array literal (closure parameters), or
every name once the program imports a module.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from irl import Node
from irl.types.nil import Nil, NilType
from irl.types.sexpr import SExpr
from irl.types.symbol import Ident, Symbol
from irl.types.values import is_equal, is_number

logger = logging.getLogger(__name__)

# Operators whose first operand is data, not an expression
_RAW_FIRST_OPERAND = ("define", "set", "fn")


# --- Helpers ---

def _walk(nodes: Iterable[Node]) -> Iterable[Node]:
    for node in nodes:
        yield node
        if isinstance(node, SExpr):
            yield from _walk(node.operands)
        elif isinstance(node, (list, tuple)):
            yield from _walk(node)


def rebound_names(nodes: list[Node]) -> set[str] | None:
    """Names the program may rebind; None when any name may be rebound."""
    names: set[str] = set()
    for node in _walk(nodes):
        if isinstance(node, SExpr):
            if node.op.id == "import":
                return None
            if node.op.id == "define" and node.operands:
                target = node.operands[0]
                if isinstance(target, Ident):
                    names.add(target.id)
                else:
                    # computed name, could be anything
                    return None
        elif isinstance(node, list):
            names.update(item.param_name for item in node if isinstance(item, Ident))
    return names


def _is_scalar_literal(node: Node) -> bool:
    return isinstance(node, (int, float, str, Symbol, NilType))


# --- Individual folding passes ---

def _fold_add(node: SExpr) -> Node:
    if all(is_number(x) for x in node.operands):
        return sum(node.operands)
    return node


def _fold_equal(node: SExpr) -> Node:
    if len(node.operands) >= 2 and all(_is_scalar_literal(x) for x in node.operands):
        first, *others = node.operands
        return all(is_equal(first, other) for other in others)
    return node


def _fold_if(node: SExpr) -> Node:
    if len(node.operands) not in (2, 3) or not isinstance(node.operands[0], bool):
        return node
    cond, on_true, *rest = node.operands
    if cond:
        return on_true
    return rest[0] if rest else Nil


FOLDS: dict[str, Callable[[SExpr], Node]] = {
    "+": _fold_add,
    "=": _fold_equal,
    "if": _fold_if,
}


# --- Driver ---

def _rewrite(node: Node, folds: dict[str, Callable[[SExpr], Node]]) -> Node:
    if not isinstance(node, SExpr):
        return node
    name = node.op.id
    if name in _RAW_FIRST_OPERAND and node.operands:
        operands = [node.operands[0]] + [_rewrite(x, folds) for x in node.operands[1:]]
    else:
        operands = [_rewrite(x, folds) for x in node.operands]
    rewritten = SExpr(node.op, operands)
    fold = folds.get(name)
    if fold is None:
        return rewritten
    result = fold(rewritten)
    if result is not rewritten:
        logger.debug("folded %s -> %s", rewritten, result)
    return result


def optimize(nodes: list[Node]) -> list[Node]:
    """Return an equivalent program with constant forms folded."""
    rebound = rebound_names(nodes)
    if rebound is None:
        logger.debug("program imports or computes names; skipping folds")
        return list(nodes)
    folds = {name: fold for name, fold in FOLDS.items() if name not in rebound}
    return [_rewrite(node, folds) for node in nodes]
