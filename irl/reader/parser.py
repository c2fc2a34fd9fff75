"""
  irl Reader, Lexer and Parser

- Streaming, lazy parsing
- Emits Python primitives and the small node classes from irl.types:

    - (op a b)   -> SExpr(Ident("op"), [a, b])
    - [a b]      -> Python list (array literal, elements left unevaluated)
    - '(a b)     -> Python tuple (quoted list literal)
    - 'name      -> Symbol
    - "text"     -> str, backslash escapes kept verbatim (print interprets them)
    - true/false -> bool
    - nil        -> Nil
    - numbers    -> int/float
    - anything else -> Ident
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

from irl import Node
from irl.errors import IrlSyntaxError
from irl.types.nil import Nil
from irl.types.sexpr import SExpr
from irl.types.symbol import Ident, Symbol

Token = tuple[str, str, int]

TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbracket>\[)"  # [
    r"|(?P<rbracket>\])"  # ]
    r"|(?P<quote>')"  # 'sym and '(...)
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<atom>[^\s()\[\]\'",;]+)',  # numbers, booleans, nil, identifiers
    re.DOTALL,
)
SEPARATOR_RE = re.compile(r"[\s,]+")

INT_RE = re.compile(r"[+-]?\d+")
FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")

CLOSERS = {"rparen": ")", "rbracket": "]"}


def _position(source: str, pos: int) -> str:
    line = source.count("\n", 0, pos) + 1
    col = pos - (source.rfind("\n", 0, pos) + 1) + 1
    return f"line {line}, column {col}"


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields (token_type, token_value, offset) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        sep = SEPARATOR_RE.match(source, pos)
        if sep:
            pos = sep.end()
            continue
        m = TOKEN_RE.match(source, pos)
        if not m:
            if source[pos] == '"':
                raise IrlSyntaxError(f"Unterminated string at {_position(source, pos)}")
            raise IrlSyntaxError(f"Unexpected char at {_position(source, pos)}: {source[pos]!r}")
        kind = m.lastgroup
        if kind != "comment":
            yield kind, m.group(kind), pos
        pos = m.end()


def parse_atom(text: str) -> Node:
    if text == "true":
        return True
    if text == "false":
        return False
    if text == "nil":
        return Nil
    if INT_RE.fullmatch(text):
        return int(text)
    if FLOAT_RE.fullmatch(text):
        return float(text)
    return Ident(text)


class TokenStream:
    def __init__(self, token_iter: Iterable[Token], source: str = ""):
        self.tokens = iter(token_iter)
        self.source = source
        self.buffer: list[Token] = []

    def peek(self) -> tuple[Optional[str], Optional[str], int]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None, len(self.source)
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str], int]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None, len(self.source)))

    def _where(self, pos: int) -> str:
        return _position(self.source, pos) if self.source else f"offset {pos}"

    def _parse_items(self, closer: str, opened_at: int) -> list[Node]:
        items: list[Node] = []
        while True:
            tok_type, tok_val, pos = self.peek()
            if tok_type is None:
                raise IrlSyntaxError(
                    f"Unmatched '{'(' if closer == 'rparen' else '['}' opened at {self._where(opened_at)}"
                )
            if tok_type == closer:
                self.advance()
                return items
            if tok_type in CLOSERS:
                raise IrlSyntaxError(f"Mismatched '{tok_val}' at {self._where(pos)}")
            items.append(self.parse_expr())

    def parse_expr(self) -> Node:
        tok_type, tok_val, pos = self.advance()
        if tok_type is None:
            raise IrlSyntaxError("Unexpected end of input")

        if tok_type == "atom":
            return parse_atom(tok_val)

        # String: drop the quotes, keep escapes for print
        if tok_type == "string":
            return tok_val[1:-1]

        # S-expression
        if tok_type == "lparen":
            items = self._parse_items("rparen", pos)
            if not items:
                raise IrlSyntaxError(f"Empty s-expression at {self._where(pos)}")
            op, *operands = items
            if not isinstance(op, Ident):
                raise IrlSyntaxError(
                    f"Operator must be an identifier, got {op!r} at {self._where(pos)}"
                )
            return SExpr(op, operands)

        # Array literal
        if tok_type == "lbracket":
            return self._parse_items("rbracket", pos)

        # Quote forms
        if tok_type == "quote":
            next_type, next_val, next_pos = self.advance()
            if next_type == "atom":
                return Symbol(next_val)
            if next_type == "lparen":
                return tuple(self._parse_items("rparen", next_pos))
            raise IrlSyntaxError(f"Expected a name or '(' after quote at {self._where(pos)}")

        if tok_type in CLOSERS:
            raise IrlSyntaxError(f"Unexpected '{tok_val}' at {self._where(pos)}")

        raise IrlSyntaxError(f"Unknown token: {tok_type} {tok_val}")

    def parse_all(self) -> Iterator[Node]:
        while True:
            tok_type, _, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def parse(source: str) -> list[Node]:
    """Parse a whole program into its top-level nodes."""
    return list(TokenStream(lex(source), source).parse_all())
