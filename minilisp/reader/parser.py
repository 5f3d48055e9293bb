"""
  Lisp Reader

- Recursive descent over a ParenScanner, one character at a time
- Emits explicit tree nodes (minilisp.types):

    - lists       -> Quote-wrapped Cons chains ending in nil
    - ()  / nil   -> Nil
    - symbols     -> Ident
    - strings     -> String (escapes decoded)
    - numbers     -> Number (IEEE double)
    - 'x          -> Quote(x)

  Grammar:

    sexpr  := list | atom
    list   := '(' sexpr* ')'
    atom   := string | number | quote | ident
    number := digit+ ('.' digit+)?
    ident  := (alpha | symbolchar) (alnum | symbolchar)*
    comment:= ';' to end of line

- Errors are MiniLispSyntaxError carrying the character offset; there is no
  resynchronization after an error.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from minilisp import SExpression
from minilisp.errors import MiniLispSyntaxError
from minilisp.reader.scanner import ParenScanner
from minilisp.types.atom import Atom, Ident, Nil, Number, Quote, String
from minilisp.types.sexpr import AtomExpr, make_list

IDENT_CHARS = "_+-/*=?"

NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?")

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
}


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch in IDENT_CHARS


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch in IDENT_CHARS


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Reader:
    def __init__(self, source: str, chars: Optional[ParenScanner] = None):
        self.source = source
        self.chars = chars if chars is not None else ParenScanner(source)
        self.nested = chars is not None

    def peek(self) -> Optional[str]:
        return self.chars.peek()

    def advance(self) -> Optional[str]:
        return self.chars.advance()

    def error(self, msg: str, offset: Optional[int] = None) -> MiniLispSyntaxError:
        if offset is None:
            offset = self.chars.offset
        return MiniLispSyntaxError(msg, self.source, offset)

    def skip_whitespace(self) -> None:
        """Skip whitespace and `;` comments."""
        while (ch := self.peek()) is not None:
            if ch == ";":
                while (ch := self.peek()) is not None and ch != "\n":
                    self.advance()
            elif ch.isspace():
                self.advance()
            else:
                return

    # ------------------------
    # Atoms
    # ------------------------
    def parse_string(self) -> String:
        start = self.chars.offset
        self.advance()  # opening quote
        out: list[str] = []
        while True:
            ch = self.advance()
            if ch is None:
                raise self.error("unterminated string literal", start)
            if ch == '"':
                return String("".join(out))
            if ch == "\\":
                esc = self.advance()
                if esc is None:
                    raise self.error("unterminated string literal", start)
                out.append(ESCAPES.get(esc, esc))
            else:
                out.append(ch)

    def parse_number(self) -> Number:
        start = self.chars.offset
        chars: list[str] = []
        # Read the whole token so malformed numbers like 1.2.3 or 12abc are rejected
        while (ch := self.peek()) is not None and (_is_ident_char(ch) or ch == "."):
            chars.append(ch)
            self.advance()
        tok = "".join(chars)
        if not NUMBER_RE.fullmatch(tok):
            raise self.error(f"number in wrong format '{tok}'", start)
        return Number(float(tok))

    def parse_ident(self) -> Atom:
        chars: list[str] = []
        while (ch := self.peek()) is not None and _is_ident_char(ch):
            chars.append(ch)
            self.advance()
        name = "".join(chars)
        if name == "nil":
            return Nil
        return Ident(name)

    def parse_atom(self) -> Atom:
        ch = self.peek()
        if ch is None:
            raise self.error("unexpected end of input")
        if ch == '"':
            return self.parse_string()
        if ch == "'":
            self.advance()
            return Quote(self.parse_sexpr())
        if _is_digit(ch):
            return self.parse_number()
        if _is_ident_start(ch):
            return self.parse_ident()
        if ch.isspace():
            raise self.error("unexpected whitespace")
        raise self.error(f"unexpected char '{ch}'")

    # ------------------------
    # Expressions
    # ------------------------
    def parse_sexpr(self) -> SExpression:
        self.skip_whitespace()
        ch = self.peek()
        if ch is None:
            if self.chars.at_end:
                raise self.error("unexpected end of input")
            raise self.error("unexpected closing paren")

        if ch == "(":
            self.advance()
            sub_reader = Reader(self.source, self.chars.sub_scanner())
            items = sub_reader.parse_sexprs()
            self.chars.merge(sub_reader.chars)
            if self.peek() != ")":
                raise self.error("unexpected end of input: expected a closing paren")
            self.advance()
            return make_list(items)

        return AtomExpr(self.parse_atom())

    def iter_sexprs(self) -> Iterator[SExpression]:
        """Lazily yield every expression up to the end of this stream."""
        while True:
            self.skip_whitespace()
            if self.peek() is None:
                break
            yield self.parse_sexpr()
        if not self.nested and not self.chars.at_end:
            raise self.error("unmatched closing paren")

    def parse_sexprs(self) -> list[SExpression]:
        return list(self.iter_sexprs())


def read(source: str) -> SExpression:
    """Read exactly one expression from `source`."""
    reader = Reader(source)
    expr = reader.parse_sexpr()
    reader.skip_whitespace()
    if not reader.chars.at_end:
        if reader.peek() is None:
            raise reader.error("unmatched closing paren")
        raise reader.error("expected a single expression")
    return expr


def read_all(source: str) -> list[SExpression]:
    """Read every top-level expression in `source`."""
    return Reader(source).parse_sexprs()
