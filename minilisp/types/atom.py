"""Atoms: the leaf values of minilisp.

Every runtime value is an Atom. Atoms are immutable; equality is structural
for literals, symbols and quoted data, and by identity for functions.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from decimal import Decimal

from minilisp import SExpression


class Atom:
    """Base class for the closed family of atom kinds."""

    __slots__ = ()
    type_name = "atom"


@dataclass(frozen=True, slots=True)
class String(Atom):
    text: str
    type_name = "string"

    def __str__(self) -> str:
        return '"' + escape_string(self.text) + '"'


@dataclass(frozen=True, slots=True)
class Number(Atom):
    value: float
    type_name = "number"

    def __post_init__(self):
        object.__setattr__(self, "value", float(self.value))

    # NaN is never equal to itself, even when it is the same float object.
    def __eq__(self, other) -> bool:
        return isinstance(other, Number) and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True, slots=True)
class Quote(Atom):
    """Wraps one SExpr as data; evaluating a Quote yields the Quote itself."""

    expr: SExpression
    type_name = "quote"

    def __str__(self) -> str:
        return f"'{self.expr}"


@dataclass(frozen=True, slots=True)
class Ident(Atom):
    name: str
    type_name = "ident"

    def __post_init__(self):
        # Intern to ensure fast equality/hash and reduce memory
        object.__setattr__(self, "name", sys.intern(self.name))

    def __str__(self) -> str:
        return self.name


class NilType(Atom):
    __slots__ = ()
    type_name = "nil"

    def __repr__(self): return "nil"
    def __str__(self): return "nil"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, NilType)

    def __hash__(self):
        return hash(NilType)


Nil = NilType()


# -------------------------------
# Display helpers
# -------------------------------
_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\0": "\\0",
}


def escape_string(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def format_number(value: float) -> str:
    """Render a double so the reader can read it back.

    Integral values drop the trailing `.0`, and no exponent notation is used.
    """
    if value != value or value in (float("inf"), float("-inf")):
        return str(value)
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")
