"""Symbolic expressions: a wrapped Atom or a Cons pair of two Atoms.

A syntactic list `(a b c)` is a chain of Cons cells whose head and tail slots
both hold Quotes:

    Cons(Quote(a), Quote(Cons(Quote(b), Quote(Cons(Quote(c), Quote(nil))))))

so every consumer walks a list the same way, by unwrapping Quote. Proper
lists end in `AtomExpr(Nil)`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from minilisp import LispValue, SExpression
from minilisp.errors import MiniLispTypeError
from minilisp.types.atom import Atom, Ident, Nil, NilType, Quote


@dataclass(frozen=True, slots=True)
class AtomExpr:
    atom: Atom

    def __str__(self) -> str:
        return str(self.atom)


@dataclass(frozen=True, slots=True)
class Cons:
    head: Atom
    tail: Atom

    def __str__(self) -> str:
        parts = []
        node: SExpression = self
        while isinstance(node, Cons):
            parts.append(str(unwrap(node.head)))
            node = unwrap(node.tail)
        if not is_nil(node):
            parts.append(".")
            parts.append(str(node))
        return "(" + " ".join(parts) + ")"


NIL_EXPR = AtomExpr(Nil)


def unwrap(atom: Atom) -> SExpression:
    """Return the SExpr held by a Cons slot."""
    if isinstance(atom, Quote):
        return atom.expr
    return AtomExpr(atom)


def is_nil(expr: SExpression) -> bool:
    return isinstance(expr, AtomExpr) and isinstance(expr.atom, NilType)


def cons(head: SExpression, tail: SExpression) -> Cons:
    """Build one list cell with both slots Quote-wrapped."""
    return Cons(Quote(head), Quote(tail))


def make_list(elements: Iterable[SExpression], tail: SExpression = NIL_EXPR) -> SExpression:
    """Build a Quote-wrapped Cons chain from `elements`, ending in `tail`."""
    result = tail
    for element in reversed(list(elements)):
        result = cons(element, result)
    return result


def iter_list(expr: SExpression) -> Iterator[SExpression]:
    """Yield the elements of a proper list.

    Raises MiniLispTypeError when the chain does not end in nil.
    """
    node = expr
    while isinstance(node, Cons):
        yield unwrap(node.head)
        node = unwrap(node.tail)
    if not is_nil(node):
        raise MiniLispTypeError(f"expected a proper list, got {expr}")


def is_list(expr: SExpression) -> bool:
    node = expr
    while isinstance(node, Cons):
        node = unwrap(node.tail)
    return is_nil(node)


# -------------------------------
# Bridging data and values
# -------------------------------
def datum_to_value(expr: SExpression) -> LispValue:
    """Turn a datum into the value it denotes when used as data.

    Self-evaluating atoms come back bare; symbols, quotes and pairs stay
    quoted so they are not mistaken for code.
    """
    if isinstance(expr, AtomExpr) and not isinstance(expr.atom, (Ident, Quote)):
        return expr.atom
    return Quote(expr)


def value_to_datum(value: LispValue) -> SExpression:
    """Inverse of datum_to_value."""
    if isinstance(value, Quote):
        return value.expr
    return AtomExpr(value)

