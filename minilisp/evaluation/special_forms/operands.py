"""Helpers shared by special forms to read their unevaluated operands.

A lazy operand arrives as the value `datum_to_value` made of its syntax, so
`value_to_datum` gives the syntax back. Operands written in the explicitly
quoted style, `(let 'x 1)` or `(fn '(a) '(+ a 1))`, carry one extra Quote
that `strip_quote` removes.
"""

from __future__ import annotations

from minilisp import LispValue, SExpression
from minilisp.errors import MiniLispValueError
from minilisp.types.atom import Ident, Quote
from minilisp.types.sexpr import AtomExpr, Cons, is_nil, unwrap, value_to_datum


def syntax_of(operand: LispValue) -> SExpression:
    return value_to_datum(operand)


def is_quoted(expr: SExpression) -> bool:
    return isinstance(expr, AtomExpr) and isinstance(expr.atom, Quote)


def strip_quote(expr: SExpression) -> SExpression:
    if is_quoted(expr):
        return expr.atom.expr
    return expr


def symbol_name(operand: LispValue, form: str) -> str:
    """Name of a symbol operand, bare (`x`) or quoted (`'x`)."""
    expr = strip_quote(syntax_of(operand))
    if isinstance(expr, AtomExpr) and isinstance(expr.atom, Ident):
        return expr.atom.name
    raise MiniLispValueError(f"{form}: expected a symbol, got {operand}")


def parameter_names(expr: SExpression, form: str) -> tuple[str, ...]:
    """Read a parameter list such as `(a b c)`; `()` means no parameters."""
    names: list[str] = []
    node = expr
    while isinstance(node, Cons):
        param = unwrap(node.head)
        if not (isinstance(param, AtomExpr) and isinstance(param.atom, Ident)):
            raise MiniLispValueError(f"{form}: expected argument name, got {param}")
        if param.atom.name in names:
            raise MiniLispValueError(f"{form}: duplicate argument name '{param.atom.name}'")
        names.append(param.atom.name)
        node = unwrap(node.tail)
    if not is_nil(node):
        raise MiniLispValueError(f"{form}: expected arguments, got {expr}")
    return tuple(names)
