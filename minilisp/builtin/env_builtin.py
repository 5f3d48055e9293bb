"""Built-in functions for the minilisp runtime environment.

This module defines the pair primitives, equality, arithmetic and output
routines exposed to Lisp code, and `register`, which seeds an Environment
with them and with the special forms.

Every routine takes the live Environment and the ordered list of its
operands; the evaluator has already checked the operand count.
"""
from __future__ import annotations

import math
import sys
from typing import Callable

from minilisp import LispValue
from minilisp.debug_utils.pprint import pformat
from minilisp.errors import MiniLispTypeError
from minilisp.evaluation.special_forms import SPECIAL_FORMS
from minilisp.types.atom import Nil, Number, Quote, String
from minilisp.types.environment import Environment
from minilisp.types.sexpr import Cons, cons, datum_to_value, unwrap, value_to_datum


# -------------------------------
# Pairs
# -------------------------------
def cons_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(cons head tail) => a new pair; consing onto a quoted list extends it."""
    head, tail = args
    return Quote(cons(value_to_datum(head), value_to_datum(tail)))


def _as_cons(value: LispValue, name: str) -> Cons:
    if isinstance(value, Quote) and isinstance(value.expr, Cons):
        return value.expr
    raise MiniLispTypeError(f"{name}: expected a cons, got {value.type_name} {value}")


def car(env: Environment, args: list[LispValue]) -> LispValue:
    """First slot of a pair."""
    return datum_to_value(unwrap(_as_cons(args[0], "car").head))


def cdr(env: Environment, args: list[LispValue]) -> LispValue:
    """Second slot of a pair; for a list, the rest of the list."""
    return datum_to_value(unwrap(_as_cons(args[0], "cdr").tail))


# -------------------------------
# Equality
# -------------------------------
def eq(env: Environment, args: list[LispValue]) -> LispValue:
    """Return the canonical true value if both operands are equal, else nil.

    Numbers compare by value, strings by content, quoted data structurally,
    functions by identity.
    """
    lhs, rhs = args
    return env.true_value if lhs == rhs else Nil


# -------------------------------
# Arithmetic
# -------------------------------
def _divide(a: float, b: float) -> float:
    # IEEE semantics instead of ZeroDivisionError
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _binary_op(symbol: str, op: Callable[[float, float], float]):
    def routine(env: Environment, args: list[LispValue]) -> LispValue:
        lhs, rhs = args
        if not (isinstance(lhs, Number) and isinstance(rhs, Number)):
            raise MiniLispTypeError(
                f"expected two numbers in operation '{symbol}', "
                f"got {lhs.type_name} and {rhs.type_name}"
            )
        return Number(op(lhs.value, rhs.value))

    routine.__name__ = f"op_{op.__name__}"
    return routine


add = _binary_op("+", lambda a, b: a + b)
sub = _binary_op("-", lambda a, b: a - b)
mul = _binary_op("*", lambda a, b: a * b)
div = _binary_op("/", _divide)


# -------------------------------
# Output
# -------------------------------
def print_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """Write a value to standard output. Strings are written without quotes."""
    (value,) = args
    text = value.text if isinstance(value, String) else str(value)
    print(text, file=sys.stdout)
    return Nil


def dbg(env: Environment, args: list[LispValue]) -> LispValue:
    """Write the structural dump of a value to the diagnostic stream."""
    (value,) = args
    print(pformat(value), file=sys.stderr)
    return Nil


BUILTINS = {
    "cons": (2, cons_builtin),
    "car": (1, car),
    "cdr": (1, cdr),
    "eq": (2, eq),
    "=": (2, eq),
    "+": (2, add),
    "-": (2, sub),
    "*": (2, mul),
    "/": (2, div),
    "print": (1, print_builtin),
    "dbg": (1, dbg),
}

# Signatures for hover/signature help in the language server
BUILTIN_SIGNATURES: dict[str, str] = {
    "let": "(let name value)",
    "fn": "(fn (params) body)",
    "letfn": "(letfn name (params) body)",
    "if": "(if cond then else)",
    "eval": "(eval expr)",
    "cons": "(cons head tail)",
    "car": "(car pair)",
    "cdr": "(cdr pair)",
    "eq": "(eq a b)",
    "=": "(= a b)",
    "+": "(+ a b)",
    "-": "(- a b)",
    "*": "(* a b)",
    "/": "(/ a b)",
    "print": "(print value)",
    "dbg": "(dbg value)",
}


# -------------------------------
# Registration
# -------------------------------
def register(env: Environment) -> None:
    for name, (arity, routine, lazy) in SPECIAL_FORMS.items():
        env.register_external_fun(name, arity, routine, lazy)
    for name, (arity, routine) in BUILTINS.items():
        env.register_external_fun(name, arity, routine)
    env.update({
        "nil": Nil,
        "t": env.true_value,
        "true": env.true_value,
        "false": Nil,
    })
