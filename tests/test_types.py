import dataclasses
import math

import pytest

from minilisp.errors import MiniLispTypeError
from minilisp.reader.parser import read
from minilisp.types.atom import Ident, Nil, NilType, Number, Quote, String, format_number
from minilisp.types.function import Lib, UserDefined
from minilisp.types.sexpr import (
    NIL_EXPR,
    AtomExpr,
    Cons,
    cons,
    datum_to_value,
    is_list,
    iter_list,
    make_list,
    value_to_datum,
)


def sym(name):
    return AtomExpr(Ident(name))


# -------------------------------
# Equality
# -------------------------------
def test_number_equality_by_value():
    assert Number(1) == Number(1.0)
    assert Number(1) != Number(2)
    assert hash(Number(3)) == hash(Number(3.0))


def test_nan_is_never_equal():
    nan = Number(math.nan)
    assert nan != nan
    assert nan != Number(math.nan)


def test_string_and_ident_equality():
    assert String("a") == String("a")
    assert String("a") != String("b")
    assert Ident("a") == Ident("a")
    assert String("a") != Ident("a")


def test_quote_equality_is_structural():
    assert Quote(read("(1 2)")) == Quote(read("(1 2)"))
    assert Quote(read("(1 2)")) != Quote(read("(1 3)"))
    assert Quote(sym("x")) != Quote(AtomExpr(Quote(sym("x"))))


def test_nil_is_singleton_like():
    assert Nil == NilType()
    assert not Nil
    assert Nil != Number(0)


def test_functions_compare_by_identity():
    body = read("(+ a 1)")
    f = UserDefined(("a",), body)
    g = UserDefined(("a",), body)
    assert f == f
    assert f != g

    routine = lambda env, args: Nil
    assert Lib("x", 0, routine) != Lib("x", 0, routine)


def test_atoms_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        String("a").text = "b"
    with pytest.raises(dataclasses.FrozenInstanceError):
        Number(1).value = 2.0


# -------------------------------
# Display
# -------------------------------
@pytest.mark.parametrize(
    "value, expected",
    [
        (Number(42), "42"),
        (Number(-3), "-3"),
        (Number(2.5), "2.5"),
        (Number(1e21), "1000000000000000000000"),
        (Number(1e-7), "0.0000001"),
        (Number(math.inf), "inf"),
        (Number(math.nan), "nan"),
        (String("hi"), '"hi"'),
        (String('a"b\n'), r'"a\"b\n"'),
        (Ident("foo"), "foo"),
        (Nil, "nil"),
        (Quote(sym("x")), "'x"),
        (Quote(read("(1 (2) \"s\")")), "'(1 (2) \"s\")"),
        (Quote(AtomExpr(Quote(sym("x")))), "''x"),
        (UserDefined(("a", "b"), read("(+ a b)")), "<fn (a b)>"),
        (Lib("+", 2, lambda env, args: Nil), "<lib + 2>"),
    ]
)
def test_display(value, expected):
    assert str(value) == expected


def test_improper_pair_display():
    assert str(cons(AtomExpr(Number(1)), AtomExpr(Number(2)))) == "(1 . 2)"
    assert str(make_list([sym("a")], tail=sym("b"))) == "(a . b)"


def test_format_number_reads_back():
    for value in (0.1, 123.456, 1e-10, 2.0 ** 60):
        assert float(format_number(value)) == value


def test_describe():
    assert UserDefined(("a",), NIL_EXPR).describe() == "user function with 1 arguments"
    assert Lib("car", 1, lambda env, args: Nil).describe() == "lib function 'car' with 1 arguments"


# -------------------------------
# Lists
# -------------------------------
def test_make_list_empty_is_nil():
    assert make_list([]) == NIL_EXPR


def test_iter_list():
    assert list(iter_list(read("(a 1)"))) == [sym("a"), AtomExpr(Number(1))]
    assert list(iter_list(NIL_EXPR)) == []


def test_iter_list_rejects_improper_list():
    with pytest.raises(MiniLispTypeError):
        list(iter_list(cons(sym("a"), sym("b"))))


def test_is_list():
    assert is_list(read("(a b)"))
    assert is_list(NIL_EXPR)
    assert not is_list(sym("a"))
    assert not is_list(cons(sym("a"), sym("b")))


def test_cons_cells_hold_quotes():
    cell = cons(sym("a"), NIL_EXPR)
    assert cell == Cons(Quote(sym("a")), Quote(NIL_EXPR))


# -------------------------------
# Data <-> values
# -------------------------------
@pytest.mark.parametrize(
    "datum, value",
    [
        (AtomExpr(Number(1)), Number(1)),
        (AtomExpr(String("s")), String("s")),
        (NIL_EXPR, Nil),
        (sym("a"), Quote(sym("a"))),
        (AtomExpr(Quote(sym("a"))), Quote(AtomExpr(Quote(sym("a"))))),
        (read("(1 2)"), Quote(read("(1 2)"))),
    ]
)
def test_datum_bridge(datum, value):
    assert datum_to_value(datum) == value
    assert value_to_datum(value) == datum
