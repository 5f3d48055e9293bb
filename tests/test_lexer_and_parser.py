import pytest
from hypothesis import given, strategies as st

from minilisp.errors import MiniLispSyntaxError
from minilisp.reader.parser import Reader, read, read_all
from minilisp.types.atom import Ident, Nil, Number, Quote, String
from minilisp.types.sexpr import NIL_EXPR, AtomExpr, Cons, make_list


def sym(name):
    return AtomExpr(Ident(name))


def num(value):
    return AtomExpr(Number(value))


@pytest.mark.parametrize(
    "source, expected",
    [
        ("42", num(42)),
        ("3.25", num(3.25)),
        ("007", num(7)),
        ('"hello"', AtomExpr(String("hello"))),
        ("foo", sym("foo")),
        ("null?", sym("null?")),
        ("a-b_c", sym("a-b_c")),
        ("-3", sym("-3")),
        ("*", sym("*")),
        ("nil", NIL_EXPR),
        ("()", NIL_EXPR),
        ("( )", NIL_EXPR),
        ("'a", AtomExpr(Quote(sym("a")))),
        ("''a", AtomExpr(Quote(AtomExpr(Quote(sym("a")))))),
        ("(a b)", make_list([sym("a"), sym("b")])),
        ("(a (b) c)", make_list([sym("a"), make_list([sym("b")]), sym("c")])),
        ("'(1 2)", AtomExpr(Quote(make_list([num(1), num(2)])))),
        ("('x)", make_list([AtomExpr(Quote(sym("x")))])),
    ]
)
def test_parser(source, expected):
    assert read(source) == expected


def test_list_cells_are_quote_wrapped():
    expected = Cons(
        Quote(sym("+")),
        Quote(Cons(
            Quote(num(1)),
            Quote(Cons(Quote(num(2)), Quote(AtomExpr(Nil)))),
        )),
    )
    assert read("(+ 1 2)") == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        (r'"a\nb"', "a\nb"),
        (r'"tab\there"', "tab\there"),
        (r'"q\"uote"', 'q"uote'),
        (r'"back\\slash"', "back\\slash"),
        (r'"nul\0"', "nul\0"),
        (r'"cr\r"', "cr\r"),
        (r'"\x"', "x"),
        ('"(a)"', "(a)"),
        ('"; not a comment"', "; not a comment"),
    ]
)
def test_string_escapes(source, expected):
    assert read(source) == AtomExpr(String(expected))


def test_close_paren_inside_string_in_list():
    assert read('(print ")")') == make_list([sym("print"), AtomExpr(String(")"))])


@pytest.mark.parametrize(
    "source",
    [
        "; leading comment\n(a ; inside )\n b)",
        "(a ; it\"s\n b)",
        "(a\n\tb)   ; trailing",
    ]
)
def test_comments_are_whitespace(source):
    assert read_all(source) == [make_list([sym("a"), sym("b")])]


@pytest.mark.parametrize(
    "source",
    [
        "",             # empty string
        "    ",         # spaces only
        "; comment",    # comment only
        "\n;a\n;b\n",
    ]
)
def test_empty_programs(source):
    assert read_all(source) == []


def test_read_all_multiple_forms():
    assert read_all("1 2 (3)") == [num(1), num(2), make_list([num(3)])]


def test_iter_sexprs_is_lazy():
    forms = Reader("(a) (b) )").iter_sexprs()
    assert next(forms) == make_list([sym("a")])
    assert next(forms) == make_list([sym("b")])
    with pytest.raises(MiniLispSyntaxError):
        next(forms)


# -------------------------------
# Errors
# -------------------------------
@pytest.mark.parametrize(
    "source, message, position",
    [
        ("(+ 1 2", "unexpected end of input: expected a closing paren", (1, 7)),
        ('"abc', "unterminated string literal", (1, 1)),
        ('(a "b', "unterminated string literal", (1, 4)),
        ("1.2.3", "number in wrong format '1.2.3'", (1, 1)),
        ("(x 12abc)", "number in wrong format '12abc'", (1, 4)),
        ("1.", "number in wrong format '1.'", (1, 1)),
        (")", "unmatched closing paren", (1, 1)),
        ("(a))", "unmatched closing paren", (1, 4)),
        ("(a\n  #)", "unexpected char '#'", (2, 3)),
        ("'", "unexpected end of input", (1, 2)),
        ("(a ')", "unexpected closing paren", (1, 5)),
    ]
)
def test_parse_errors(source, message, position):
    with pytest.raises(MiniLispSyntaxError) as excinfo:
        read_all(source)
    err = excinfo.value
    assert err.msg == message
    assert err.position == position
    assert str(err) == f"{message} at {position[0]}:{position[1]}"


def test_read_rejects_trailing_forms():
    with pytest.raises(MiniLispSyntaxError):
        read("1 2")


# -------------------------------
# Round trip
# -------------------------------
@pytest.mark.parametrize(
    "source",
    [
        "(a b c)",
        "(let x 5)",
        "'(1 2.5 \"s\")",
        "((fn (a b) (+ a b)) 2 3)",
        r'"esc\n\"q\""',
        "(if nil 'yes 'no)",
        "()",
        "(0.0001 100000000000000000000)",
    ]
)
def test_parse_roundtrip(source):
    tree = read(source)
    assert read(str(tree)) == tree


ident_strat = st.from_regex(r"[a-zA-Z_+\-/*=?][a-zA-Z0-9_+\-/*=?]{0,8}", fullmatch=True).filter(
    lambda s: s != "nil"
)
number_strat = st.one_of(
    st.integers(min_value=0, max_value=10**12).map(float),
    st.floats(min_value=0, max_value=1e9, allow_infinity=False, allow_nan=False),
)
leaf_strat = st.one_of(
    ident_strat.map(sym),
    number_strat.map(num),
    st.text(max_size=20).map(lambda s: AtomExpr(String(s))),
    st.just(NIL_EXPR),
)
sexpr_strat = st.recursive(
    leaf_strat,
    lambda children: st.one_of(
        st.lists(children, max_size=4).map(make_list),
        children.map(lambda e: AtomExpr(Quote(e))),
    ),
    max_leaves=20,
)


@given(sexpr_strat)
def test_render_then_read_is_identity(tree):
    assert read(str(tree)) == tree
