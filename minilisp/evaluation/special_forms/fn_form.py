from minilisp import LispValue
from minilisp.evaluation.special_forms.operands import (
    is_quoted,
    parameter_names,
    strip_quote,
    symbol_name,
    syntax_of,
)
from minilisp.types.environment import Environment
from minilisp.types.function import UserDefined


def make_function(args: LispValue, body: LispValue, form: str) -> UserDefined:
    """
    Build a UserDefined from a parameter list and a body.

    (fn (a b) (+ a b)) takes both operands as written. In the quoted style,
    (fn '(a b) '(+ a b)), the quote on the parameter list marks the whole form
    as quoted, so one quote is stripped from the body as well.
    """
    args_expr = syntax_of(args)
    body_expr = syntax_of(body)
    if is_quoted(args_expr):
        args_expr = strip_quote(args_expr)
        body_expr = strip_quote(body_expr)
    return UserDefined(parameter_names(args_expr, form), body_expr)


def fn_form(env: Environment, args: list[LispValue]) -> LispValue:
    """(fn (params...) body)"""
    params, body = args
    return make_function(params, body, "fn")


def letfn_form(env: Environment, args: list[LispValue]) -> LispValue:
    """(letfn name (params...) body): define a named function in the current scope."""
    name, params, body = args
    fn = make_function(params, body, "letfn")
    env.bind_var(symbol_name(name, "letfn"), fn)
    return fn
