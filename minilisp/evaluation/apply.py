"""Application engine for minilisp.

Centralizes how a Function consumes the operands its call site pushed on the
Environment's value stack:

- UserDefined: pop `arity` values (push order), bind them to the parameter
  names in a fresh frame, evaluate the body, and pop the frame on every path.
- Lib: pop `arity` values into an explicit ordered list and hand it to the
  native routine together with the live Environment.

Keeping this in one place keeps the stack discipline (N pushes, N pops) in
one function instead of in every native routine.
"""

from __future__ import annotations

from typing import Callable

from minilisp import LispValue, SExpression
from minilisp.errors import MiniLispTypeError
from minilisp.types.environment import Environment
from minilisp.types.function import Function, Lib, UserDefined

EvaluatorFn = Callable[[SExpression, Environment], LispValue]


def apply_user_defined(
    fn: UserDefined, env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    args = env.pop_args(fn.arity)
    with env.frame():
        for name, value in zip(fn.arg_names, args):
            env.bind_var(name, value)
        return evaluate_fn(fn.body, env)


def apply_lib(fn: Lib, env: Environment) -> LispValue:
    args = env.pop_args(fn.arity)
    return fn.routine(env, args)


def apply(fn: Function, env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """Invoke `fn` on the `fn.arity` operands on top of the value stack."""
    if isinstance(fn, UserDefined):
        return apply_user_defined(fn, env, evaluate_fn)
    elif isinstance(fn, Lib):
        return apply_lib(fn, env)
    else:
        raise MiniLispTypeError(f"cannot apply non-function {fn}")
