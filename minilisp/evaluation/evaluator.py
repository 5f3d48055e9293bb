"""Core evaluator for the minilisp interpreter.

Evaluation is a plain recursive walk over the tree. Applications push their
operands on the Environment's value stack and let the apply engine pop them.
Operand positions a native routine declares lazy are pushed as syntax (see
minilisp.types.sexpr.datum_to_value) instead of being evaluated, which is
how `if`, `fn` and `let` get at unevaluated code.
"""

from __future__ import annotations

import logging

from minilisp import LispValue, SExpression
from minilisp.errors import MiniLispArityError, MiniLispTypeError
from minilisp.evaluation.apply import apply
from minilisp.types.atom import Ident, Quote
from minilisp.types.environment import Environment
from minilisp.types.function import Function
from minilisp.types.sexpr import AtomExpr, Cons, datum_to_value, is_nil, unwrap

logger = logging.getLogger(__name__)


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """
    Evaluate one top-level form.

    On failure the frame stack and the value stack are put back the way they
    were before the form started, then the error propagates.
    """
    frame_depth = env.depth
    stack_depth = env.stack_depth
    try:
        return evaluate0(expr, env)
    except Exception:
        if env.depth != frame_depth or env.stack_depth != stack_depth:
            logger.debug(
                "restoring environment after failed form: frames %d -> %d, stack %d -> %d",
                env.depth, frame_depth, env.stack_depth, stack_depth,
            )
        env.unwind_frames(frame_depth)
        env.truncate_stack(stack_depth)
        raise


def evaluate0(expr: SExpression, env: Environment) -> LispValue:
    """Core evaluator: a single recursive step with no state beyond `env`."""
    match expr:
        case AtomExpr(atom=Ident(name=name)):
            return env.lookup_var(name)
        case AtomExpr(atom=atom):
            # Numbers, strings, nil, functions and quotes evaluate to themselves
            return atom
        case Cons(head=head, tail=tail):
            return evaluate_call(head, tail, env)
    raise MiniLispTypeError(f"cannot evaluate {expr!r}")


def evaluate_call(head: Quote, tail: Quote, env: Environment) -> LispValue:
    fun = evaluate0(unwrap(head), env)
    if not isinstance(fun, Function):
        raise MiniLispTypeError(f"expected a function, got {fun.type_name} {fun}")

    base = env.stack_depth
    try:
        argc = push_operands(fun, unwrap(tail), env)
        if argc != fun.arity:
            raise MiniLispArityError(
                f"expected {fun.arity} arguments, but got {argc} in {fun.describe()}"
            )
    except Exception:
        # Drop whatever this call site pushed; the callee never runs
        env.truncate_stack(base)
        raise

    return apply(fun, env, evaluate0)


def push_operands(fun: Function, operands: SExpression, env: Environment) -> int:
    """Push each operand (evaluated unless lazy) and return how many were pushed."""
    argc = 0
    node = operands
    while isinstance(node, Cons):
        operand = unwrap(node.head)
        if fun.is_lazy(argc):
            value = datum_to_value(operand)
        else:
            value = evaluate0(operand, env)
        env.push_stack(value)
        argc += 1
        node = unwrap(node.tail)
    if not is_nil(node):
        raise MiniLispTypeError(f"malformed argument list ending in {node}")
    return argc
