from minilisp import LispValue
from minilisp.errors import MiniLispTypeError
from minilisp.evaluation.evaluator import evaluate0
from minilisp.types.atom import Quote
from minilisp.types.environment import Environment


def eval_form(env: Environment, args: list[LispValue]) -> LispValue:
    (expr,) = args
    if not isinstance(expr, Quote):
        raise MiniLispTypeError(f"eval: expected a quoted expression, got {expr.type_name} {expr}")
    return evaluate0(expr.expr, env)
