from minilisp import LispValue
from minilisp.evaluation.evaluator import evaluate0
from minilisp.evaluation.special_forms.operands import syntax_of
from minilisp.types.atom import NilType
from minilisp.types.environment import Environment


def if_form(env: Environment, args: list[LispValue]) -> LispValue:
    cond, then_branch, else_branch = args
    # nil is the only false value
    if isinstance(cond, NilType):
        return evaluate0(syntax_of(else_branch), env)
    return evaluate0(syntax_of(then_branch), env)
