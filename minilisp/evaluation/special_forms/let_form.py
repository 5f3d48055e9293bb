from minilisp import LispValue
from minilisp.evaluation.special_forms.operands import symbol_name
from minilisp.types.environment import Environment


def let_form(env: Environment, args: list[LispValue]) -> LispValue:
    """
    (let name value)
    Binds in the innermost frame, so a `let` inside a function body is gone
    once the call returns. Returns the bound value.
    """
    name, value = args
    env.bind_var(symbol_name(name, "let"), value)
    return value
