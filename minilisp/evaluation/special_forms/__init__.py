"""Registry of special forms for the minilisp evaluator.

Special forms are ordinary native `Lib` functions that declare some operand
positions lazy: the evaluator hands those operands over as syntax and the
routine decides what, and when, to evaluate.

Each entry maps a name to (arity, routine, lazy operand positions).
"""

from minilisp.evaluation.special_forms.eval_form import eval_form
from minilisp.evaluation.special_forms.fn_form import fn_form, letfn_form
from minilisp.evaluation.special_forms.if_form import if_form
from minilisp.evaluation.special_forms.let_form import let_form

SPECIAL_FORMS = {
    "let": (2, let_form, {0}),
    "fn": (2, fn_form, {0, 1}),
    "letfn": (3, letfn_form, {0, 1, 2}),
    "if": (3, if_form, {1, 2}),
    "eval": (1, eval_form, set()),
}
