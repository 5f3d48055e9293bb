from minilisp.types.atom import Atom, Ident, Nil, NilType, Number, Quote, String
from minilisp.types.environment import Environment
from minilisp.types.function import Function, Lib, UserDefined
from minilisp.types.sexpr import (
    NIL_EXPR,
    AtomExpr,
    Cons,
    cons,
    datum_to_value,
    is_list,
    is_nil,
    iter_list,
    make_list,
    unwrap,
    value_to_datum,
)
