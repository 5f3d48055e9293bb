"""Structural dump of values and trees, used by `dbg`.

Unlike the display form (`str(value)`), the dump shows every node kind, so
quoting levels and list cells are visible:

    (dbg '(a 1)) writes

    Quote
      Cons
        head: Quote
          AtomExpr
            Ident a
        tail: Quote
          Cons
            ...
"""

from __future__ import annotations

from io import StringIO

from minilisp.types.atom import Ident, NilType, Number, Quote, String
from minilisp.types.function import Lib, UserDefined
from minilisp.types.sexpr import AtomExpr, Cons

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "indent": 2,
    "max_depth": 64,
}


def _write(buffer: StringIO, obj, depth: int, label: str, options: dict) -> None:
    pad = " " * (options["indent"] * depth)
    if depth > options["max_depth"]:
        buffer.write(f"{pad}{label}...\n")
        return

    match obj:
        case String():
            buffer.write(f"{pad}{label}String {obj}\n")
        case Number():
            buffer.write(f"{pad}{label}Number {obj}\n")
        case Ident(name=name):
            buffer.write(f"{pad}{label}Ident {name}\n")
        case NilType():
            buffer.write(f"{pad}{label}Nil\n")
        case UserDefined(arg_names=arg_names, body=body):
            buffer.write(f"{pad}{label}UserDefined ({' '.join(arg_names)})\n")
            _write(buffer, body, depth + 1, "body: ", options)
        case Lib():
            buffer.write(f"{pad}{label}Lib {obj.name}/{obj.arity}\n")
        case Quote(expr=expr):
            buffer.write(f"{pad}{label}Quote\n")
            _write(buffer, expr, depth + 1, "", options)
        case AtomExpr(atom=atom):
            buffer.write(f"{pad}{label}AtomExpr\n")
            _write(buffer, atom, depth + 1, "", options)
        case Cons(head=head, tail=tail):
            buffer.write(f"{pad}{label}Cons\n")
            _write(buffer, head, depth + 1, "head: ", options)
            _write(buffer, tail, depth + 1, "tail: ", options)
        case _:
            buffer.write(f"{pad}{label}{obj!r}\n")


def pformat(obj, options: dict = DEFAULT_OPTIONS) -> str:
    with StringIO() as buffer:
        _write(buffer, obj, 0, "", {**DEFAULT_OPTIONS, **options})
        return buffer.getvalue().rstrip("\n")
