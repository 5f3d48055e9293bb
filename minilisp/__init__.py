# Core type aliases for minilisp's data model.
# Source is read into an explicit tree of immutable nodes (see minilisp.types):
# Atoms are the leaves, SExpr nodes are either a wrapped Atom or a Cons pair.
#
# Naming guidance:
# - SExpression: Use in reader/printer code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values (Atoms).
# Both aliases resolve to `Any` so annotations stay cheap at import time; the
# concrete node classes live in minilisp.types.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Syntactic forms (AtomExpr / Cons)
SExpression = Any

# Native routine type: what the standard library registers as `Lib` functions.
# Called with the live Environment and the ordered list of operands.
NativeRoutine = Callable[[Any, list], LispValue]

__version__ = "0.3.0"
