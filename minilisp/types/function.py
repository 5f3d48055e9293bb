"""Function values: user-defined lambdas and native library routines."""

from __future__ import annotations

from dataclasses import dataclass, field

from minilisp import NativeRoutine, SExpression
from minilisp.types.atom import Atom


class Function(Atom):
    """A callable atom. Two functions are equal only if they are the same object."""

    __slots__ = ()
    type_name = "function"

    @property
    def arity(self) -> int:
        raise NotImplementedError

    def is_lazy(self, position: int) -> bool:
        """Whether the operand at `position` is passed to the callee unevaluated."""
        return False


@dataclass(frozen=True, eq=False, slots=True)
class UserDefined(Function):
    """A function built by `fn`.

    No environment is captured: free identifiers in `body` resolve against
    whatever scopes are active when the function is called.
    """

    arg_names: tuple[str, ...]
    body: SExpression

    @property
    def arity(self) -> int:
        return len(self.arg_names)

    def __str__(self) -> str:
        return f"<fn ({' '.join(self.arg_names)})>"

    def describe(self) -> str:
        return f"user function with {self.arity} arguments"


@dataclass(frozen=True, eq=False, slots=True)
class Lib(Function):
    """A native routine registered in the global frame.

    `lazy` lists the operand positions the evaluator hands over as syntax
    instead of evaluating them; this is how special forms see their operands.
    """

    name: str
    lib_arity: int
    routine: NativeRoutine = field(repr=False)
    lazy: frozenset[int] = frozenset()

    @property
    def arity(self) -> int:
        return self.lib_arity

    def is_lazy(self, position: int) -> bool:
        return position in self.lazy

    def __str__(self) -> str:
        return f"<lib {self.name} {self.lib_arity}>"

    def describe(self) -> str:
        return f"lib function '{self.name}' with {self.lib_arity} arguments"
