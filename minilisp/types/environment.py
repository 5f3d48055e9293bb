"""Runtime environment for minilisp.

The Environment is a stack of scope frames (innermost last), each a mapping
from names to evaluated values, plus one shared LIFO value stack. The value
stack is the channel through which a call site hands its operands to the
routine it invokes: an N-ary call pushes exactly N values and the callee
side pops exactly N.
"""

from __future__ import annotations

from contextlib import contextmanager
from io import StringIO
from typing import Iterable, Iterator

from minilisp import LispValue, NativeRoutine
from minilisp.errors import (
    FrameUnderflowError,
    MiniLispUnboundSymbol,
    StackUnderflowError,
)
from minilisp.types.atom import Ident, Quote
from minilisp.types.function import Lib
from minilisp.types.sexpr import AtomExpr


class Environment:
    """Scope frames plus the shared value stack."""

    __slots__ = ("frames", "stack", "true_value")

    def __init__(self, true_name: str = "t"):
        # frames[0] is the global frame; it is never popped
        self.frames: list[dict[str, LispValue]] = [{}]
        self.stack: list[LispValue] = []
        # Canonical true value returned by predicates such as `eq`
        self.true_value: LispValue = Quote(AtomExpr(Ident(true_name)))

    # --- Scopes ---
    @property
    def depth(self) -> int:
        return len(self.frames)

    def push_frame(self) -> None:
        self.frames.append({})

    def pop_frame(self) -> None:
        if len(self.frames) == 1:
            raise FrameUnderflowError("cannot pop the global frame")
        self.frames.pop()

    @contextmanager
    def frame(self) -> Iterator[dict[str, LispValue]]:
        """Enter a fresh scope; it is popped on return and on error alike."""
        self.push_frame()
        try:
            yield self.frames[-1]
        finally:
            self.pop_frame()

    def unwind_frames(self, depth: int) -> None:
        """Drop frames until only `depth` remain."""
        del self.frames[max(depth, 1):]

    def bind_var(self, name: str, value: LispValue) -> None:
        """Bind `name` in the innermost frame, overwriting any previous binding there."""
        self.frames[-1][name] = value

    def lookup_var(self, name: str) -> LispValue:
        """Look up `name` from the innermost frame outwards.

        Raises MiniLispUnboundSymbol if no frame binds it.
        """
        for scope in reversed(self.frames):
            if name in scope:
                return scope[name]
        raise MiniLispUnboundSymbol(name)

    def is_bound(self, name: str) -> bool:
        return any(name in scope for scope in self.frames)

    def update(self, mapping: dict[str, LispValue]) -> None:
        """Bulk-bind a mapping of name -> value in the global frame."""
        self.frames[0].update(mapping)

    # --- Value stack ---
    @property
    def stack_depth(self) -> int:
        return len(self.stack)

    def push_stack(self, value: LispValue) -> None:
        self.stack.append(value)

    def pop_stack(self) -> LispValue:
        if not self.stack:
            raise StackUnderflowError("pop from an empty value stack")
        return self.stack.pop()

    def pop_args(self, count: int) -> list[LispValue]:
        """Pop `count` values and return them in the order they were pushed."""
        if count > len(self.stack):
            raise StackUnderflowError(
                f"expected {count} values on the stack, found {len(self.stack)}"
            )
        if count == 0:
            return []
        args = self.stack[-count:]
        del self.stack[-count:]
        return args

    def truncate_stack(self, depth: int) -> None:
        """Drop values pushed after the stack held `depth` values."""
        del self.stack[depth:]

    # --- Registration ---
    def register_external_fun(
        self,
        name: str,
        arity: int,
        routine: NativeRoutine,
        lazy: Iterable[int] = (),
    ) -> Lib:
        """Install a native routine in the global frame."""
        fun = Lib(name, arity, routine, frozenset(lazy))
        self.frames[0][name] = fun
        return fun

    def __str__(self) -> str:
        with StringIO() as buffer:
            for i, scope in enumerate(self.frames):
                if i:
                    buffer.write(" -> ")
                buffer.write("{")
                buffer.write(", ".join(f"{k}: {v}" for k, v in scope.items()))
                buffer.write("}")
            buffer.write(f" stack={len(self.stack)}")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Environment frames={len(self.frames)} stack={len(self.stack)}>"
