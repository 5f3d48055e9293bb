
class MiniLispError(Exception):
    """ Base class for all minilisp errors"""
    pass


class MiniLispSyntaxError(MiniLispError):
    """ Raised when the reader cannot parse the source text.

    The error keeps the source and a character offset; line and column are
    only computed when the message is rendered.
    """

    def __init__(self, msg: str, source: str = "", offset: int = 0):
        super().__init__(msg)
        self.msg = msg
        self.source = source
        self.offset = offset

    @property
    def position(self) -> tuple[int, int]:
        """1-based (line, column) of the offending character."""
        line, col = 1, 1
        for ch in self.source[: self.offset]:
            if ch == "\n":
                line += 1
                col = 1
            else:
                col += 1
        return line, col

    def __str__(self) -> str:
        line, col = self.position
        return f"{self.msg} at {line}:{col}"


class MiniLispUnboundSymbol(MiniLispError):
    """ Raised when a symbol is used before it is bound"""

    def __init__(self, name: str):
        super().__init__(f"name '{name}' was not defined")
        self.name = name


class MiniLispArityError(MiniLispError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class MiniLispTypeError(MiniLispError):
    """ Raised when the types of arguments passed to a function are incorrect"""


class MiniLispValueError(MiniLispError):
    """ Raised when a special form receives malformed operands"""


# Contract violations. These indicate a bug in a native routine or in the
# interpreter itself and are not MiniLispErrors.

class StackUnderflowError(RuntimeError):
    """ Raised when popping the shared value stack while it is empty"""


class FrameUnderflowError(RuntimeError):
    """ Raised when popping the global frame"""


class ScannerContractError(RuntimeError):
    """ Raised when merging scanners that do not share a common tail"""
