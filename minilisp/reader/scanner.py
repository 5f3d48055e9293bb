"""Character stream used by the reader.

The scanner walks the source one character at a time and keeps track of:

- nesting depth of unescaped parentheses outside strings and comments,
- whether it is inside a string literal (with `\\` escaping one character),
- whether it is inside a `;` comment.

A scanner treats an unescaped `)` that would take its depth below the depth
it started with as the end of the stream. The reader uses this to parse the
inside of a list with a child scanner over the same text, then merges the
child's position back into the parent.
"""

from __future__ import annotations

from typing import Optional

from minilisp.errors import ScannerContractError


class ParenScanner:
    __slots__ = ("source", "pos", "depth", "in_string", "in_comment", "escaped")

    def __init__(self, source: str, pos: int = 0):
        self.source = source
        self.pos = pos
        self.depth = 0
        self.in_string = False
        self.in_comment = False
        self.escaped = False

    @property
    def offset(self) -> int:
        return self.pos

    @property
    def at_end(self) -> bool:
        """True only at the real end of the source, not at a closing paren."""
        return self.pos >= len(self.source)

    def _plain(self) -> bool:
        return not (self.in_string or self.in_comment or self.escaped)

    def peek(self) -> Optional[str]:
        if self.pos >= len(self.source):
            return None
        ch = self.source[self.pos]
        if ch == ")" and self.depth == 0 and self._plain():
            return None
        return ch

    def advance(self) -> Optional[str]:
        ch = self.peek()
        if ch is None:
            return None
        self.pos += 1

        if self.escaped:
            self.escaped = False
        elif self.in_string:
            if ch == "\\":
                self.escaped = True
            elif ch == '"':
                self.in_string = False
        elif self.in_comment:
            if ch == "\n":
                self.in_comment = False
        elif ch == '"':
            self.in_string = True
        elif ch == ";":
            self.in_comment = True
        elif ch == "(":
            self.depth += 1
        elif ch == ")":
            self.depth -= 1
        return ch

    def rest(self) -> str:
        return self.source[self.pos:]

    def sub_scanner(self) -> ParenScanner:
        """A child scanner over the same text, starting here at depth zero."""
        child = ParenScanner(self.source, self.pos)
        child.in_string = self.in_string
        child.in_comment = self.in_comment
        child.escaped = self.escaped
        return child

    def merge(self, child: ParenScanner) -> None:
        """Adopt the remaining position and depth of a child scanner."""
        if child.source != self.source:
            raise ScannerContractError("scanners must share the same source text")
        if child.pos < self.pos:
            raise ScannerContractError("a child scanner cannot end before its parent")
        self.pos = child.pos
        self.depth += child.depth
        self.in_string = child.in_string
        self.in_comment = child.in_comment
        self.escaped = child.escaped

    def __repr__(self) -> str:
        return f"<ParenScanner pos={self.pos} depth={self.depth}>"
