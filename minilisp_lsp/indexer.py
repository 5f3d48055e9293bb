from __future__ import annotations

"""
Lightweight indexer for minilisp files without evaluating code.

We scan for top-level forms and build an index for:
- definitions: (let name ...), (letfn name (args) ...)
- parse errors, reported by the real reader with their line/column

The definition scan is tolerant: it uses a regex tokenizer so partial or
broken buffers still produce symbols for completion and outline views.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import re

from minilisp.errors import MiniLispSyntaxError
from minilisp.reader.parser import read_all

# Simple token patterns for scanning
TOKEN_REGEX = re.compile(
    r"\s+|;.*$|\(|\)|'|\"(?:\\.|[^\"\\])*\"?|[^\s()';\"]+",
    re.MULTILINE,
)

DEFINING_FORMS = {"let": "var", "letfn": "function"}


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int
    params: Optional[List[str]] = None


@dataclass
class ParseProblem:
    message: str
    line: int  # 0-based
    col: int   # 0-based


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    problems: List[ParseProblem] = field(default_factory=list)
    form_count: int = 0


def _iter_tokens(text: str):
    for m in TOKEN_REGEX.finditer(text):
        tok = m.group(0)
        if not tok or tok.isspace() or tok.startswith(";"):
            continue
        yield tok, m.start(), m.end()


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _collect_params(tokens, j: int) -> Optional[List[str]]:
    # tokens[j] should open the parameter list; a leading quote is allowed
    if j < len(tokens) and tokens[j][0] == "'":
        j += 1
    if j >= len(tokens) or tokens[j][0] != "(":
        return None
    params = []
    j += 1
    while j < len(tokens) and tokens[j][0] != ")":
        if tokens[j][0] not in ("(", "'"):
            params.append(tokens[j][0])
        j += 1
    return params


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = list(_iter_tokens(text))

    depth = 0
    i = 0
    while i < len(tokens):
        tok, start, _ = tokens[i]
        if tok == "(":
            if depth == 0 and i + 2 < len(tokens):
                head = tokens[i + 1][0]
                if head in DEFINING_FORMS:
                    j = i + 2
                    if tokens[j][0] == "'":
                        j += 1
                    if j < len(tokens) and tokens[j][0] not in ("(", ")", "'"):
                        name, s, _ = tokens[j]
                        line, col = _position_from_offset(text, s)
                        params = _collect_params(tokens, j + 1) if head == "letfn" else None
                        idx.symbols[name] = SymbolDef(
                            name=name, kind=DEFINING_FORMS[head], line=line, col=col, params=params
                        )
            depth += 1
        elif tok == ")":
            depth = max(depth - 1, 0)
        i += 1

    try:
        idx.form_count = len(read_all(text))
    except MiniLispSyntaxError as ex:
        line, col = ex.position
        idx.problems.append(ParseProblem(message=ex.msg, line=line - 1, col=col - 1))

    return idx
