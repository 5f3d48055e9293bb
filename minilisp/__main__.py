"""Command-line driver: evaluate a minilisp source file.

    minilisp program.lisp
    python -m minilisp program.lisp
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from minilisp import config
from minilisp.errors import MiniLispError
from minilisp.interpreter import Interpreter

logger = logging.getLogger("minilisp")


def _get_log_level() -> int:
    """
    Determine log level from LOGLEVEL environment variable.
    Defaults to WARNING if not set.
    """
    loglevel_env = os.getenv("LOGLEVEL", "").upper()
    if loglevel_env:
        level = getattr(logging, loglevel_env, None)
        if isinstance(level, int):
            return level

    # Default to WARNING if not set
    return logging.WARNING


def main_with_args(file: Path, print_results: bool = False) -> int:
    # Configure logging from LOGLEVEL environment variable
    logging.basicConfig(
        level=_get_log_level(),
        format='%(message)s',
        stream=sys.stderr
    )

    try:
        source = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as ex:
        logger.error(f"Error: cannot read {file}: {ex}")
        return 1

    try:
        recursion_limit = config.get_recursion_limit()
    except ValueError as ex:
        logger.error(f"Error: {ex}")
        return 1
    sys.setrecursionlimit(max(sys.getrecursionlimit(), recursion_limit))

    try:
        interp = Interpreter(prelude='auto')
    except (OSError, MiniLispError) as ex:
        logger.error(f"Error: cannot load prelude: {ex}")
        return 1

    try:
        outcome = interp.run(source)
    except RecursionError:
        logger.error("Error: maximum recursion depth exceeded")
        return 1

    if print_results:
        for value in outcome.results:
            print(value)

    if outcome.error is not None:
        logger.error(str(outcome.error))
        return 0 if config.lenient_exit() else 1
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="minilisp",
        description="Evaluate a minilisp program, one top-level form at a time",
    )
    parser.add_argument(
        "file",
        type=Path,
        help="Path to the source file",
    )
    parser.add_argument(
        "-p", "--print-results",
        action="store_true",
        help="Print the value of every top-level form",
    )
    args = parser.parse_args(argv)
    return main_with_args(**vars(args))


if __name__ == "__main__":
    sys.exit(main())
