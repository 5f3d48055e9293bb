"""minilisp Language Server package.

This package provides:
- A pygls-based Language Server for minilisp source files.
- A lightweight indexer that scans documents for top-level definitions and
  runs the reader to report parse errors, without evaluation.
"""

__all__ = [
    "server",
    "indexer",
]
